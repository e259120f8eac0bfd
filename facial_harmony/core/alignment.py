"""
Alignment & Crop
눈 사이 선이 수평이 되도록 이미지를 회전하고 얼굴 중심으로 크롭

정렬 후에는 반드시 랜드마크 검출을 다시 수행해야 한다.
회전/크롭 전의 랜드마크 위치를 재사용하지 않는다.
"""

import math
from typing import Sequence, Tuple

import cv2
import numpy as np

from ..config.constants import MEASUREMENT_LANDMARKS
from ..config.settings import CropSettings
from ..utils.exceptions import AlignmentError
from ..utils.logging_config import get_logger
from ..utils.validators import validate_image
from .geometry import distance, line_angle, midpoint, project

logger = get_logger(__name__)


def eye_points_px(landmarks: np.ndarray, width: int, height: int) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """정렬 기준이 되는 두 눈 랜드마크 (133, 362)의 픽셀 좌표"""
    eye_left = project(MEASUREMENT_LANDMARKS['eye_left'], width, height, landmarks)
    eye_right = project(MEASUREMENT_LANDMARKS['eye_right'], width, height, landmarks)
    return eye_left, eye_right


def rotation_matrix(image_shape: Tuple[int, ...], angle_rad: float) -> np.ndarray:
    """
    이미지 중심 기준으로 -angle 만큼 회전하는 2x3 affine 행렬

    cv2.getRotationMatrix2D의 양의 각도는 반시계 방향(화면 좌표 기준)이므로
    atan2(dy, dx) 각도를 그대로 넘기면 눈 벡터가 수평으로 돌아온다.
    """
    h, w = image_shape[:2]
    center = (w / 2.0, h / 2.0)
    return cv2.getRotationMatrix2D(center, math.degrees(angle_rad), 1.0)


def _transform_point(matrix: np.ndarray, point: Sequence[float]) -> Tuple[float, float]:
    x, y = point
    tx = matrix[0, 0] * x + matrix[0, 1] * y + matrix[0, 2]
    ty = matrix[1, 0] * x + matrix[1, 1] * y + matrix[1, 2]
    return float(tx), float(ty)


def crop_box(
    center: Sequence[float],
    eye_distance: float,
    image_width: int,
    image_height: int,
    crop: CropSettings
) -> Tuple[float, float, float, float]:
    """
    크롭 영역 계산 (x, y, w, h)

    너비 = width_multiplier * 눈 사이 거리, 높이 = 너비 * height_multiplier,
    상단은 중심에서 너비 * vertical_offset 위. 이미지 범위 안으로 제한.
    """
    size = eye_distance * crop.width_multiplier
    box_height = size * crop.height_multiplier
    cx, cy = center

    x = max(0.0, min(cx - size / 2.0, image_width - size))
    y = max(0.0, min(cy - size * crop.vertical_offset, image_height - box_height))
    bw = min(image_width - x, size)
    bh = min(image_height - y, box_height)
    return x, y, bw, bh


def align_and_crop(
    image: np.ndarray,
    eye_left_px: Sequence[float],
    eye_right_px: Sequence[float],
    crop: CropSettings = None
) -> np.ndarray:
    """
    눈 기준 회전 정렬 후 얼굴 중심 크롭

    Args:
        image: 원본 이미지 (H, W[, C])
        eye_left_px: 왼쪽 눈 픽셀 좌표 (원본 프레임)
        eye_right_px: 오른쪽 눈 픽셀 좌표 (원본 프레임)
        crop: 크롭 설정 (None이면 기본값)

    Returns:
        출력 너비로 리샘플링된 정렬 이미지

    Raises:
        AlignmentError: 눈 사이 거리가 0이거나 크롭 영역이 비어 있는 경우
    """
    validate_image(image)
    crop = crop or CropSettings()

    eye_dist = distance(eye_left_px, eye_right_px)
    if eye_dist <= 0:
        raise AlignmentError("Inter-ocular distance is zero; cannot align face")

    h, w = image.shape[:2]
    angle = line_angle(eye_left_px, eye_right_px)
    matrix = rotation_matrix(image.shape, angle)
    rotated = cv2.warpAffine(image, matrix, (w, h), flags=cv2.INTER_LINEAR)

    # 회전된 프레임에서의 눈 중점
    center = _transform_point(matrix, midpoint(eye_left_px, eye_right_px))

    x, y, bw, bh = crop_box(center, eye_dist, w, h, crop)
    x0, y0 = int(round(x)), int(round(y))
    x1, y1 = int(round(x + bw)), int(round(y + bh))
    if x1 - x0 < 1 or y1 - y0 < 1:
        raise AlignmentError(f"Empty crop region ({x:.1f}, {y:.1f}, {bw:.1f}, {bh:.1f})")

    region = rotated[y0:y1, x0:x1]
    out_w = crop.output_width
    out_h = max(1, int(round(out_w * (bh / bw))))
    aligned = cv2.resize(region, (out_w, out_h), interpolation=cv2.INTER_LINEAR)

    logger.debug(
        f"Aligned face: angle={math.degrees(angle):.2f}deg, crop=({x0},{y0},{x1 - x0},{y1 - y0}), "
        f"output={out_w}x{out_h}"
    )
    return aligned
