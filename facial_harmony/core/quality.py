"""
Quality Gate
원본 이미지의 선명도(블러)와 노출을 검사하는 모듈

검출 전에 한 번만 계산되며 기본적으로는 경고만 남긴다.
QualityThresholds.enforce가 True일 때만 분석을 중단한다.
"""

import cv2
import numpy as np

from ..config.settings import QualityThresholds
from ..models import QualityRecord
from ..utils.exceptions import InvalidImageError, QualityGateError
from ..utils.logging_config import get_logger
from ..utils.validators import validate_image

logger = get_logger(__name__)

# 채널 순서별 red 채널 인덱스
_RED_CHANNEL = {'BGR': 2, 'BGRA': 2, 'RGB': 0, 'RGBA': 0}


def _analysis_channel(pixels: np.ndarray, channel: str, color_order: str) -> np.ndarray:
    """분석에 사용할 단일 채널을 float64로 추출"""
    if pixels.ndim == 2:
        return pixels.astype(np.float64)

    if pixels.shape[2] == 1:
        return pixels[:, :, 0].astype(np.float64)

    order = color_order.upper()
    if order not in _RED_CHANNEL:
        raise InvalidImageError(f"Unsupported color order '{color_order}'")

    if channel == 'red':
        return pixels[:, :, _RED_CHANNEL[order]].astype(np.float64)

    # luminance: OpenCV 변환 코드로 그레이스케일 계산
    codes = {
        'BGR': cv2.COLOR_BGR2GRAY,
        'BGRA': cv2.COLOR_BGRA2GRAY,
        'RGB': cv2.COLOR_RGB2GRAY,
        'RGBA': cv2.COLOR_RGBA2GRAY,
    }
    if pixels.shape[2] == 4 and order in ('BGR', 'RGB'):
        order += 'A'
    elif pixels.shape[2] == 3 and order in ('BGRA', 'RGBA'):
        order = order[:3]
    gray = cv2.cvtColor(np.ascontiguousarray(pixels), codes[order])
    return gray.astype(np.float64)


def gradient_statistics(channel: np.ndarray):
    """
    내부 픽셀의 |수평 차분| + |수직 차분| 분포의 (평균, 모분산)

    각 내부 픽셀 (y, x)에 대해 p(y,x)-p(y,x-1), p(y,x)-p(y-1,x)를 사용.
    내부 픽셀이 없으면 (0, 0).
    """
    h, w = channel.shape
    if h < 3 or w < 3:
        return 0.0, 0.0

    interior = channel[1:h - 1, 1:w - 1]
    dx = interior - channel[1:h - 1, 0:w - 2]
    dy = interior - channel[0:h - 2, 1:w - 1]
    grad = np.abs(dx) + np.abs(dy)

    mean = float(grad.mean())
    variance = float(grad.var())
    return mean, variance


def assess_quality(
    pixels: np.ndarray,
    thresholds: QualityThresholds = None,
    color_order: str = 'BGR'
) -> QualityRecord:
    """
    선명도 및 노출 평가

    Args:
        pixels: 그레이스케일 (H, W) 또는 컬러 (H, W, 3|4) 이미지 (8-bit 스케일)
        thresholds: 품질 임계값 (None이면 기본값)
        color_order: 컬러 이미지 채널 순서 ('BGR', 'RGB', 'BGRA', 'RGBA')

    Returns:
        QualityRecord
    """
    validate_image(pixels)
    thresholds = thresholds or QualityThresholds()

    channel = _analysis_channel(pixels, thresholds.channel, color_order)
    sharpness_mean, sharpness_variance = gradient_statistics(channel)
    luminance = float(channel.mean())

    record = QualityRecord(
        sharpness_mean=sharpness_mean,
        sharpness_variance=sharpness_variance,
        luminance=luminance,
        blur_ok=sharpness_variance > thresholds.blur_var_min,
        exposure_ok=thresholds.luminance_min < luminance < thresholds.luminance_max,
    )

    logger.debug(
        f"Quality: gradient var={sharpness_variance:.1f}, luminance={luminance:.1f}, "
        f"blur_ok={record.blur_ok}, exposure_ok={record.exposure_ok}"
    )
    return record


def enforce_quality_gate(record: QualityRecord, thresholds: QualityThresholds) -> None:
    """
    품질 정책 적용

    기본(advisory) 모드에서는 경고 로그만 남기고,
    enforce 모드에서는 QualityGateError를 발생시킨다.
    """
    if record.passed:
        return

    message = "; ".join(record.warnings())
    if thresholds.enforce:
        logger.error(f"Quality gate rejected image: {message}")
        raise QualityGateError(message, record=record)

    logger.warning(f"Quality gate warning: {message}")
