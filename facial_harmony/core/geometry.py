"""얼굴 기하학 계산 유틸리티"""

import math
from typing import Sequence, Tuple

import numpy as np

from ..utils.validators import validate_landmark_index

Point = Tuple[float, float]


def distance(p1: Sequence[float], p2: Sequence[float]) -> float:
    """
    두 점 사이의 유클리드 거리

    Args:
        p1, p2: (x, y) 좌표

    Returns:
        거리 (일치하는 점이면 0)
    """
    return math.hypot(p1[0] - p2[0], p1[1] - p2[1])


def project(index: int, width: float, height: float, landmarks: np.ndarray) -> Point:
    """
    정규화 좌표를 픽셀 좌표로 변환

    Args:
        index: 랜드마크 인덱스
        width: 프레임 너비 (픽셀)
        height: 프레임 높이 (픽셀)
        landmarks: (N, 2) 정규화 좌표 배열

    Returns:
        (x_pixel, y_pixel)

    Raises:
        LandmarkTopologyError: 인덱스가 범위를 벗어난 경우 (호출 계약 위반)
    """
    validate_landmark_index(index, len(landmarks))
    return float(landmarks[index][0]) * width, float(landmarks[index][1]) * height


def midpoint(p1: Sequence[float], p2: Sequence[float]) -> Point:
    """두 점의 중점"""
    return (p1[0] + p2[0]) / 2.0, (p1[1] + p2[1]) / 2.0


def line_angle(p1: Sequence[float], p2: Sequence[float]) -> float:
    """p1 → p2 벡터의 수평선 대비 각도 (라디안, atan2(dy, dx))"""
    return math.atan2(p2[1] - p1[1], p2[0] - p1[0])
