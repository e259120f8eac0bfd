"""정렬 프레임에서 6개 거리와 5개 비율 측정"""

from typing import Tuple

import numpy as np

from ..config.constants import MEASUREMENT_LANDMARKS as IDX
from ..config.settings import RatioTargets
from ..core.geometry import distance, project
from ..models import MeasurementSet, RatioEntry, RatioSet


def safe_ratio(numerator: float, denominator: float) -> float:
    """분모가 0이면 0 (퇴화 기하)"""
    return numerator / denominator if denominator > 0 else 0.0


def relative_error(value: float, target: float) -> float:
    """|value - target| / target, 목표가 0이면 1"""
    return abs(value - target) / target if target > 0 else 1.0


def measure_distances(width: float, height: float, landmarks: np.ndarray) -> MeasurementSet:
    """
    주요 랜드마크를 픽셀 좌표로 투영해 6개 거리 계산

    Args:
        width: 현재(정렬) 프레임 너비
        height: 현재(정렬) 프레임 높이
        landmarks: 같은 프레임 기준 (N, 2) 정규화 좌표
    """
    def px(name: str):
        return project(IDX[name], width, height, landmarks)

    return MeasurementSet(
        face_length=distance(px('forehead_top'), px('chin_bottom')),
        face_width=distance(px('face_left'), px('face_right')),
        eye_distance=distance(px('eye_left'), px('eye_right')),
        mouth_width=distance(px('mouth_left'), px('mouth_right')),
        nose_to_chin=distance(px('nose_tip'), px('chin_bottom')),
        lip_height=distance(px('lip_upper'), px('lip_lower')),
    )


def compute_ratios(m: MeasurementSet, targets: RatioTargets) -> RatioSet:
    """측정값으로 5개 비율 계산 후 목표값과 비교"""
    measured = [
        ('face_length_to_width', safe_ratio(m.face_length, m.face_width)),
        ('eye_distance_to_mouth_width', safe_ratio(m.eye_distance, m.mouth_width)),
        ('eye_distance_to_face_width', safe_ratio(m.eye_distance, m.face_width)),
        ('nose_chin_to_face_length', safe_ratio(m.nose_to_chin, m.face_length)),
        ('lip_height_to_mouth_width', safe_ratio(m.lip_height, m.mouth_width)),
    ]
    target_map = targets.as_dict()

    entries = []
    for name, value in measured:
        target = target_map[name]
        entries.append(RatioEntry(
            name=name,
            measured=value,
            target=target,
            relative_error=relative_error(value, target),
        ))
    return RatioSet(entries=tuple(entries))


def measure(
    width: float,
    height: float,
    landmarks: np.ndarray,
    targets: RatioTargets = None
) -> Tuple[MeasurementSet, RatioSet]:
    """
    측정 모듈 진입점 (순수 함수)

    Returns:
        (MeasurementSet, RatioSet)
    """
    measurements = measure_distances(width, height, landmarks)
    return measurements, compute_ratios(measurements, targets or RatioTargets())
