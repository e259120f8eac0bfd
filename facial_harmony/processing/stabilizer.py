"""여러 프레임의 랜드마크를 중앙값으로 안정화 (카메라 입력용)"""

from typing import Iterable, Sequence

import numpy as np

from ..core.face_detector import LandmarkDetector
from ..models import as_landmark_array
from ..utils.exceptions import DetectionFailure, LandmarkTopologyError
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


def median_landmarks(frames: Sequence[np.ndarray]) -> np.ndarray:
    """
    좌표별 중앙값 랜드마크

    짝수 개 프레임이면 정렬된 값의 n // 2 번째 (상위 중앙값)를 사용한다.

    Args:
        frames: 같은 토폴로지의 (N, 2) 랜드마크 배열 리스트

    Returns:
        (N, 2) 읽기 전용 배열
    """
    if not frames:
        raise ValueError("At least one landmark frame is required")

    counts = {len(f) for f in frames}
    if len(counts) != 1:
        raise LandmarkTopologyError(f"Landmark frames disagree on point count: {sorted(counts)}")

    stacked = np.stack([np.asarray(f, dtype=np.float64) for f in frames])  # (F, N, 2)
    ordered = np.sort(stacked, axis=0)
    median = ordered[len(frames) // 2].copy()
    median.flags.writeable = False
    return median


def estimate_stable_landmarks(
    detector: LandmarkDetector,
    frames: Iterable[np.ndarray]
) -> np.ndarray:
    """
    프레임 시퀀스에서 검출 후 중앙값 랜드마크 반환

    얼굴이 검출되지 않은 프레임은 건너뛴다.

    Raises:
        DetectionFailure: 어떤 프레임에서도 얼굴이 검출되지 않은 경우
    """
    detected = []
    total = 0
    for frame in frames:
        total += 1
        points = detector.detect(frame)
        if points is None or len(points) == 0:
            continue
        detected.append(as_landmark_array(points))

    if not detected:
        raise DetectionFailure(f"No face detected in any of {total} frames")

    logger.info(f"Stabilized landmarks from {len(detected)}/{total} frames")
    return median_landmarks(detected)
