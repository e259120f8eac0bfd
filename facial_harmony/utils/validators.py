"""입력 검증 유틸리티 함수"""

import numpy as np
from .exceptions import InvalidImageError, LandmarkTopologyError

# 그레이스케일(1), 컬러(3), 알파 포함(4)
SUPPORTED_CHANNELS = (1, 3, 4)


def validate_image(image: np.ndarray) -> None:
    """
    분석 입력 이미지 검증 (품질 검사, 정렬, 검출 공통)

    Raises:
        InvalidImageError: ndarray가 아니거나, 비어 있거나, (H, W[, C]) 형태가 아닌 경우
    """
    if not isinstance(image, np.ndarray):
        raise InvalidImageError(f"Image must be a numpy.ndarray, got {type(image).__name__}")

    if image.ndim not in (2, 3) or image.size == 0:
        raise InvalidImageError(f"Image must be a non-empty (H, W[, C]) array, got shape {image.shape}")

    if image.ndim == 3 and image.shape[2] not in SUPPORTED_CHANNELS:
        raise InvalidImageError(
            f"Unsupported channel count {image.shape[2]} (expected one of {SUPPORTED_CHANNELS})"
        )


def validate_landmark_index(index: int, num_landmarks: int) -> None:
    """랜드마크 인덱스 검증"""
    if not 0 <= index < num_landmarks:
        raise LandmarkTopologyError(
            f"Landmark index must be between 0 and {num_landmarks - 1}, got {index}"
        )


def validate_landmarks(landmarks: np.ndarray, expected_count: int) -> None:
    """
    랜드마크 배열 형태 검증

    Args:
        landmarks: (N, 2) 정규화 좌표 배열
        expected_count: 검출기 토폴로지가 보장하는 랜드마크 개수

    Raises:
        LandmarkTopologyError: 개수 또는 형태가 맞지 않는 경우
    """
    if landmarks.ndim != 2 or landmarks.shape[1] != 2:
        raise LandmarkTopologyError(f"Landmarks must have shape (N, 2), got {landmarks.shape}")

    if landmarks.shape[0] != expected_count:
        raise LandmarkTopologyError(
            f"Expected {expected_count} landmarks, got {landmarks.shape[0]}"
        )

    if not np.all(np.isfinite(landmarks)):
        raise LandmarkTopologyError("Landmarks contain NaN or infinite coordinates")
