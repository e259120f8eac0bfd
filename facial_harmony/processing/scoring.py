"""
Scoring Module
비율/랜드마크로부터 Symmetry, Golden, Harmony, Overall, Originality 점수 계산

모든 함수는 상태가 없는 순수 함수다. 엔진 전역 상태를 읽거나 쓰지 않으므로
부트스트랩에서 반복 호출하거나 병렬로 실행해도 안전하다.
"""

import math
from typing import Sequence, Tuple

import numpy as np

from ..config.constants import SYMMETRY_PAIRS
from ..config.settings import (
    EyeSpacingBands,
    MethodologyConfig,
)
from ..models import HarmonyIndices, RatioSet, ScoreSet, ScoringResult
from ..utils.validators import validate_landmark_index
from .measurement import measure


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def symmetry_score(
    landmarks: np.ndarray,
    pairs: Sequence[Tuple[int, int]] = SYMMETRY_PAIRS,
    scale: float = 1000.0
) -> float:
    """
    좌우 대칭 점수 (0-100)

    각 쌍 (i, j)에 대해 |x_i - (1 - x_j)|: x=0.5 세로축 기준 거울상과의 잔차.
    평균 잔차 d에 대해 max(0, 100 - scale * d).
    """
    pairs = np.asarray(pairs, dtype=np.intp)
    validate_landmark_index(int(pairs.max()), len(landmarks))
    xs = landmarks[:, 0]
    residuals = np.abs(xs[pairs[:, 0]] - (1.0 - xs[pairs[:, 1]]))
    mean_deviation = float(residuals.mean())
    return max(0.0, 100.0 - scale * mean_deviation)


def golden_score(ratio_set: RatioSet, decay: float = 5.0) -> float:
    """
    황금비 점수: 100 * exp(-decay * 평균 상대오차)

    목표와 완전히 일치하면 100, 모든 비율이 0이면 100 * exp(-decay).
    """
    errors = ratio_set.relative_errors()
    mean_error = sum(errors) / len(errors)
    return 100.0 * math.exp(-decay * mean_error)


def eye_spacing_score(face_width: float, eye_distance: float, bands: EyeSpacingBands) -> Tuple[float, float]:
    """
    눈 간격 하위 점수 (3단계 계단 함수)

    Returns:
        (eye_distance / face_width 비율, 점수)
        얼굴 너비가 0이면 비율 0, degenerate_score
    """
    if face_width <= 0:
        return 0.0, bands.degenerate_score

    ratio = eye_distance / face_width
    if bands.ideal_min < ratio < bands.ideal_max:
        return ratio, bands.ideal_score
    if ratio <= bands.low or ratio >= bands.high:
        return ratio, bands.far_score
    return ratio, bands.near_score


def harmony_and_indices(
    symmetry: float,
    golden: float,
    face_width: float,
    eye_distance: float,
    config: MethodologyConfig = None
) -> HarmonyIndices:
    """
    조화(harmony), 종합(overall), 독창성(originality) 지수 계산

    Args:
        symmetry: 대칭 점수 (0-100)
        golden: 황금비 점수 (0-100)
        face_width: 얼굴 너비 (픽셀)
        eye_distance: 눈 사이 거리 (픽셀)
        config: 방법론 설정

    Returns:
        HarmonyIndices
    """
    config = config or MethodologyConfig()
    hw = config.harmony
    ow = config.overall
    orig = config.originality

    ratio, eye_score = eye_spacing_score(face_width, eye_distance, config.eye_spacing)

    harmony = clamp(
        hw.symmetry_weight * symmetry + hw.golden_weight * golden + hw.eye_spacing_weight * eye_score,
        hw.min_score, hw.max_score
    )

    weighted = (ow.symmetry_weight * symmetry + ow.golden_weight * golden + ow.harmony_weight * harmony) / 100.0
    # 음수 밑의 비정수 거듭제곱 방지
    scaled = max(0.0, weighted) ** ow.exponent
    overall = clamp(ow.offset + ow.span * scaled, ow.min_score, ow.max_score)

    spread = (
        orig.symmetry_weight * abs(orig.symmetry_pivot - symmetry) / orig.symmetry_pivot
        + orig.golden_weight * abs(orig.golden_pivot - golden) / orig.golden_pivot
        + orig.harmony_weight * abs(orig.harmony_pivot - harmony) / orig.harmony_pivot
    )
    originality = clamp(orig.base + orig.spread * spread, orig.min_score, orig.max_score)

    return HarmonyIndices(
        harmony=harmony,
        overall=overall,
        originality=originality,
        eye_spacing_ratio=ratio,
        eye_spacing_score=eye_score,
    )


def compute_scores(
    width: float,
    height: float,
    landmarks: np.ndarray,
    config: MethodologyConfig = None
) -> ScoringResult:
    """
    측정 → 점수 전체 체인

    Args:
        width, height: 랜드마크가 기준으로 하는 프레임 크기
        landmarks: (N, 2) 정규화 좌표
        config: 방법론 설정

    Returns:
        ScoringResult (측정값, 비율, 점수, 지수)
    """
    config = config or MethodologyConfig()

    measurements, ratios = measure(width, height, landmarks, config.ratio_targets)
    symmetry = symmetry_score(landmarks, scale=config.symmetry.scale)
    golden = golden_score(ratios, decay=config.golden.decay)
    indices = harmony_and_indices(
        symmetry, golden, measurements.face_width, measurements.eye_distance, config
    )

    scores = ScoreSet(
        symmetry=symmetry,
        golden=golden,
        harmony=indices.harmony,
        overall=indices.overall,
        originality=indices.originality,
    )
    return ScoringResult(measurements=measurements, ratios=ratios, scores=scores, indices=indices)
