"""
Uncertainty Estimator
랜드마크 jitter 부트스트랩으로 점수별 평균과 95% 신뢰 반폭 추정

각 점수는 독립적인 부트스트랩을 가진다 (jitter 표본을 점수끼리 공유하지 않음).
따라서 보고되는 CI는 점수별 주변(marginal) 구간이다.
"""

import math
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Optional

import numpy as np

from ..config.constants import CI95_Z, SCORE_NAMES
from ..config.settings import MethodologyConfig
from ..models import UncertaintyRecord
from ..utils.exceptions import AnalysisCancelled, UncertaintyEstimationError
from ..utils.logging_config import get_logger
from .scoring import compute_scores

logger = get_logger(__name__)

ScoreFn = Callable[[np.ndarray], float]


def jitter_landmarks(landmarks: np.ndarray, sigma: float, rng: np.random.Generator) -> np.ndarray:
    """
    모든 좌표에 N(0, sigma) 노이즈를 더한 새 랜드마크 배열 ([0, 1]로 clip)

    원본 배열은 수정하지 않는다.
    """
    noise = rng.normal(0.0, sigma, size=landmarks.shape) if sigma > 0 else 0.0
    jittered = np.clip(landmarks + noise, 0.0, 1.0)
    jittered.flags.writeable = False
    return jittered


def summarize(values: np.ndarray) -> UncertaintyRecord:
    """표본 평균, 모표준편차, ci95 = 1.96 * sd"""
    if values.max() == values.min():
        # 상수 표본은 반올림 오차 없이 sd = 0
        mean, sd = float(values[0]), 0.0
    else:
        mean = float(values.mean())
        sd = float(values.std())
    return UncertaintyRecord(mean=mean, sd=sd, ci95=CI95_Z * sd, repeats=int(values.size))


def bootstrap(
    base_landmarks: np.ndarray,
    repeats: int,
    sigma: float,
    score_fn: ScoreFn,
    rng: np.random.Generator,
    workers: int = 1,
    cancel_event: Optional[threading.Event] = None
) -> UncertaintyRecord:
    """
    jitter 부트스트랩

    Args:
        base_landmarks: 기준 (N, 2) 정규화 좌표 (수정되지 않음)
        repeats: 반복 횟수
        sigma: jitter 표준편차 (정규화 좌표 단위)
        score_fn: jitter된 랜드마크 → 점수 (측정→점수 체인 전체를 다시 계산)
        rng: 시드 지정 가능한 numpy Generator
        workers: 1보다 크면 스레드 병렬 실행
        cancel_event: set되면 남은 반복을 중단하고 AnalysisCancelled

    Returns:
        UncertaintyRecord

    Raises:
        UncertaintyEstimationError: 한 반복이라도 실패하거나 유한하지 않은 값을 반환한 경우
        AnalysisCancelled: cancel_event가 set된 경우
    """
    if repeats < 1:
        raise UncertaintyEstimationError(f"repeats must be >= 1, got {repeats}")

    # 반복마다 독립 Generator: 실행 순서(순차/병렬)와 무관하게 같은 표본
    seeds = rng.integers(0, 2**63 - 1, size=repeats)

    def run_once(i: int) -> float:
        if cancel_event is not None and cancel_event.is_set():
            raise AnalysisCancelled("Uncertainty estimation cancelled")

        jittered = jitter_landmarks(base_landmarks, sigma, np.random.default_rng(int(seeds[i])))
        try:
            value = float(score_fn(jittered))
        except AnalysisCancelled:
            raise
        except Exception as e:
            raise UncertaintyEstimationError(f"Bootstrap repetition {i} failed: {e!r}") from e

        if not math.isfinite(value):
            raise UncertaintyEstimationError(f"Bootstrap repetition {i} produced non-finite value {value}")
        return value

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            values = list(executor.map(run_once, range(repeats)))
    else:
        values = [run_once(i) for i in range(repeats)]

    return summarize(np.asarray(values, dtype=np.float64))


def score_function(
    name: str,
    width: float,
    height: float,
    config: MethodologyConfig
) -> ScoreFn:
    """점수 이름에 해당하는 jitter 랜드마크 → 점수 함수"""
    if name not in SCORE_NAMES:
        raise ValueError(f"Unknown score '{name}'. Available: {', '.join(SCORE_NAMES)}")

    def fn(landmarks: np.ndarray) -> float:
        return compute_scores(width, height, landmarks, config).scores.get(name)

    return fn


def estimate_score_uncertainty(
    width: float,
    height: float,
    landmarks: np.ndarray,
    config: MethodologyConfig = None,
    rng: np.random.Generator = None,
    cancel_event: Optional[threading.Event] = None
) -> Dict[str, UncertaintyRecord]:
    """
    5개 점수 각각에 대해 독립 부트스트랩 실행

    Args:
        width, height: 랜드마크가 기준으로 하는 (정렬) 프레임 크기
        landmarks: 기준 (N, 2) 정규화 좌표
        config: 방법론 설정 (반복 횟수, sigma, workers)
        rng: numpy Generator (None이면 OS 엔트로피로 생성)
        cancel_event: 취소 신호

    Returns:
        {점수 이름: UncertaintyRecord}
    """
    config = config or MethodologyConfig()
    rng = rng if rng is not None else np.random.default_rng()
    settings = config.uncertainty

    records: Dict[str, UncertaintyRecord] = {}
    for name in SCORE_NAMES:
        records[name] = bootstrap(
            landmarks,
            settings.repeats,
            settings.jitter_sigma,
            score_function(name, width, height, config),
            rng,
            workers=settings.workers,
            cancel_event=cancel_event,
        )
        logger.debug(
            f"Uncertainty[{name}]: mean={records[name].mean:.3f}, ci95={records[name].ci95:.3f}"
        )

    return records
