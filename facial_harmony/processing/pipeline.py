"""
Harmony Analyzer
품질 검사 → 검출 → 정렬/크롭 → 재검출 → 측정 → 점수 → 불확실성 → 피드백

각 단계는 순차적으로 실행되며, 정렬 이후의 측정은 반드시
정렬 이미지에서 다시 검출한 랜드마크와 정렬 프레임 크기만 사용한다.
"""

import threading
import time
from typing import List, Optional

import numpy as np

from ..config.settings import MethodologyConfig
from ..core.alignment import align_and_crop, eye_points_px
from ..core.face_detector import LandmarkDetector
from ..core.quality import assess_quality, enforce_quality_gate
from ..models import AnalysisReport, QualityRecord, as_landmark_array
from ..utils.exceptions import AnalysisCancelled, DetectionFailure
from ..utils.logging_config import get_logger
from ..utils.validators import validate_image, validate_landmarks
from .feedback import describe
from .scoring import compute_scores
from .uncertainty import estimate_score_uncertainty

logger = get_logger(__name__)


class HarmonyAnalyzer:
    """
    얼굴 조화도 분석 엔진

    검출기와 방법론 설정은 생성 시 주입된다. 엔진은 호출 사이에 상태를
    보관하지 않으므로 같은 인스턴스로 여러 이미지를 분석할 수 있다.
    공유 rng에서는 호출마다 잠금 하에 시드 하나만 뽑아 별도 Generator를
    만들므로, 여러 스레드에서 동시에 호출해도 된다.
    """

    def __init__(
        self,
        detector: LandmarkDetector,
        config: MethodologyConfig = None,
        rng: np.random.Generator = None,
        color_order: str = 'BGR'
    ):
        """
        초기화

        Args:
            detector: detect(image) -> landmarks | None 을 제공하는 검출기
            config: 방법론 설정 (None이면 기본값)
            rng: 부트스트랩용 numpy Generator (None이면 OS 엔트로피)
            color_order: 입력 이미지 채널 순서 (품질 검사용)
        """
        self.detector = detector
        self.config = config or MethodologyConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.color_order = color_order
        self._rng_lock = threading.Lock()

        logger.info(f"HarmonyAnalyzer initialized (methodology {self.config.version})")

    def _detect(self, image: np.ndarray, stage: str) -> np.ndarray:
        points = self.detector.detect(image)
        if points is None or len(points) == 0:
            raise DetectionFailure(f"No face detected ({stage})")

        landmarks = as_landmark_array(points)
        validate_landmarks(landmarks, self.config.expected_landmarks)
        return landmarks

    def _call_rng(self) -> np.random.Generator:
        """호출마다 별도 Generator (공유 rng에서는 시드만 잠금 하에 추출)"""
        with self._rng_lock:
            seed = int(self.rng.integers(0, 2**63 - 1))
        return np.random.default_rng(seed)

    @staticmethod
    def _check_cancel(cancel_event: Optional[threading.Event]) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise AnalysisCancelled("Analysis cancelled")

    def analyze(
        self,
        image: np.ndarray,
        cancel_event: Optional[threading.Event] = None
    ) -> AnalysisReport:
        """
        원본 이미지 분석

        Args:
            image: 원본 이미지 (H, W[, C])
            cancel_event: set되면 다음 단계 진입 전에 AnalysisCancelled

        Returns:
            AnalysisReport

        Raises:
            QualityGateError: enforce 모드에서 품질 기준 미달
            DetectionFailure: 원본 또는 정렬 이미지에서 얼굴 미검출
            LandmarkTopologyError: 랜드마크 개수/형태 불일치
            AlignmentError: 정렬 불가 (눈 사이 거리 0 등)
        """
        validate_image(image)
        start_time = time.time()

        quality = assess_quality(image, self.config.quality, self.color_order)
        enforce_quality_gate(quality, self.config.quality)
        warnings = quality.warnings()
        self._check_cancel(cancel_event)

        h, w = image.shape[:2]
        raw_landmarks = self._detect(image, "original frame")
        self._check_cancel(cancel_event)

        eye_left, eye_right = eye_points_px(raw_landmarks, w, h)
        aligned = align_and_crop(image, eye_left, eye_right, self.config.crop)
        detect_time = (time.time() - start_time) * 1000
        self._check_cancel(cancel_event)

        # 정렬 프레임에서 재검출한 랜드마크만 측정에 사용
        aligned_landmarks = self._detect(aligned, "aligned frame")
        ah, aw = aligned.shape[:2]
        logger.debug(f"Detection and alignment: {detect_time:.1f}ms, aligned frame {aw}x{ah}")

        return self.analyze_landmarks(
            aw, ah, aligned_landmarks,
            quality=quality,
            cancel_event=cancel_event,
            warnings=warnings,
        )

    def analyze_landmarks(
        self,
        width: int,
        height: int,
        landmarks,
        quality: QualityRecord = None,
        cancel_event: Optional[threading.Event] = None,
        warnings: List[str] = None
    ) -> AnalysisReport:
        """
        이미 정렬된 프레임의 랜드마크로 측정 → 점수 → 불확실성 → 피드백

        Args:
            width, height: 랜드마크가 기준으로 하는 프레임 크기
            landmarks: (N, 2) 정규화 좌표 (또는 as_landmark_array가 받는 형식)
            quality: 품질 검사 결과 (있으면 보고서에 포함)
            cancel_event: 취소 신호
            warnings: 보고서에 포함할 경고 메시지

        Returns:
            AnalysisReport
        """
        start_time = time.time()
        landmarks = as_landmark_array(landmarks)
        validate_landmarks(landmarks, self.config.expected_landmarks)
        self._check_cancel(cancel_event)

        result = compute_scores(width, height, landmarks, self.config)
        scoring_time = (time.time() - start_time) * 1000

        uncertainty = estimate_score_uncertainty(
            width, height, landmarks, self.config, self._call_rng(), cancel_event
        )
        uncertainty_time = (time.time() - start_time) * 1000 - scoring_time

        feedback = describe(
            result.scores.symmetry,
            result.scores.golden,
            result.indices.eye_spacing_ratio,
            self.config.eye_spacing,
        )

        logger.info(
            f"Analysis complete: overall={result.scores.overall:.1f}, "
            f"scoring {scoring_time:.1f}ms, uncertainty {uncertainty_time:.1f}ms"
        )

        return AnalysisReport(
            frame_width=int(width),
            frame_height=int(height),
            measurements=result.measurements,
            ratios=result.ratios,
            scores=result.scores,
            eye_spacing_ratio=result.indices.eye_spacing_ratio,
            uncertainty=uncertainty,
            feedback=feedback,
            methodology_version=self.config.version,
            quality=quality,
            warnings=list(warnings or []),
        )
