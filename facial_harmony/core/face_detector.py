"""랜드마크 검출기 경계 (외부 협력자)

분석 엔진은 검출을 직접 수행하지 않고 `detect(image) -> landmarks | None`
인터페이스만 사용한다. 테스트는 고정 랜드마크를 반환하는 stub으로 대체한다.
"""

import time
from typing import List, Optional, Protocol, Sequence

import cv2
import numpy as np

from ..models import Landmark
from ..utils.exceptions import ConfigurationError
from ..utils.logging_config import get_logger
from ..utils.validators import validate_image

logger = get_logger(__name__)


class LandmarkDetector(Protocol):
    """외부 랜드마크 검출기 인터페이스"""

    def detect(self, image: np.ndarray) -> Optional[Sequence]:
        """
        Args:
            image: 검출 대상 이미지

        Returns:
            정규화 (x, y) 좌표의 순서 있는 시퀀스, 얼굴이 없으면 None 또는 빈 시퀀스
        """
        ...


class MediaPipeLandmarkDetector:
    """MediaPipe FaceMesh 기반 랜드마크 검출기 (단일 얼굴, 정지 이미지 모드)"""

    def __init__(
        self,
        min_detection_confidence: float = 0.5,
        refine_landmarks: bool = False,
        color_order: str = 'BGR'
    ):
        """
        초기화

        Args:
            min_detection_confidence: 검출 신뢰도 임계값 (0.0 ~ 1.0)
            refine_landmarks: True면 홍채 포함 478개 (기본 468개 토폴로지와 다름)
            color_order: 입력 이미지 채널 순서 ('BGR' 또는 'RGB')

        Raises:
            ConfigurationError: MediaPipe 초기화 실패 시
        """
        if not 0.0 <= min_detection_confidence <= 1.0:
            raise ConfigurationError(
                f"min_detection_confidence must be between 0 and 1, got {min_detection_confidence}"
            )
        self.color_order = color_order.upper()

        # mediapipe는 선택 의존성: 실제 검출기를 쓸 때만 로드
        import mediapipe as mp

        try:
            self.face_mesh = mp.solutions.face_mesh.FaceMesh(
                static_image_mode=True,
                max_num_faces=1,
                refine_landmarks=refine_landmarks,
                min_detection_confidence=min_detection_confidence
            )
            logger.info("MediaPipe FaceMesh initialized successfully")
        except Exception as e:
            raise ConfigurationError(f"Failed to initialize MediaPipe FaceMesh: {e}")

    def detect(self, image: np.ndarray) -> Optional[List[Landmark]]:
        """
        이미지에서 얼굴 랜드마크 검출

        Args:
            image: BGR(또는 RGB) 이미지 (H, W, 3)

        Returns:
            정규화 Landmark 리스트, 얼굴이 없으면 None
        """
        validate_image(image)
        start_time = time.time()

        if image.ndim == 2:
            image_rgb = cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
        elif image.shape[2] == 4:
            code = cv2.COLOR_BGRA2RGB if self.color_order == 'BGR' else cv2.COLOR_RGBA2RGB
            image_rgb = cv2.cvtColor(image, code)
        elif self.color_order == 'BGR':
            image_rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        else:
            image_rgb = image

        results = self.face_mesh.process(np.ascontiguousarray(image_rgb))
        processing_time = (time.time() - start_time) * 1000  # ms

        if not results or not results.multi_face_landmarks:
            logger.debug(f"No face detected ({processing_time:.1f}ms)")
            return None

        # 첫 번째 얼굴만 처리 (max_num_faces=1)
        face_landmarks = results.multi_face_landmarks[0]
        landmarks = [Landmark(x=lm.x, y=lm.y, z=lm.z) for lm in face_landmarks.landmark]

        logger.debug(f"Detected {len(landmarks)} landmarks ({processing_time:.1f}ms)")
        return landmarks

    def release(self):
        """리소스 해제"""
        if hasattr(self, 'face_mesh'):
            self.face_mesh.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
