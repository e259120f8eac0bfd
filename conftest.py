"""테스트 공용 fixture: 합성 랜드마크, stub 검출기, 합성 이미지"""

import numpy as np
import pytest

from facial_harmony.config.constants import MEASUREMENT_LANDMARKS as IDX
from facial_harmony.config.constants import NUM_LANDMARKS
from facial_harmony.config.settings import MethodologyConfig, UncertaintySettings


def make_ideal_landmarks(width=1000, height=1000):
    """
    주어진 프레임 크기에서 모든 비율이 목표값과 일치하고 좌우 대칭인 랜드마크

    나머지 포인트는 모두 (0.5, 0.5)에 둔다.
    """
    pts = np.full((NUM_LANDMARKS, 2), 0.5)

    face_width_px = 0.5 * width
    face_length_px = 1.618 * face_width_px
    eye_distance_px = 0.32 * face_width_px
    mouth_width_px = eye_distance_px / 1.618
    nose_chin_px = 0.618 * face_length_px
    lip_height_px = 0.20 * mouth_width_px

    top_y = 0.1
    chin_y = top_y + face_length_px / height
    mouth_y = chin_y - 0.2 * face_length_px / height

    pts[IDX['face_left']] = (0.25, 0.5)
    pts[IDX['face_right']] = (0.75, 0.5)
    pts[IDX['forehead_top']] = (0.5, top_y)
    pts[IDX['chin_bottom']] = (0.5, chin_y)
    pts[IDX['eye_left']] = (0.5 - eye_distance_px / 2 / width, 0.35)
    pts[IDX['eye_right']] = (0.5 + eye_distance_px / 2 / width, 0.35)
    pts[IDX['mouth_left']] = (0.5 - mouth_width_px / 2 / width, mouth_y)
    pts[IDX['mouth_right']] = (0.5 + mouth_width_px / 2 / width, mouth_y)
    pts[IDX['nose_tip']] = (0.5, chin_y - nose_chin_px / height)
    pts[IDX['lip_upper']] = (0.5, mouth_y - lip_height_px / 2 / height)
    pts[IDX['lip_lower']] = (0.5, mouth_y + lip_height_px / 2 / height)
    return pts


class StubDetector:
    """
    이미지 크기에 맞춘 이상적 랜드마크를 반환하는 검출기

    responses가 주어지면 호출 순서대로 그 값을 반환한다 (None은 미검출).
    """

    def __init__(self, responses=None):
        self.responses = list(responses) if responses is not None else None
        self.calls = []

    def detect(self, image):
        self.calls.append(image.shape)
        if self.responses is not None:
            return self.responses.pop(0)
        h, w = image.shape[:2]
        return make_ideal_landmarks(w, h)


@pytest.fixture
def ideal_landmarks():
    return make_ideal_landmarks()


@pytest.fixture
def degenerate_landmarks():
    return np.full((NUM_LANDMARKS, 2), 0.5)


@pytest.fixture
def stub_detector():
    return StubDetector()


@pytest.fixture
def fast_config():
    """반복 횟수를 줄인 방법론 설정"""
    return MethodologyConfig(uncertainty=UncertaintySettings(repeats=8, jitter_sigma=0.003))


@pytest.fixture
def noise_image():
    """선명도/노출 기준을 통과하는 균일 노이즈 BGR 이미지"""
    rng = np.random.default_rng(0)
    return rng.integers(0, 256, size=(1000, 1000, 3), dtype=np.uint8)


@pytest.fixture
def flat_image():
    """그래디언트가 없는 회색 이미지 (블러 판정)"""
    return np.full((1000, 1000, 3), 128, dtype=np.uint8)
