"""측정 모듈 테스트"""

import numpy as np
import pytest

from facial_harmony.config.constants import RATIO_NAMES
from facial_harmony.config.settings import RatioTargets
from facial_harmony.processing.measurement import measure, relative_error, safe_ratio


def test_safe_ratio_zero_denominator():
    """분모 0 → 비율 0"""
    assert safe_ratio(5.0, 0.0) == 0.0
    assert safe_ratio(6.0, 3.0) == 2.0


def test_relative_error():
    assert relative_error(1.1, 1.0) == pytest.approx(0.1)
    assert relative_error(0.0, 1.618) == 1.0
    assert relative_error(3.0, 0.0) == 1.0


def test_ideal_face_ratios_match_targets(ideal_landmarks):
    measurements, ratios = measure(1000, 1000, ideal_landmarks)

    assert measurements.face_width == pytest.approx(500.0)
    assert measurements.face_length == pytest.approx(809.0)
    assert measurements.eye_distance == pytest.approx(160.0)

    assert [entry.name for entry in ratios] == RATIO_NAMES
    targets = RatioTargets().as_dict()
    for name, value in ratios.values().items():
        assert value == pytest.approx(targets[name])
    assert all(err == pytest.approx(0.0, abs=1e-9) for err in ratios.relative_errors())


def test_degenerate_landmarks(degenerate_landmarks):
    """모든 좌표가 같으면 거리 0, 비율 0, 상대오차 1"""
    measurements, ratios = measure(1000, 1000, degenerate_landmarks)

    assert measurements.face_width == 0.0
    assert measurements.lip_height == 0.0
    assert list(ratios.values().values()) == [0.0] * 5
    assert ratios.relative_errors() == [1.0] * 5


def test_measurement_uses_frame_size(ideal_landmarks):
    """같은 정규화 좌표라도 프레임 크기에 따라 픽셀 거리가 달라짐"""
    small, _ = measure(500, 500, ideal_landmarks)
    large, _ = measure(1000, 1000, ideal_landmarks)
    assert large.face_width == pytest.approx(2 * small.face_width)


def test_custom_targets(ideal_landmarks):
    targets = RatioTargets(face_length_to_width=1.5)
    _, ratios = measure(1000, 1000, ideal_landmarks, targets)
    entry = ratios['face_length_to_width']
    assert entry.target == 1.5
    assert entry.relative_error == pytest.approx(abs(1.618 - 1.5) / 1.5)


def test_ratio_set_to_dict(ideal_landmarks):
    _, ratios = measure(1000, 1000, ideal_landmarks)
    data = ratios.to_dict()
    assert set(data) == set(RATIO_NAMES)
    assert data['eye_distance_to_face_width']['measured'] == 0.32
    with pytest.raises(KeyError):
        ratios['unknown']


def test_input_not_modified(ideal_landmarks):
    before = np.array(ideal_landmarks)
    measure(1000, 1000, ideal_landmarks)
    assert np.array_equal(before, ideal_landmarks)
