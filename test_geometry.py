"""기하 커널 테스트"""

import math

import numpy as np
import pytest

from facial_harmony.core.geometry import distance, line_angle, midpoint, project
from facial_harmony.models import Landmark, as_landmark_array
from facial_harmony.utils.exceptions import LandmarkTopologyError
from facial_harmony.utils.validators import validate_landmarks


def test_distance():
    """유클리드 거리"""
    assert distance((0, 0), (3, 4)) == 5.0
    assert distance((2.5, 2.5), (2.5, 2.5)) == 0.0


def test_project_scales_by_frame():
    """정규화 좌표 → 픽셀 좌표"""
    landmarks = np.array([[0.25, 0.5], [1.0, 0.0]])
    assert project(0, 800, 600, landmarks) == (200.0, 300.0)
    assert project(1, 800, 600, landmarks) == (800.0, 0.0)


def test_project_rejects_out_of_range_index():
    """범위 밖 인덱스는 LandmarkTopologyError"""
    landmarks = np.zeros((10, 2))
    with pytest.raises(LandmarkTopologyError):
        project(10, 100, 100, landmarks)
    with pytest.raises(LandmarkTopologyError):
        project(-1, 100, 100, landmarks)


def test_midpoint_and_angle():
    assert midpoint((0, 0), (4, 2)) == (2.0, 1.0)
    assert line_angle((0, 0), (1, 0)) == 0.0
    assert line_angle((0, 0), (1, 1)) == pytest.approx(math.pi / 4)


def test_as_landmark_array_accepts_mixed_inputs():
    """Landmark, dict, 튜플 입력을 (N, 2) 읽기 전용 배열로 변환"""
    arr = as_landmark_array([Landmark(0.1, 0.2, 0.3), {'x': 0.4, 'y': 0.5}, (0.6, 0.7)])
    assert arr.shape == (3, 2)
    assert arr[1, 1] == 0.5
    assert not arr.flags.writeable


def test_as_landmark_array_copies_input():
    source = np.array([[0.1, 0.2, 0.9], [0.3, 0.4, 0.9]])
    arr = as_landmark_array(source)
    source[0, 0] = 0.9
    assert arr.shape == (2, 2)
    assert arr[0, 0] == 0.1


def test_validate_landmarks():
    """개수/유한성 검증"""
    validate_landmarks(np.zeros((468, 2)), 468)

    with pytest.raises(LandmarkTopologyError):
        validate_landmarks(np.zeros((478, 2)), 468)

    bad = np.zeros((468, 2))
    bad[5, 0] = np.nan
    with pytest.raises(LandmarkTopologyError):
        validate_landmarks(bad, 468)
