"""정렬 및 크롭 테스트"""

import math

import numpy as np
import pytest

from facial_harmony.config.settings import CropSettings
from facial_harmony.core.alignment import align_and_crop, crop_box, eye_points_px, rotation_matrix
from facial_harmony.core.geometry import line_angle
from facial_harmony.utils.exceptions import AlignmentError


@pytest.fixture
def image():
    rng = np.random.default_rng(3)
    return rng.integers(0, 256, size=(600, 600, 3), dtype=np.uint8)


def test_output_width_and_aspect(image):
    """출력 너비 800, 높이 = 너비 * 1.1"""
    aligned = align_and_crop(image, (250, 300), (350, 300))
    assert aligned.shape == (880, 800, 3)


def test_alignment_is_deterministic(image):
    a = align_and_crop(image, (240, 280), (360, 320))
    b = align_and_crop(image, (240, 280), (360, 320))
    assert np.array_equal(a, b)
    assert a.shape[1] == 800


def test_custom_output_width(image):
    crop = CropSettings(output_width=400)
    aligned = align_and_crop(image, (250, 300), (350, 300), crop)
    assert aligned.shape[:2] == (440, 400)


def test_grayscale_image():
    gray = np.full((600, 600), 90, dtype=np.uint8)
    aligned = align_and_crop(gray, (250, 300), (350, 300))
    assert aligned.ndim == 2
    assert aligned.shape[1] == 800


def test_coincident_eyes_raise(image):
    """눈 사이 거리 0이면 AlignmentError"""
    with pytest.raises(AlignmentError):
        align_and_crop(image, (300, 300), (300, 300))


def test_rotation_levels_eye_line():
    """회전 후 두 눈의 y 좌표가 같아짐"""
    left, right = (250.0, 250.0), (350.0, 330.0)
    matrix = rotation_matrix((600, 600, 3), line_angle(left, right))

    rotated = [matrix @ np.array([x, y, 1.0]) for x, y in (left, right)]
    assert rotated[0][1] == pytest.approx(rotated[1][1], abs=1e-9)
    assert rotated[1][0] > rotated[0][0]


def test_crop_box_clamped_to_top_left():
    crop = CropSettings()
    x, y, w, h = crop_box((10, 10), 100, 1000, 1000, crop)
    assert (x, y) == (0.0, 0.0)
    assert w == pytest.approx(500.0)
    assert h == pytest.approx(550.0)


def test_crop_box_clamped_to_bottom_right():
    crop = CropSettings()
    x, y, w, h = crop_box((990, 990), 100, 1000, 1000, crop)
    assert x == pytest.approx(500.0)
    assert y == pytest.approx(450.0)
    assert x + w <= 1000
    assert y + h <= 1000


def test_crop_box_larger_than_image():
    """크롭 크기가 이미지보다 크면 이미지 전체로 제한"""
    x, y, w, h = crop_box((50, 50), 100, 100, 100, CropSettings())
    assert (x, y, w, h) == (0.0, 0.0, 100.0, 100.0)


def test_crop_box_vertical_offset():
    """상단 = 중심 - 너비 * 0.6"""
    x, y, w, h = crop_box((500, 500), 100, 2000, 2000, CropSettings())
    assert x == pytest.approx(250.0)
    assert y == pytest.approx(200.0)


def test_eye_points_px():
    landmarks = np.full((468, 2), 0.5)
    landmarks[133] = (0.4, 0.3)
    landmarks[362] = (0.6, 0.3)
    left, right = eye_points_px(landmarks, 1000, 500)
    assert left == pytest.approx((400.0, 150.0))
    assert right == pytest.approx((600.0, 150.0))
    assert math.isclose(right[0] - left[0], 200.0)
