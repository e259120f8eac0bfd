"""피드백 문장 생성 테스트"""

from facial_harmony.config.constants import FEEDBACK_DISCLAIMER
from facial_harmony.processing.feedback import (
    EYE_SPACING_LINES,
    GOLDEN_LINES,
    SYMMETRY_LINES,
    describe,
)


def test_high_scores_ideal_spacing():
    lines = describe(95.0, 92.0, 0.32).split("\n")
    assert lines == [
        SYMMETRY_LINES['high'],
        GOLDEN_LINES['high'],
        EYE_SPACING_LINES['ideal'],
        FEEDBACK_DISCLAIMER,
    ]


def test_band_thresholds_are_strict():
    """90, 75는 상위 구간에 포함되지 않음"""
    lines = describe(90.0, 75.0, 0.0).split("\n")
    assert lines[0] == SYMMETRY_LINES['good']
    assert lines[1] == GOLDEN_LINES['low']


def test_zero_ratio_omits_eye_line():
    lines = describe(50.0, 50.0, 0.0).split("\n")
    assert len(lines) == 3
    assert lines[-1] == FEEDBACK_DISCLAIMER


def test_eye_spacing_narrow_and_wide():
    assert EYE_SPACING_LINES['narrow'] in describe(80.0, 80.0, 0.26)
    assert EYE_SPACING_LINES['wide'] in describe(80.0, 80.0, 0.40)


def test_eye_spacing_between_bands_has_no_line():
    """0.26 < r <= 0.28 구간은 문장 없음"""
    text = describe(80.0, 80.0, 0.27)
    assert all(line not in text for line in EYE_SPACING_LINES.values())
    assert text.endswith(FEEDBACK_DISCLAIMER)
