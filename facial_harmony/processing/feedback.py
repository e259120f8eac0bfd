"""점수 구간 → 설명 문장 (수치 계산 없음)"""

from typing import List

from ..config.constants import FEEDBACK_DISCLAIMER
from ..config.settings import EyeSpacingBands

SYMMETRY_LINES = {
    'high': "Very high facial symmetry, an indicator of morphological regularity.",
    'good': "Overall good symmetry with slight natural asymmetries.",
    'low': "More pronounced asymmetries, which are common and not pathological.",
}

GOLDEN_LINES = {
    'high': "Proportions very close to the golden ratio.",
    'good': "Slight deviations from the golden ratio, with no direct aesthetic consequence.",
    'low': "Proportions far from the golden ratio; beauty is not reducible to a ratio.",
}

EYE_SPACING_LINES = {
    'ideal': "Inter-ocular spacing within a range considered harmonious.",
    'narrow': "Relatively narrow inter-ocular spacing (more concentrated look).",
    'wide': "Relatively wide inter-ocular spacing (more open impression).",
}


def _band(score: float) -> str:
    if score > 90:
        return 'high'
    if score > 75:
        return 'good'
    return 'low'


def describe(
    symmetry: float,
    golden: float,
    eye_spacing_ratio: float,
    bands: EyeSpacingBands = None
) -> str:
    """
    점수에 대한 서술형 피드백 생성

    Args:
        symmetry: 대칭 점수
        golden: 황금비 점수
        eye_spacing_ratio: 눈 사이 거리 / 얼굴 너비 (0이면 눈 간격 문장 생략)
        bands: 눈 간격 구간

    Returns:
        줄바꿈으로 연결된 문장들 (항상 면책 문장으로 끝남)
    """
    bands = bands or EyeSpacingBands()
    lines: List[str] = [
        SYMMETRY_LINES[_band(symmetry)],
        GOLDEN_LINES[_band(golden)],
    ]

    if eye_spacing_ratio > 0:
        if bands.ideal_min < eye_spacing_ratio < bands.ideal_max:
            lines.append(EYE_SPACING_LINES['ideal'])
        elif eye_spacing_ratio <= bands.low:
            lines.append(EYE_SPACING_LINES['narrow'])
        elif eye_spacing_ratio >= bands.high:
            lines.append(EYE_SPACING_LINES['wide'])

    lines.append(FEEDBACK_DISCLAIMER)
    return "\n".join(lines)
