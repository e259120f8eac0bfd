"""얼굴 랜드마크 인덱스 및 시스템 상수 정의"""

from typing import Dict, List, Tuple

# MediaPipe FaceMesh 기본 토폴로지 (refine_landmarks=False)
NUM_LANDMARKS = 468

# 측정용 주요 포인트
MEASUREMENT_LANDMARKS: Dict[str, int] = {
    # 세로 측정
    'forehead_top': 10,        # 이마 상단
    'chin_bottom': 152,        # 턱 끝

    # 가로 측정
    'face_left': 234,          # 얼굴 왼쪽 끝
    'face_right': 454,         # 얼굴 오른쪽 끝

    'eye_left': 133,           # 왼쪽 눈 (정렬 기준점)
    'eye_right': 362,          # 오른쪽 눈 (정렬 기준점)

    'mouth_left': 61,          # 입꼬리 왼쪽
    'mouth_right': 291,        # 입꼬리 오른쪽

    'nose_tip': 1,             # 코끝
    'lip_upper': 13,           # 윗입술
    'lip_lower': 14,           # 아랫입술
}

# 대칭 점수용 좌우 대응 쌍 (i, j): x_i ≈ 1 - x_j
SYMMETRY_PAIRS: List[Tuple[int, int]] = [
    (234, 454), (93, 323), (132, 361), (58, 288), (127, 356),
    (50, 280), (101, 330), (205, 425), (98, 327), (55, 285),
    (65, 295), (107, 336), (52, 282), (66, 296), (3, 13),
]

# 비율 이름 (보고서 출력 순서)
RATIO_NAMES: List[str] = [
    'face_length_to_width',
    'eye_distance_to_mouth_width',
    'eye_distance_to_face_width',
    'nose_chin_to_face_length',
    'lip_height_to_mouth_width',
]

# 점수 이름 (불확실성 계산 순서)
SCORE_NAMES: List[str] = ['symmetry', 'golden', 'harmony', 'overall', 'originality']

# 95% 정규 근사 계수
CI95_Z = 1.96

FEEDBACK_DISCLAIMER = (
    "Note: these indicators are descriptive. Aesthetic perception remains multidimensional."
)
