"""데이터 모델 정의"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np

from .utils.exceptions import LandmarkTopologyError


@dataclass(frozen=True)
class Landmark:
    """단일 랜드마크 포인트"""

    x: float  # 정규화 x 좌표 (0-1)
    y: float  # 정규화 y 좌표 (0-1)
    z: float = 0.0  # 깊이 정보 (상대적, 측정에는 사용하지 않음)

    def to_dict(self) -> Dict[str, Any]:
        return {'x': self.x, 'y': self.y, 'z': self.z}


def _point_xy(point) -> Tuple[float, float]:
    if isinstance(point, Landmark):
        return point.x, point.y
    if isinstance(point, Mapping):
        return float(point['x']), float(point['y'])
    if hasattr(point, 'x') and hasattr(point, 'y'):
        return float(point.x), float(point.y)
    return float(point[0]), float(point[1])


def as_landmark_array(points) -> np.ndarray:
    """
    랜드마크 입력을 읽기 전용 (N, 2) float64 배열로 변환

    Args:
        points: Landmark 리스트, (x, y) 튜플, {'x', 'y'} 딕셔너리,
                MediaPipe NormalizedLandmark, 또는 (N, 2+) 배열

    Returns:
        np.ndarray: 쓰기 불가 플래그가 설정된 새 배열
    """
    if isinstance(points, np.ndarray):
        if points.ndim != 2 or points.shape[1] < 2:
            raise LandmarkTopologyError(f"Landmark array must have shape (N, 2+), got {points.shape}")
        arr = np.array(points[:, :2], dtype=np.float64)
    else:
        arr = np.array([_point_xy(p) for p in points], dtype=np.float64).reshape(-1, 2)

    arr.flags.writeable = False
    return arr


@dataclass(frozen=True)
class QualityRecord:
    """품질 게이트 결과 (검출 전 원본 이미지에서 한 번 계산)"""

    sharpness_mean: float
    sharpness_variance: float
    luminance: float
    blur_ok: bool
    exposure_ok: bool

    @property
    def passed(self) -> bool:
        return self.blur_ok and self.exposure_ok

    def warnings(self) -> List[str]:
        messages = []
        if not self.blur_ok:
            messages.append(f"Image looks blurry (gradient variance {self.sharpness_variance:.1f})")
        if not self.exposure_ok:
            messages.append(f"Image exposure out of range (mean luminance {self.luminance:.1f})")
        return messages

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sharpness_mean': round(self.sharpness_mean, 2),
            'sharpness_variance': round(self.sharpness_variance, 2),
            'luminance': round(self.luminance, 2),
            'blur_ok': self.blur_ok,
            'exposure_ok': self.exposure_ok,
        }


@dataclass(frozen=True)
class MeasurementSet:
    """정렬 프레임에서 측정한 6개 픽셀 거리"""

    face_length: float
    face_width: float
    eye_distance: float
    mouth_width: float
    nose_to_chin: float
    lip_height: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'face_length': round(self.face_length, 2),
            'face_width': round(self.face_width, 2),
            'eye_distance': round(self.eye_distance, 2),
            'mouth_width': round(self.mouth_width, 2),
            'nose_to_chin': round(self.nose_to_chin, 2),
            'lip_height': round(self.lip_height, 2),
        }


@dataclass(frozen=True)
class RatioEntry:
    """측정 비율과 목표값 비교"""

    name: str
    measured: float
    target: float
    relative_error: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'measured': round(self.measured, 3),
            'target': self.target,
            'relative_error': round(self.relative_error, 3),
        }


@dataclass(frozen=True)
class RatioSet:
    """5개 비율 (순서 고정)"""

    entries: Tuple[RatioEntry, ...]

    def __iter__(self):
        return iter(self.entries)

    def __len__(self):
        return len(self.entries)

    def __getitem__(self, name: str) -> RatioEntry:
        for entry in self.entries:
            if entry.name == name:
                return entry
        raise KeyError(name)

    def values(self) -> Dict[str, float]:
        return {e.name: e.measured for e in self.entries}

    def targets(self) -> Dict[str, float]:
        return {e.name: e.target for e in self.entries}

    def relative_errors(self) -> List[float]:
        return [e.relative_error for e in self.entries]

    def to_dict(self) -> Dict[str, Any]:
        return {e.name: e.to_dict() for e in self.entries}


@dataclass(frozen=True)
class HarmonyIndices:
    """조화/종합/독창성 지수와 눈 간격 하위 점수"""

    harmony: float
    overall: float
    originality: float
    eye_spacing_ratio: float
    eye_spacing_score: float


@dataclass(frozen=True)
class ScoreSet:
    """5개 점수 (반올림 전 원시값)"""

    symmetry: float
    golden: float
    harmony: float
    overall: float
    originality: float

    def get(self, name: str) -> float:
        return getattr(self, name)

    def to_dict(self) -> Dict[str, float]:
        return {
            'symmetry': round(self.symmetry, 2),
            'golden': round(self.golden, 2),
            'harmony': round(self.harmony, 2),
            'overall': round(self.overall, 1),
            'originality': round(self.originality, 1),
        }


@dataclass(frozen=True)
class UncertaintyRecord:
    """부트스트랩 불확실성 (평균, 모표준편차, 95% 반폭)"""

    mean: float
    sd: float
    ci95: float
    repeats: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'mean': round(self.mean, 2),
            'sd': round(self.sd, 3),
            'ci95': round(self.ci95, 2),
            'repeats': self.repeats,
        }


@dataclass(frozen=True)
class ScoringResult:
    """측정 → 점수 체인 한 번의 결과"""

    measurements: MeasurementSet
    ratios: RatioSet
    scores: ScoreSet
    indices: HarmonyIndices


@dataclass
class AnalysisReport:
    """분석 결과 보고서 (JSON 직렬화 가능)"""

    frame_width: int
    frame_height: int
    measurements: MeasurementSet
    ratios: RatioSet
    scores: ScoreSet
    eye_spacing_ratio: float
    uncertainty: Dict[str, UncertaintyRecord]
    feedback: str
    methodology_version: str
    quality: Optional[QualityRecord] = None
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        measurements = self.measurements.to_dict()
        measurements['golden_score'] = round(self.scores.golden, 2)
        return {
            'frame': {'width': self.frame_width, 'height': self.frame_height},
            'quality': self.quality.to_dict() if self.quality else None,
            'measurements': measurements,
            'ratios': self.ratios.to_dict(),
            'scores': self.scores.to_dict(),
            'eye_spacing_ratio': round(self.eye_spacing_ratio, 3),
            'uncertainty': {name: rec.to_dict() for name, rec in self.uncertainty.items()},
            'feedback': self.feedback,
            'warnings': list(self.warnings),
            'methodology_version': self.methodology_version,
        }
