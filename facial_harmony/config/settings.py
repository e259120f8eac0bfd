"""분석 방법론 설정 클래스 정의

모든 상수는 불변(frozen) dataclass로 묶여 각 컴포넌트에 명시적으로 전달된다.
테스트는 dataclasses.replace()로 다른 방법론 버전을 만들어 주입할 수 있다.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional

from ..utils.config_loader import Config
from ..utils.exceptions import ConfigurationError


def _check_positive(name: str, value: float):
    if value <= 0:
        raise ConfigurationError(f"{name} must be > 0, got {value}")


def _check_range(name: str, low: float, high: float):
    if low > high:
        raise ConfigurationError(f"{name}: lower bound {low} exceeds upper bound {high}")


@dataclass(frozen=True)
class RatioTargets:
    """비율별 목표값"""

    face_length_to_width: float = 1.618
    eye_distance_to_mouth_width: float = 1.618
    eye_distance_to_face_width: float = 0.32
    nose_chin_to_face_length: float = 0.618
    lip_height_to_mouth_width: float = 0.20

    def __post_init__(self):
        for f in fields(self):
            if getattr(self, f.name) < 0:
                raise ConfigurationError(f"ratio target '{f.name}' must be >= 0")

    def as_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class SymmetrySettings:
    scale: float = 1000.0

    def __post_init__(self):
        _check_positive("symmetry.scale", self.scale)


@dataclass(frozen=True)
class GoldenSettings:
    decay: float = 5.0

    def __post_init__(self):
        _check_positive("golden.decay", self.decay)


@dataclass(frozen=True)
class EyeSpacingBands:
    """눈 간격 비율 구간 (low <= ideal_min < ideal_max <= high)"""

    low: float = 0.26
    ideal_min: float = 0.28
    ideal_max: float = 0.36
    high: float = 0.38
    ideal_score: float = 100.0
    near_score: float = 80.0
    far_score: float = 60.0
    degenerate_score: float = 75.0

    def __post_init__(self):
        if not (self.low <= self.ideal_min < self.ideal_max <= self.high):
            raise ConfigurationError(
                "eye_spacing bands must satisfy low <= ideal_min < ideal_max <= high, "
                f"got {self.low}/{self.ideal_min}/{self.ideal_max}/{self.high}"
            )


@dataclass(frozen=True)
class HarmonyWeights:
    symmetry_weight: float = 0.4
    golden_weight: float = 0.4
    eye_spacing_weight: float = 0.2
    min_score: float = 20.0
    max_score: float = 100.0

    def __post_init__(self):
        _check_range("harmony clamp", self.min_score, self.max_score)


@dataclass(frozen=True)
class OverallSettings:
    symmetry_weight: float = 0.35
    golden_weight: float = 0.25
    harmony_weight: float = 0.40
    exponent: float = 1.8
    offset: float = 4.0
    span: float = 9.0
    min_score: float = 1.0
    max_score: float = 10.0

    def __post_init__(self):
        _check_positive("overall.exponent", self.exponent)
        _check_range("overall clamp", self.min_score, self.max_score)


@dataclass(frozen=True)
class OriginalitySettings:
    symmetry_pivot: float = 50.0
    golden_pivot: float = 60.0
    harmony_pivot: float = 70.0
    symmetry_weight: float = 0.4
    golden_weight: float = 0.3
    harmony_weight: float = 0.3
    base: float = 5.0
    spread: float = 4.0
    min_score: float = 1.0
    max_score: float = 10.0

    def __post_init__(self):
        for name in ('symmetry_pivot', 'golden_pivot', 'harmony_pivot'):
            _check_positive(f"originality.{name}", getattr(self, name))
        _check_range("originality clamp", self.min_score, self.max_score)


@dataclass(frozen=True)
class QualityThresholds:
    """품질 게이트 임계값 (기본은 경고만, enforce=True면 분석 중단)"""

    blur_var_min: float = 1500.0
    luminance_min: float = 60.0
    luminance_max: float = 200.0
    channel: str = "red"
    enforce: bool = False

    def __post_init__(self):
        _check_range("quality luminance", self.luminance_min, self.luminance_max)
        if self.channel not in ("red", "luminance"):
            raise ConfigurationError(f"quality.channel must be 'red' or 'luminance', got {self.channel!r}")


@dataclass(frozen=True)
class UncertaintySettings:
    repeats: int = 40
    jitter_sigma: float = 0.003
    workers: int = 1

    def __post_init__(self):
        if self.repeats < 1:
            raise ConfigurationError(f"uncertainty.repeats must be >= 1, got {self.repeats}")
        if self.jitter_sigma < 0:
            raise ConfigurationError(f"uncertainty.jitter_sigma must be >= 0, got {self.jitter_sigma}")
        if self.workers < 1:
            raise ConfigurationError(f"uncertainty.workers must be >= 1, got {self.workers}")


@dataclass(frozen=True)
class CropSettings:
    width_multiplier: float = 5.0
    height_multiplier: float = 1.1
    vertical_offset: float = 0.6
    output_width: int = 800

    def __post_init__(self):
        _check_positive("crop.width_multiplier", self.width_multiplier)
        _check_positive("crop.height_multiplier", self.height_multiplier)
        if self.output_width < 1:
            raise ConfigurationError(f"crop.output_width must be >= 1, got {self.output_width}")


@dataclass(frozen=True)
class MethodologyConfig:
    """전체 분석 방법론 (불변 값)"""

    version: str = "1.2.0"
    expected_landmarks: int = 468
    ratio_targets: RatioTargets = field(default_factory=RatioTargets)
    symmetry: SymmetrySettings = field(default_factory=SymmetrySettings)
    golden: GoldenSettings = field(default_factory=GoldenSettings)
    eye_spacing: EyeSpacingBands = field(default_factory=EyeSpacingBands)
    harmony: HarmonyWeights = field(default_factory=HarmonyWeights)
    overall: OverallSettings = field(default_factory=OverallSettings)
    originality: OriginalitySettings = field(default_factory=OriginalitySettings)
    quality: QualityThresholds = field(default_factory=QualityThresholds)
    uncertainty: UncertaintySettings = field(default_factory=UncertaintySettings)
    crop: CropSettings = field(default_factory=CropSettings)

    # 섹션 이름 → dataclass
    _SECTIONS = (
        'ratio_targets', 'symmetry', 'golden', 'eye_spacing', 'harmony',
        'overall', 'originality', 'quality', 'uncertainty', 'crop',
    )

    def __post_init__(self):
        if self.expected_landmarks < 1:
            raise ConfigurationError(
                f"expected_landmarks must be >= 1, got {self.expected_landmarks}"
            )

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "MethodologyConfig":
        """
        딕셔너리(예: config.yaml의 methodology 섹션)로부터 생성

        누락된 키는 기본값을 사용하고, 알 수 없는 키는 ConfigurationError.
        """
        data = dict(data or {})
        kwargs: Dict[str, Any] = {}
        section_types = {f.name: f.default_factory for f in fields(cls) if f.name in cls._SECTIONS}

        for key, value in data.items():
            if key in section_types:
                section_cls = section_types[key]
                if not isinstance(value, Mapping):
                    raise ConfigurationError(f"Section '{key}' must be a mapping")
                try:
                    kwargs[key] = section_cls(**value)
                except TypeError as e:
                    raise ConfigurationError(f"Invalid keys in section '{key}': {e}")
            elif key in ('version', 'expected_landmarks'):
                kwargs[key] = value
            else:
                raise ConfigurationError(f"Unknown methodology key '{key}'")

        if 'version' in kwargs:
            kwargs['version'] = str(kwargs['version'])
        return cls(**kwargs)

    @classmethod
    def from_config(cls, config) -> "MethodologyConfig":
        """Config 객체의 methodology 섹션으로부터 생성"""
        return cls.from_dict(config.get('methodology', {}))

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'version': self.version, 'expected_landmarks': self.expected_landmarks}
        for name in self._SECTIONS:
            section = getattr(self, name)
            result[name] = {f.name: getattr(section, f.name) for f in fields(section)}
        return result


def load_methodology(config_path: Optional[str] = None) -> MethodologyConfig:
    """
    config.yaml에서 방법론 설정 로드

    Args:
        config_path: 설정 파일 경로 (None이면 패키지 기본값 또는 환경 변수)
    """
    return MethodologyConfig.from_config(Config(config_path))

