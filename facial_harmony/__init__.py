"""
Facial Harmony
얼굴 랜드마크 기반 대칭/비율/조화도 점수 계산 엔진
"""

__version__ = "0.1.0"

from .config.settings import MethodologyConfig, load_methodology
from .models import AnalysisReport, Landmark, ScoreSet, UncertaintyRecord
from .processing.pipeline import HarmonyAnalyzer
from .utils.exceptions import (
    AlignmentError,
    AnalysisCancelled,
    ConfigurationError,
    DetectionFailure,
    HarmonyAnalysisError,
    InvalidImageError,
    LandmarkTopologyError,
    QualityGateError,
    UncertaintyEstimationError,
)

__all__ = [
    'HarmonyAnalyzer',
    'MethodologyConfig',
    'load_methodology',
    'AnalysisReport',
    'Landmark',
    'ScoreSet',
    'UncertaintyRecord',
    'HarmonyAnalysisError',
    'DetectionFailure',
    'InvalidImageError',
    'ConfigurationError',
    'LandmarkTopologyError',
    'AlignmentError',
    'QualityGateError',
    'UncertaintyEstimationError',
    'AnalysisCancelled',
]
