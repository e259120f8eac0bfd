"""Processing layer components"""

from .feedback import describe
from .measurement import measure
from .pipeline import HarmonyAnalyzer
from .scoring import compute_scores
from .stabilizer import estimate_stable_landmarks
from .uncertainty import estimate_score_uncertainty

__all__ = [
    'measure',
    'compute_scores',
    'estimate_score_uncertainty',
    'describe',
    'estimate_stable_landmarks',
    'HarmonyAnalyzer',
]
