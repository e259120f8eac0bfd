"""Core components (geometry, quality gate, alignment, detector boundary)"""

from .alignment import align_and_crop
from .face_detector import LandmarkDetector, MediaPipeLandmarkDetector
from .quality import assess_quality

__all__ = [
    'align_and_crop',
    'assess_quality',
    'LandmarkDetector',
    'MediaPipeLandmarkDetector',
]
