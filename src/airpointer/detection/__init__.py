"""Hand landmark types, the latest-result channel and the MediaPipe detector."""
from .types import HandDetectionResult, HandLandmarks, Landmark, LandmarkIndex
from .result_channel import LandmarkResultChannel

__all__ = [
    "HandDetectionResult",
    "HandLandmarks",
    "Landmark",
    "LandmarkIndex",
    "LandmarkResultChannel",
]
