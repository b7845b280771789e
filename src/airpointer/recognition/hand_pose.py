"""
Hand Pose Heuristic
====================

Coarse pose label from the thumb-tip to index-tip distance. Used for the
status line only; it does not drive the pointer.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from ..detection.types import HandDetectionResult, HandLandmarks, LandmarkIndex

logger = logging.getLogger(__name__)


class HandPose(Enum):
    """Recognized hand poses."""
    UNKNOWN = auto()
    PINCH = auto()
    OPEN = auto()
    OTHER = auto()


@dataclass
class HandPoseConfig:
    """Distance thresholds in normalized image units."""
    pinch_threshold: float = 0.1
    open_threshold: float = 0.3

    @classmethod
    def from_dict(cls, config: dict) -> "HandPoseConfig":
        """Create config from dictionary."""
        return cls(
            pinch_threshold=config.get("pinch_threshold", 0.1),
            open_threshold=config.get("open_threshold", 0.3),
        )


def classify_pose(hand: HandLandmarks, config: Optional[HandPoseConfig] = None) -> HandPose:
    """
    Classify a hand as pinching, open, or neither.

    Returns UNKNOWN for an incomplete landmark set.
    """
    config = config or HandPoseConfig()
    if not hand.is_complete:
        return HandPose.UNKNOWN

    distance = hand.distance_2d(LandmarkIndex.THUMB_TIP, LandmarkIndex.INDEX_TIP)
    logger.debug("Thumb-index distance: %.3f", distance)

    if distance < config.pinch_threshold:
        return HandPose.PINCH
    if distance > config.open_threshold:
        return HandPose.OPEN
    return HandPose.OTHER


def describe_result(result: Optional[HandDetectionResult], config: Optional[HandPoseConfig] = None) -> str:
    """One-line status text for a detection result."""
    if result is None or result.is_empty:
        return "No hand detected"

    noun = "hand" if result.hand_count == 1 else "hands"
    pose = classify_pose(result.primary, config)
    return f"{result.hand_count} {noun} detected: {pose.name}"
