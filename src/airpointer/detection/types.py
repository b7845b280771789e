"""
Landmark Types
===============

Plain data containers for hand landmark detections. These carry no
MediaPipe dependency so every stage after the detector can use them.
"""

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import List, NamedTuple, Optional, Sequence, Tuple


# MediaPipe hand model always reports this many points per hand
NUM_HAND_LANDMARKS = 21


class LandmarkIndex(IntEnum):
    """Hand landmark indices following MediaPipe convention."""
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


class Landmark(NamedTuple):
    """A single landmark point with normalized coordinates."""
    x: float  # 0.0 to 1.0, normalized by image width
    y: float  # 0.0 to 1.0, normalized by image height
    z: float = 0.0  # Depth relative to wrist

    def to_pixel(self, width: int, height: int) -> Tuple[int, int]:
        """Convert normalized coordinates to pixel coordinates."""
        return (int(self.x * width), int(self.y * height))


@dataclass(frozen=True)
class HandLandmarks:
    """One detected hand: 21 landmarks plus handedness."""
    landmarks: Tuple[Landmark, ...]
    handedness: str = "Right"  # "Left" or "Right"
    confidence: float = 0.0

    def get(self, index: LandmarkIndex) -> Landmark:
        """Get landmark by index."""
        return self.landmarks[index]

    def distance_2d(self, idx1: LandmarkIndex, idx2: LandmarkIndex) -> float:
        """Euclidean distance between two landmarks in the image plane."""
        lm1 = self.get(idx1)
        lm2 = self.get(idx2)
        return math.hypot(lm1.x - lm2.x, lm1.y - lm2.y)

    @property
    def is_complete(self) -> bool:
        return len(self.landmarks) >= NUM_HAND_LANDMARKS


@dataclass(frozen=True)
class HandDetectionResult:
    """
    Everything the detector reported for one processed frame.

    Built once and never mutated, so a reader holding a reference always
    sees a complete result even while the detector publishes the next one.
    """
    hands: Tuple[HandLandmarks, ...]
    image_width: int = 0
    image_height: int = 0
    timestamp_ms: int = 0

    @classmethod
    def from_points(
        cls,
        hands: Sequence[Sequence[Tuple[float, float]]],
        image_width: int = 0,
        image_height: int = 0,
        timestamp_ms: int = 0,
        handedness: Optional[Sequence[str]] = None,
    ) -> "HandDetectionResult":
        """Build a result from raw (x, y) pairs, one sequence per hand."""
        built: List[HandLandmarks] = []
        for i, points in enumerate(hands):
            label = handedness[i] if handedness and i < len(handedness) else "Right"
            built.append(HandLandmarks(
                landmarks=tuple(Landmark(x=float(x), y=float(y)) for x, y in points),
                handedness=label,
            ))
        return cls(
            hands=tuple(built),
            image_width=image_width,
            image_height=image_height,
            timestamp_ms=timestamp_ms,
        )

    @property
    def hand_count(self) -> int:
        return len(self.hands)

    @property
    def is_empty(self) -> bool:
        return not self.hands

    @property
    def primary(self) -> Optional[HandLandmarks]:
        """First detected hand, the one that drives the pointer."""
        return self.hands[0] if self.hands else None
