"""
Shared test fixtures
=====================
"""

import sys
from pathlib import Path
from typing import List, Tuple

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from airpointer.control.surfaces import PointerSurface
from airpointer.detection.types import HandDetectionResult, NUM_HAND_LANDMARKS


class FakeSurface(PointerSurface):
    """In-memory render surface that records every call."""

    def __init__(self, size: Tuple[int, int] = (1000, 1000)):
        super().__init__()
        self._size = size
        self.positions: List[Tuple[int, int]] = []
        self.add_calls = 0
        self.remove_calls = 0

    @property
    def size(self) -> Tuple[int, int]:
        return self._size

    def _do_add(self) -> None:
        self.add_calls += 1

    def _do_remove(self) -> None:
        self.remove_calls += 1

    def _do_set_position(self, x: int, y: int) -> None:
        self.positions.append((x, y))


def make_result(
    tracked: Tuple[float, float] = (0.5, 0.5),
    tracked_index: int = 4,
    hands: int = 1,
) -> HandDetectionResult:
    """Build a detection result whose tracked landmark sits at ``tracked``."""
    points = [(0.5, 0.6)] * NUM_HAND_LANDMARKS
    points[tracked_index] = tracked
    return HandDetectionResult.from_points([points] * hands, image_width=640, image_height=480)


@pytest.fixture
def fake_surface():
    return FakeSurface()


@pytest.fixture
def result_factory():
    return make_result
