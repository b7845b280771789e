"""
Tests for Coordinate Mapper
============================
"""

import pytest

from airpointer.detection.types import Landmark
from airpointer.pointer.control_area import Rect
from airpointer.pointer.mapper import (
    CoordinateMapper,
    RelativePosition,
    map_to_control_area,
    to_screen,
)


class TestMapToControlArea:
    """Test suite for normalized point to relative position mapping."""

    @pytest.fixture
    def rect(self):
        return Rect(100, 100, 300, 300)

    def test_center_maps_to_center(self, rect):
        """Center of the control area maps to the center of the range."""
        rel = map_to_control_area(Landmark(0.5, 0.5), rect, (400, 400))

        assert rel == RelativePosition(0.5, 0.5)

    def test_corners(self, rect):
        """Control area corners map to 0 and 1."""
        top_left = map_to_control_area(Landmark(0.25, 0.25), rect, (400, 400))
        bottom_right = map_to_control_area(Landmark(0.75, 0.75), rect, (400, 400))

        assert top_left == (0.0, 0.0)
        assert bottom_right == (1.0, 1.0)

    def test_outside_on_one_axis_clamps(self, rect):
        """A point left of the area snaps to exactly 0.0 on x only."""
        rel = map_to_control_area(Landmark(0.05, 0.5), rect, (400, 400))

        assert rel.x == 0.0
        assert rel.y == pytest.approx(0.5)

    def test_outside_far_right_and_below(self, rect):
        """Points beyond the far edges snap to exactly 1.0."""
        rel = map_to_control_area(Landmark(0.99, 1.0), rect, (400, 400))

        assert rel.x == 1.0
        assert rel.y == 1.0

    def test_never_extrapolates(self, rect):
        """Out-of-image landmarks still land in [0, 1]."""
        rel = map_to_control_area(Landmark(-0.4, 1.7), rect, (400, 400))

        assert 0.0 <= rel.x <= 1.0
        assert 0.0 <= rel.y <= 1.0

    def test_uses_surface_size(self):
        """Normalized coordinates are scaled by the surface the rect lives in."""
        rect = Rect(325, 100, 475, 300)  # Control area of an 800x400 view
        rel = map_to_control_area(Landmark(400 / 800, 150 / 400), rect, (800, 400))

        assert rel.x == pytest.approx(0.5)
        assert rel.y == pytest.approx(0.25)

    def test_degenerate_rect_returns_center(self):
        """A zero-area rect (before first layout) yields the 0.5 default."""
        rel = map_to_control_area(Landmark(0.9, 0.1), Rect.empty(), (0, 0))

        assert rel == (0.5, 0.5)

    def test_degenerate_single_axis(self):
        """Only the collapsed axis falls back to the default."""
        rect = Rect(100, 200, 300, 200)
        rel = map_to_control_area(Landmark(0.75, 0.9), rect, (400, 400))

        assert rel.x == pytest.approx(1.0)
        assert rel.y == 0.5


class TestToScreen:
    """Test suite for relative to screen conversion."""

    def test_scales_and_truncates(self):
        assert to_screen(RelativePosition(0.5, 0.5), 1920, 1080) == (960, 540)
        assert to_screen(RelativePosition(0.3333, 0.9999), 100, 100) == (33, 99)

    def test_edges(self):
        assert to_screen(RelativePosition(0.0, 0.0), 1920, 1080) == (0, 0)
        assert to_screen(RelativePosition(1.0, 1.0), 1920, 1080) == (1920, 1080)


class TestCoordinateMapper:
    """Test suite for the screen-bound mapper."""

    def test_map_to_screen(self):
        mapper = CoordinateMapper(1920, 1080)

        screen = mapper.map_to_screen(Landmark(0.5, 0.5), Rect(100, 100, 300, 300), (400, 400))

        assert screen == (960, 540)

    def test_screen_size_can_change(self):
        mapper = CoordinateMapper(100, 100)
        mapper.screen_width, mapper.screen_height = 200, 50

        assert mapper.to_screen(RelativePosition(0.5, 0.5)) == (100, 25)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
