"""
Coordinate Mapper
==================

Maps a normalized landmark into the control area and from there onto the
screen. Points outside the control area snap to its nearest edge.
"""

import logging
from typing import NamedTuple, Tuple

from ..detection.types import Landmark
from .control_area import Rect

logger = logging.getLogger(__name__)

# Returned on an axis whose control area has no extent
DEGENERATE_DEFAULT = 0.5


class RelativePosition(NamedTuple):
    """Position inside the control area, each axis in [0, 1]."""
    x: float
    y: float


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _relative_axis(value: float, low: float, high: float) -> float:
    extent = high - low
    if extent <= 0:
        return DEGENERATE_DEFAULT
    clamped = _clamp(value, low, high)
    return _clamp((clamped - low) / extent, 0.0, 1.0)


def map_to_control_area(
    point: Landmark,
    control_area: Rect,
    surface_size: Tuple[int, int],
) -> RelativePosition:
    """
    Map a normalized landmark to a relative position inside ``control_area``.

    Args:
        point: Landmark normalized to the source image
        control_area: Control rect in the coordinates of the surface
        surface_size: (width, height) of the surface the rect is defined in

    Returns:
        RelativePosition clamped to [0, 1] on both axes; 0.5 on an axis where
        the control area is degenerate
    """
    surface_width, surface_height = surface_size
    x = point.x * surface_width
    y = point.y * surface_height

    relative = RelativePosition(
        _relative_axis(x, control_area.left, control_area.right),
        _relative_axis(y, control_area.top, control_area.bottom),
    )

    if logger.isEnabledFor(logging.DEBUG):
        outside = not (control_area.left <= x <= control_area.right
                       and control_area.top <= y <= control_area.bottom)
        logger.debug(
            "Mapped (%.1f, %.1f)%s -> (%.3f, %.3f)",
            x, y, " [clamped]" if outside else "", relative.x, relative.y,
        )
    return relative


def to_screen(relative: RelativePosition, screen_width: int, screen_height: int) -> Tuple[int, int]:
    """Scale a relative position to integer screen coordinates."""
    return (int(relative.x * screen_width), int(relative.y * screen_height))


class CoordinateMapper:
    """
    Landmark-to-screen mapping bound to a screen size.

    Example:
        >>> mapper = CoordinateMapper(1920, 1080)
        >>> rel = mapper.map(Landmark(0.5, 0.5), Rect(100, 100, 300, 300), (400, 400))
        >>> mapper.to_screen(rel)
        (960, 540)
    """

    def __init__(self, screen_width: int, screen_height: int):
        self.screen_width = screen_width
        self.screen_height = screen_height

    def map(self, point: Landmark, control_area: Rect, surface_size: Tuple[int, int]) -> RelativePosition:
        return map_to_control_area(point, control_area, surface_size)

    def to_screen(self, relative: RelativePosition) -> Tuple[int, int]:
        return to_screen(relative, self.screen_width, self.screen_height)

    def map_to_screen(self, point: Landmark, control_area: Rect, surface_size: Tuple[int, int]) -> Tuple[int, int]:
        """Map a landmark straight to screen coordinates."""
        return self.to_screen(self.map(point, control_area, surface_size))
