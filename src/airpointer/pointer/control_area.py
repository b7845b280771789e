"""
Control Area Geometry
======================

The control area is the sub-rectangle of the tracking view that maps to
the full pointer range. It is centered, keeps a 3:4 (width:height) shape in
either orientation, and scales with the view.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)

# Width:height of the control area, matching the 4:3 camera frame turned upright
ASPECT_WIDTH = 3.0
ASPECT_HEIGHT = 4.0


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in view-local coordinates."""
    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def empty(cls) -> "Rect":
        return cls(0.0, 0.0, 0.0, 0.0)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def is_degenerate(self) -> bool:
        """True if the rect has no area (e.g. before the first layout)."""
        return self.width <= 0 or self.height <= 0

    @property
    def center(self) -> Tuple[float, float]:
        return ((self.left + self.right) / 2, (self.top + self.bottom) / 2)

    def as_int_corners(self) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        """Top-left and bottom-right corners as integer pixels (for drawing)."""
        return (int(self.left), int(self.top)), (int(self.right), int(self.bottom))


class ControlLayout(NamedTuple):
    """A control rect together with the size of the view it was computed for."""
    surface_size: Tuple[int, int]
    rect: Rect


@dataclass
class ControlAreaConfig:
    """Control area settings."""
    ratio: float = 0.5  # Basis dimension fraction taken by the control area

    @classmethod
    def from_dict(cls, config: dict) -> "ControlAreaConfig":
        """Create config from dictionary."""
        return cls(ratio=config.get("ratio", 0.5))


def compute_control_rect(surface_width: float, surface_height: float, ratio: float = 0.5) -> Rect:
    """
    Derive the centered control rectangle for a view of the given size.

    Landscape views use the height as basis, portrait and square views the
    width, so the rectangle keeps the same shape when the view rotates.
    """
    if surface_width <= 0 or surface_height <= 0:
        return Rect.empty()

    if surface_width > surface_height:
        control_height = surface_height * ratio
        control_width = control_height * ASPECT_WIDTH / ASPECT_HEIGHT
    else:
        control_width = surface_width * ratio
        control_height = control_width * ASPECT_HEIGHT / ASPECT_WIDTH

    left = (surface_width - control_width) / 2
    top = (surface_height - control_height) / 2
    return Rect(left, top, left + control_width, top + control_height)


class ControlAreaGeometry:
    """
    Holds the current control rectangle of a view and recomputes it on resize.

    The view size and rect are swapped together as one immutable
    :class:`ControlLayout`, so the tick thread reading :attr:`layout` never
    sees a rect paired with the wrong view size during a resize.

    Example:
        >>> geometry = ControlAreaGeometry(ControlAreaConfig(ratio=0.5))
        >>> geometry.on_size_changed(800, 400)
        >>> geometry.rect
        Rect(left=325.0, top=100.0, right=475.0, bottom=300.0)
    """

    def __init__(self, config: Optional[ControlAreaConfig] = None):
        self.config = config or ControlAreaConfig()
        self._layout = ControlLayout((0, 0), Rect.empty())
        self._listeners: List[Callable[[Rect], None]] = []
        self._lock = threading.Lock()

    def recompute(self, surface_width: int, surface_height: int) -> Rect:
        """Recompute and store the control rect for a new view size."""
        rect = compute_control_rect(surface_width, surface_height, self.config.ratio)
        self._layout = ControlLayout((surface_width, surface_height), rect)

        orientation = "landscape" if surface_width > surface_height else "portrait"
        logger.debug(
            "%s control area: left=%.1f, top=%.1f, width=%.1f, height=%.1f",
            orientation, rect.left, rect.top, rect.width, rect.height,
        )
        return rect

    def on_size_changed(self, surface_width: int, surface_height: int) -> bool:
        """
        Handle a view size change event.

        Returns:
            True if the size differed from the previous one and the rect was
            recomputed
        """
        if (surface_width, surface_height) == self._layout.surface_size:
            return False

        rect = self.recompute(surface_width, surface_height)
        logger.info(f"View resized to {surface_width}x{surface_height}, control area updated")

        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(rect)
            except Exception as e:
                logger.error(f"Error in resize listener: {e}")
        return True

    def add_listener(self, listener: Callable[[Rect], None]) -> None:
        """Register a callback fired with the new rect after each resize."""
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[Rect], None]) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    @property
    def layout(self) -> ControlLayout:
        """View size and control rect, read together."""
        return self._layout

    @property
    def rect(self) -> Rect:
        """Current control rectangle (empty before the first layout)."""
        return self._layout.rect

    @property
    def surface_size(self) -> Tuple[int, int]:
        """Size of the view the control area is defined in."""
        return self._layout.surface_size
