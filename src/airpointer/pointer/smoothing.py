"""
Pointer Smoothing Filter
=========================

Two-stage temporal filter for the pointer position:

1. Every raw target is pushed into a short history; the target the pointer
   chases is the mean of that history.
2. On each tick the displayed position moves a fixed fraction of the way
   toward the target, but only if that step is larger than a movement
   threshold. Smaller steps are dropped so the pointer does not shimmer
   while the hand is held still.
"""

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass
class SmoothingConfig:
    """Smoothing filter settings."""
    history_size: int = 5           # Raw targets kept for the moving average
    smooth_factor: float = 0.3      # Fraction of the remaining distance per tick
    movement_threshold: float = 3.0 # Minimum per-tick step, in pixels
    edge_margin: int = 48           # Kept free at the right edge
    bottom_margin: int = 96         # Kept free at the bottom edge

    @classmethod
    def from_dict(cls, config: dict) -> "SmoothingConfig":
        """Create config from dictionary."""
        return cls(
            history_size=config.get("history_size", 5),
            smooth_factor=config.get("smooth_factor", 0.3),
            movement_threshold=config.get("movement_threshold", 3.0),
            edge_margin=config.get("edge_margin", 48),
            bottom_margin=config.get("bottom_margin", 96),
        )


class PositionHistory:
    """Fixed-capacity history of raw values for one axis."""

    def __init__(self, capacity: int = 5):
        if capacity < 1:
            raise ValueError(f"History capacity must be at least 1, got {capacity}")
        self._values: Deque[float] = deque(maxlen=capacity)

    def push(self, value: float) -> float:
        """Add a value (evicting the oldest when full) and return the new mean."""
        self._values.append(value)
        return self.mean

    @property
    def mean(self) -> float:
        if not self._values:
            return 0.0
        return sum(self._values) / len(self._values)

    @property
    def capacity(self) -> int:
        return self._values.maxlen

    def clear(self) -> None:
        self._values.clear()

    def __len__(self) -> int:
        return len(self._values)


class PointerSmoothingFilter:
    """
    Moving-average target plus thresholded exponential approach.

    ``push_target`` may be called from any thread; ``tick`` is called by the
    fixed-rate ticker. Both take the same lock, and neither does more than a
    handful of arithmetic operations while holding it.

    Example:
        >>> smoother = PointerSmoothingFilter(SmoothingConfig(), (1920, 1080))
        >>> smoother.push_target(800, 400)
        >>> while running:
        ...     position = smoother.tick()
        ...     if position is not None:
        ...         surface.set_position(*position)
    """

    def __init__(
        self,
        config: Optional[SmoothingConfig] = None,
        screen_size: Tuple[int, int] = (1920, 1080),
        initial_position: Tuple[int, int] = (100, 100),
    ):
        self.config = config or SmoothingConfig()
        self._screen_size = screen_size
        self._lock = threading.Lock()

        self._history_x = PositionHistory(self.config.history_size)
        self._history_y = PositionHistory(self.config.history_size)

        self._current_x, self._current_y = self._clamp(*initial_position)
        self._target_x: float = self._current_x
        self._target_y: float = self._current_y

    def _bounded(self, x: float, y: float) -> Tuple[float, float]:
        width, height = self._screen_size
        max_x = max(0, width - self.config.edge_margin)
        max_y = max(0, height - self.config.bottom_margin)
        return (max(0, min(max_x, x)), max(0, min(max_y, y)))

    def _clamp(self, x: float, y: float) -> Tuple[int, int]:
        x, y = self._bounded(x, y)
        return (int(x), int(y))

    def push_target(self, x: float, y: float) -> Tuple[float, float]:
        """
        Record a new raw target.

        Returns:
            The averaged target the pointer will now chase, clamped to the
            pointer bounds
        """
        with self._lock:
            # Same bounds as the pointer
            self._target_x, self._target_y = self._bounded(
                self._history_x.push(x), self._history_y.push(y)
            )
            return (self._target_x, self._target_y)

    def tick(self) -> Optional[Tuple[int, int]]:
        """
        Advance the displayed position one step toward the target.

        Returns:
            The new position, or None if the step was below the movement
            threshold on both axes or the clamped position did not change
        """
        with self._lock:
            delta_x = (self._target_x - self._current_x) * self.config.smooth_factor
            delta_y = (self._target_y - self._current_y) * self.config.smooth_factor

            threshold = self.config.movement_threshold
            if abs(delta_x) <= threshold and abs(delta_y) <= threshold:
                return None

            position = self._clamp(
                self._current_x + int(delta_x),
                self._current_y + int(delta_y),
            )
            if position == (self._current_x, self._current_y):
                return None
            self._current_x, self._current_y = position
            return (self._current_x, self._current_y)

    def reset(self, position: Optional[Tuple[int, int]] = None) -> None:
        """
        Clear the history and put the filter at rest.

        Args:
            position: New displayed position; defaults to the current one
        """
        with self._lock:
            self._history_x.clear()
            self._history_y.clear()
            if position is not None:
                self._current_x, self._current_y = self._clamp(*position)
            self._target_x = self._current_x
            self._target_y = self._current_y
        logger.debug("Smoothing filter reset at (%d, %d)", self._current_x, self._current_y)

    def set_screen_size(self, width: int, height: int) -> None:
        """Change the clamp bounds, e.g. after a display change."""
        with self._lock:
            self._screen_size = (width, height)
            self._current_x, self._current_y = self._clamp(self._current_x, self._current_y)
            self._target_x, self._target_y = self._bounded(self._target_x, self._target_y)

    @property
    def current(self) -> Tuple[int, int]:
        """Displayed position."""
        with self._lock:
            return (self._current_x, self._current_y)

    @property
    def target(self) -> Tuple[float, float]:
        """Averaged target position."""
        with self._lock:
            return (self._target_x, self._target_y)

    @property
    def is_idle(self) -> bool:
        """True when the next tick would not move the pointer."""
        with self._lock:
            threshold = self.config.movement_threshold
            factor = self.config.smooth_factor
            return (abs(self._target_x - self._current_x) * factor <= threshold
                    and abs(self._target_y - self._current_y) * factor <= threshold)
