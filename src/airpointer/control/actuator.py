"""
Pointer Actuator
=================

Owns the render surface and drives the smoothing filter at a fixed rate.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from ..pointer.smoothing import PointerSmoothingFilter
from ..utils.performance import PerformanceMonitor
from .surfaces import PointerSurface, SurfaceUnavailableError
from .ticker import PeriodicTicker

logger = logging.getLogger(__name__)


@dataclass
class PointerConfig:
    """Pointer loop settings."""
    tick_interval_ms: float = 16.0   # ~60 Hz
    tracked_landmark: int = 4        # Thumb tip
    initial_x: int = 100
    initial_y: int = 100

    @classmethod
    def from_dict(cls, config: dict) -> "PointerConfig":
        """Create config from dictionary."""
        return cls(
            tick_interval_ms=config.get("tick_interval_ms", 16.0),
            tracked_landmark=config.get("tracked_landmark", 4),
            initial_x=config.get("initial_x", 100),
            initial_y=config.get("initial_y", 100),
        )

    @property
    def initial_position(self) -> Tuple[int, int]:
        return (self.initial_x, self.initial_y)


class PointerActuator:
    """
    Renders the filtered pointer position once per tick.

    Lifecycle: :meth:`attach` acquires the surface, :meth:`start` begins
    ticking, :meth:`stop` ends ticking and :meth:`release` gives the surface
    back. ``stop`` and ``release`` are safe to call more than once; the
    underlying work happens exactly once.

    Example:
        >>> actuator = PointerActuator(surface, smoother, interval=0.016)
        >>> actuator.attach()
        >>> actuator.start()
        >>> ...
        >>> actuator.stop()
        >>> actuator.release()
    """

    def __init__(
        self,
        surface: PointerSurface,
        smoothing_filter: PointerSmoothingFilter,
        interval: float = 0.016,
        feed: Optional[Callable[[], None]] = None,
        monitor: Optional[PerformanceMonitor] = None,
    ):
        self.surface = surface
        self.filter = smoothing_filter
        self._feed = feed
        self._monitor = monitor
        self._ticker = PeriodicTicker(interval, self.on_tick, name="pointer-tick")
        self._active = False
        self._stopped = False
        self._released = False
        self._lifecycle_lock = threading.Lock()
        self._render_count = 0
        self._skipped_renders = 0

    def attach(self) -> None:
        """Acquire the render surface. SurfaceAcquisitionError propagates."""
        self.surface.add_to_surface()

    def start(self) -> None:
        """Begin fixed-rate ticking."""
        with self._lifecycle_lock:
            if self._stopped:
                raise RuntimeError("Pointer actuator cannot be restarted after stop()")
            if self._active:
                return
            self._active = True
        self._ticker.start()

    def stop(self) -> None:
        """Stop ticking. No tick runs after this returns."""
        with self._lifecycle_lock:
            if self._stopped:
                return
            self._stopped = True
            self._active = False
        self._ticker.stop()
        logger.info(f"Pointer actuator stopped ({self._render_count} renders, "
                    f"{self._skipped_renders} skipped)")

    def release(self) -> None:
        """Remove the render surface."""
        with self._lifecycle_lock:
            if self._released:
                return
            self._released = True
        if not self.surface.is_attached:
            return
        try:
            self.surface.remove_from_surface()
        except SurfaceUnavailableError as e:
            logger.debug(f"Surface already gone: {e}")

    def on_tick(self) -> None:
        """One iteration of the pointer loop."""
        if not self._active:
            return

        if self._monitor is not None:
            self._monitor.tick_start()

        if self._feed is not None:
            self._feed()

        position = self.filter.tick()
        if position is not None:
            self._render(position)

        if self._monitor is not None:
            self._monitor.tick_complete()

    def _render(self, position: Tuple[int, int]) -> None:
        width, height = self.surface.size
        x = max(0, min(width - 1, position[0]))
        y = max(0, min(height - 1, position[1]))
        try:
            self.surface.set_position(x, y)
            self._render_count += 1
        except SurfaceUnavailableError as e:
            self._skipped_renders += 1
            logger.debug(f"Skipping pointer update: {e}")

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def render_count(self) -> int:
        return self._render_count

    @property
    def skipped_renders(self) -> int:
        return self._skipped_renders

    @property
    def ticker(self) -> PeriodicTicker:
        return self._ticker
