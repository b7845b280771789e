"""
Pointer Controller
===================

Wires the landmark pipeline together:

    detector -> LandmarkResultChannel -> map_to_control_area -> PointerSmoothingFilter
             -> PointerActuator -> PointerSurface

The detector thread only publishes into the channel. Everything after
that (mapping, averaging, the exponential approach, rendering) runs on the
tick thread, so the filter state has a single writer.
"""

import logging
from typing import Optional

from .control.actuator import PointerActuator, PointerConfig
from .control.surfaces import PointerSurface
from .detection.result_channel import LandmarkResultChannel
from .detection.types import HandDetectionResult, LandmarkIndex
from .pointer.control_area import ControlAreaGeometry
from .pointer.mapper import CoordinateMapper
from .pointer.smoothing import PointerSmoothingFilter, SmoothingConfig
from .utils.performance import PerformanceMonitor

logger = logging.getLogger(__name__)


class PointerController:
    """
    Hand-landmark to pointer control loop.

    Example:
        >>> channel = LandmarkResultChannel()
        >>> geometry = ControlAreaGeometry()
        >>> controller = PointerController(channel, geometry, surface)
        >>> controller.start()           # acquires surface, starts ticking
        >>> geometry.on_size_changed(640, 480)
        >>> channel.publish(result)      # from the detector callback
        >>> controller.stop()
    """

    def __init__(
        self,
        channel: LandmarkResultChannel,
        geometry: ControlAreaGeometry,
        surface: PointerSurface,
        pointer_config: Optional[PointerConfig] = None,
        smoothing_config: Optional[SmoothingConfig] = None,
        monitor: Optional[PerformanceMonitor] = None,
    ):
        self.channel = channel
        self.geometry = geometry
        self.surface = surface
        self.pointer_config = pointer_config or PointerConfig()
        self.monitor = monitor

        self._tracked = LandmarkIndex(self.pointer_config.tracked_landmark)
        screen_width, screen_height = surface.size
        self.mapper = CoordinateMapper(screen_width, screen_height)
        self.filter = PointerSmoothingFilter(
            smoothing_config,
            screen_size=surface.size,
            initial_position=self.pointer_config.initial_position,
        )
        self.actuator = PointerActuator(
            surface,
            self.filter,
            interval=self.pointer_config.tick_interval_ms / 1000.0,
            feed=self.step,
            monitor=monitor,
        )
        self._running = False
        self._mapped_count = 0

    def start(self) -> None:
        """
        Acquire the surface and start the tick loop.

        Raises:
            SurfaceAcquisitionError: the surface could not be shown
        """
        logger.info("Starting pointer controller...")
        self.actuator.attach()

        # Desktop surfaces only know the real screen size once attached
        screen_width, screen_height = self.surface.size
        self.mapper.screen_width = screen_width
        self.mapper.screen_height = screen_height
        self.filter.set_screen_size(screen_width, screen_height)

        self.actuator.start()
        self._running = True
        logger.info(f"Pointer controller started, tracking {self._tracked.name} "
                    f"on {screen_width}x{screen_height}")

    def stop(self) -> None:
        """Stop ticking, close the channel, then release the surface."""
        if not self._running:
            return
        self._running = False
        logger.info("Stopping pointer controller...")
        self.actuator.stop()
        self.channel.close()
        self.actuator.release()
        logger.info(f"Pointer controller stopped ({self._mapped_count} targets mapped)")

    def step(self) -> Optional[tuple]:
        """
        Feed the newest detection into the filter.

        Called at the top of every tick. Does nothing if no new result was
        published since the last step or the newest publish was an absence
        signal; the pointer then holds its position.

        Returns:
            The screen target pushed into the filter, or None
        """
        result = self.channel.take()
        if result is None:
            return None

        if self.monitor is not None:
            with self.monitor.measure("mapping"):
                return self._push(result)
        return self._push(result)

    def _push(self, result: HandDetectionResult) -> Optional[tuple]:
        hand = result.primary
        if hand is None or len(hand.landmarks) <= self._tracked:
            return None

        point = hand.get(self._tracked)
        layout = self.geometry.layout
        screen = self.mapper.map_to_screen(point, layout.rect, layout.surface_size)
        self.filter.push_target(*screen)
        self._mapped_count += 1
        return screen

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def position(self):
        """Current displayed pointer position."""
        return self.filter.current
