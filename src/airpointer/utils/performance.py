"""
Performance Monitoring Module
==============================

Rolling metrics for the pointer loop: tick duration and overruns, preview
frame rate and detection rate.
"""

import time
import logging
from dataclasses import dataclass
from typing import Optional, Dict
from collections import deque
from contextlib import contextmanager
import threading

logger = logging.getLogger(__name__)


class Timer:
    """
    High-precision timer for measuring code execution time.

    Can be used as a context manager; :meth:`PerformanceMonitor.measure`
    times its stages with one.

    Example:
        >>> with Timer("mapping") as t:
        ...     mapper.map(point, rect, size)
        >>> print(f"Took {t.elapsed_ms:.2f}ms")
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._start_time: Optional[float] = None
        self._end_time: Optional[float] = None
        self._elapsed: float = 0.0

    def start(self) -> "Timer":
        """Start the timer."""
        self._start_time = time.perf_counter()
        self._end_time = None
        return self

    def stop(self) -> float:
        """Stop the timer and return elapsed time in seconds."""
        self._end_time = time.perf_counter()
        if self._start_time is not None:
            self._elapsed = self._end_time - self._start_time
        return self._elapsed

    @property
    def elapsed(self) -> float:
        """Get elapsed time in seconds."""
        if self._start_time is None:
            return 0.0
        if self._end_time is None:
            return time.perf_counter() - self._start_time
        return self._elapsed

    @property
    def elapsed_ms(self) -> float:
        """Get elapsed time in milliseconds."""
        return self.elapsed * 1000

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False


@dataclass
class PerformanceMetrics:
    """Container for performance metrics snapshot."""
    tick_time_ms: float = 0.0
    tick_rate: float = 0.0
    frame_rate: float = 0.0
    detection_rate: float = 0.0
    mapping_time_ms: float = 0.0
    total_ticks: int = 0
    overrun_ticks: int = 0
    total_detections: int = 0


class PerformanceMonitor:
    """
    Real-time performance monitoring for the pointer pipeline.

    Tracks:
    - Tick duration, tick rate and ticks that overran the tick interval
    - Preview frame rate (main loop)
    - Detection arrival rate
    - Named stage timings via :meth:`measure`

    Tick, frame and detection events come from different threads, so all
    shared state is guarded by one lock.

    Example:
        >>> monitor = PerformanceMonitor(tick_interval_ms=16)
        >>> monitor.start()
        >>> monitor.tick_start()
        >>> with monitor.measure("mapping"):
        ...     controller.step()
        >>> monitor.tick_complete()
    """

    def __init__(self, window_size: int = 60, tick_interval_ms: float = 16.0):
        """
        Initialize performance monitor.

        Args:
            window_size: Number of samples for rolling averages
            tick_interval_ms: Tick budget; longer ticks count as overruns
        """
        self.window_size = window_size
        self.tick_interval_ms = tick_interval_ms
        self._tick_times: deque = deque(maxlen=window_size)
        self._tick_stamps: deque = deque(maxlen=window_size)
        self._frame_stamps: deque = deque(maxlen=window_size)
        self._detection_stamps: deque = deque(maxlen=window_size)
        self._stage_times: Dict[str, deque] = {}
        self._tick_start: Optional[float] = None
        self._total_ticks: int = 0
        self._overrun_ticks: int = 0
        self._total_detections: int = 0
        self._running: bool = False
        self._lock = threading.Lock()

    def start(self) -> None:
        """Start performance monitoring."""
        with self._lock:
            self._running = True
            self._total_ticks = 0
            self._overrun_ticks = 0
            self._total_detections = 0
            self._tick_times.clear()
            self._tick_stamps.clear()
            self._frame_stamps.clear()
            self._detection_stamps.clear()
            self._stage_times.clear()
        logger.info("Performance monitor started")

    def stop(self) -> None:
        """Stop performance monitoring."""
        self._running = False
        logger.info(f"Performance monitor stopped. "
                    f"Total ticks: {self._total_ticks}, "
                    f"Overruns: {self._overrun_ticks}, "
                    f"Detections: {self._total_detections}")

    def tick_start(self) -> None:
        """Mark the start of a pointer tick."""
        self._tick_start = time.perf_counter()

    def tick_complete(self) -> None:
        """Mark the pointer tick complete and update metrics."""
        if self._tick_start is None:
            return

        now = time.perf_counter()
        tick_time = now - self._tick_start
        self._tick_start = None

        with self._lock:
            self._tick_times.append(tick_time)
            self._tick_stamps.append(now)
            self._total_ticks += 1
            if tick_time * 1000 > self.tick_interval_ms:
                self._overrun_ticks += 1

    def frame_complete(self) -> None:
        """Mark one preview frame processed by the main loop."""
        with self._lock:
            self._frame_stamps.append(time.perf_counter())

    def record_detection(self, result=None) -> None:
        """Count one detection callback (hand found or not)."""
        with self._lock:
            self._detection_stamps.append(time.perf_counter())
            self._total_detections += 1

    @contextmanager
    def measure(self, stage: str):
        """
        Context manager to measure a processing stage.

        Args:
            stage: Name of the stage (e.g., "mapping", "preview")
        """
        timer = Timer(stage).start()
        try:
            yield timer
        finally:
            elapsed = timer.stop()
            with self._lock:
                if stage not in self._stage_times:
                    self._stage_times[stage] = deque(maxlen=self.window_size)
                self._stage_times[stage].append(elapsed)

    @staticmethod
    def _rate(stamps: deque) -> float:
        if len(stamps) < 2:
            return 0.0
        span = stamps[-1] - stamps[0]
        return (len(stamps) - 1) / span if span > 0 else 0.0

    @property
    def tick_time_ms(self) -> float:
        """Average tick duration in milliseconds."""
        with self._lock:
            if not self._tick_times:
                return 0.0
            return (sum(self._tick_times) / len(self._tick_times)) * 1000

    @property
    def tick_rate(self) -> float:
        """Ticks per second over the rolling window."""
        with self._lock:
            return self._rate(self._tick_stamps)

    @property
    def fps(self) -> float:
        """Preview frames per second over the rolling window."""
        with self._lock:
            return self._rate(self._frame_stamps)

    @property
    def detection_rate(self) -> float:
        """Detection callbacks per second over the rolling window."""
        with self._lock:
            return self._rate(self._detection_stamps)

    def stage_time_ms(self, stage: str) -> float:
        """Get average time for a specific stage in milliseconds."""
        with self._lock:
            if stage not in self._stage_times or not self._stage_times[stage]:
                return 0.0
            times = self._stage_times[stage]
            return (sum(times) / len(times)) * 1000

    @property
    def is_meeting_targets(self) -> bool:
        """True while the average tick fits well inside the tick interval."""
        return self.tick_time_ms <= self.tick_interval_ms / 2

    def get_metrics(self) -> PerformanceMetrics:
        """Get current performance metrics snapshot."""
        return PerformanceMetrics(
            tick_time_ms=self.tick_time_ms,
            tick_rate=self.tick_rate,
            frame_rate=self.fps,
            detection_rate=self.detection_rate,
            mapping_time_ms=self.stage_time_ms("mapping"),
            total_ticks=self._total_ticks,
            overrun_ticks=self._overrun_ticks,
            total_detections=self._total_detections,
        )

    def get_report(self) -> str:
        """Get formatted performance report string."""
        metrics = self.get_metrics()

        status = "✓" if self.is_meeting_targets else "✗"

        return (
            f"Performance Report {status}\n"
            f"{'=' * 40}\n"
            f"Tick: {metrics.tick_time_ms:.2f}ms (budget: {self.tick_interval_ms:.0f}ms)\n"
            f"Tick Rate: {metrics.tick_rate:.1f}/s\n"
            f"Preview FPS: {metrics.frame_rate:.1f}\n"
            f"Detections: {metrics.detection_rate:.1f}/s\n"
            f"\nPer-Stage Breakdown:\n"
            f"  Mapping: {metrics.mapping_time_ms:.3f}ms\n"
            f"\nTick Stats:\n"
            f"  Total: {metrics.total_ticks}\n"
            f"  Overruns: {metrics.overrun_ticks} ({100*metrics.overrun_ticks/max(1,metrics.total_ticks):.1f}%)\n"
            f"  Detections: {metrics.total_detections}\n"
        )
