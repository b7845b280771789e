"""
Periodic Ticker
================

Fixed-rate timer thread for the pointer render loop.
"""

import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicTicker:
    """
    Calls ``callback`` every ``interval`` seconds on a dedicated thread.

    Deadlines are computed from the start time, not from the end of the
    previous tick, so the rate does not drift. If a tick runs past one or
    more deadlines, the missed ticks are skipped rather than run back to
    back.

    Example:
        >>> ticker = PeriodicTicker(0.016, actuator.on_tick, name="pointer-tick")
        >>> ticker.start()
        >>> ...
        >>> ticker.stop()
    """

    def __init__(self, interval: float, callback: Callable[[], None], name: str = "ticker"):
        if interval <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval}")
        self.interval = interval
        self.name = name
        self._callback = callback
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._tick_count = 0
        self._skipped_ticks = 0

    def start(self) -> None:
        """Start ticking. Calling start on a running ticker is a no-op."""
        if self._thread is not None:
            logger.warning(f"Ticker '{self.name}' already started")
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        logger.info(f"Ticker '{self.name}' started ({self.interval * 1000:.0f}ms interval)")

    def stop(self, timeout: float = 1.0) -> None:
        """Stop ticking and wait for an in-flight tick to finish."""
        thread = self._thread
        if thread is None:
            return
        self._stop_event.set()
        if thread is not threading.current_thread():
            thread.join(timeout=timeout)
        self._thread = None
        logger.info(f"Ticker '{self.name}' stopped after {self._tick_count} ticks "
                    f"({self._skipped_ticks} skipped)")

    def _run(self) -> None:
        next_deadline = time.perf_counter() + self.interval
        while not self._stop_event.wait(max(0.0, next_deadline - time.perf_counter())):
            try:
                self._callback()
            except Exception:
                logger.exception(f"Error in tick callback of '{self.name}'")
            self._tick_count += 1

            next_deadline += self.interval
            now = time.perf_counter()
            if now > next_deadline:
                missed = int((now - next_deadline) // self.interval) + 1
                self._skipped_ticks += missed
                next_deadline += missed * self.interval
                logger.debug(f"Ticker '{self.name}' overran, skipped {missed} tick(s)")

    @property
    def is_running(self) -> bool:
        return self._thread is not None and not self._stop_event.is_set()

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def skipped_ticks(self) -> int:
        return self._skipped_ticks
