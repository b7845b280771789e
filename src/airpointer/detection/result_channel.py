"""
Landmark Result Channel
========================

Latest-wins hand-off between the detector's result callback and the
pointer control loop. Holds at most one detection result and one camera
frame; a new publish replaces the old one in full.
"""

import logging
import threading
from typing import Optional

from .types import HandDetectionResult

logger = logging.getLogger(__name__)


class LandmarkResultChannel:
    """
    Single-slot, overwrite-on-full channel for detection results.

    The detector thread calls :meth:`publish`; the control loop calls
    :meth:`take` once per tick. Any number of other readers (preview,
    status display) may call :meth:`latest`. The lock only guards a
    reference swap, so neither side ever waits on the other's work.

    Example:
        >>> channel = LandmarkResultChannel()
        >>> channel.publish(result)      # detector thread
        >>> fresh = channel.take()       # tick thread, None if nothing new
        >>> channel.close()
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._result: Optional[HandDetectionResult] = None
        self._frame = None
        self._sequence = 0
        self._taken_sequence = 0
        self._closed = False

    def publish(self, result: Optional[HandDetectionResult]) -> bool:
        """
        Replace the held result.

        An empty result (no hands) is stored as ``None`` so that readers
        treat "no hand" and "detector error" identically.

        Returns:
            False if the channel has been closed and the result was dropped
        """
        if result is not None and result.is_empty:
            result = None

        with self._lock:
            if self._closed:
                logger.debug("Channel closed, dropping result")
                return False
            self._result = result
            self._sequence += 1
        return True

    def clear(self) -> bool:
        """Publish an absence signal."""
        return self.publish(None)

    def latest(self) -> Optional[HandDetectionResult]:
        """Most recent result without consuming it."""
        with self._lock:
            return self._result

    def take(self) -> Optional[HandDetectionResult]:
        """
        Consume the most recent result.

        Returns the held result only if something was published since the
        previous call; intermediate results a slow consumer missed are gone.
        Returns None both when nothing new arrived and when the newest
        publish was an absence signal.
        """
        with self._lock:
            if self._sequence == self._taken_sequence:
                return None
            self._taken_sequence = self._sequence
            return self._result

    def publish_frame(self, frame) -> bool:
        """Replace the held camera frame."""
        with self._lock:
            if self._closed:
                return False
            self._frame = frame
        return True

    def latest_frame(self):
        """Most recent camera frame, or None."""
        with self._lock:
            return self._frame

    def close(self) -> None:
        """Drop held references and refuse further publishes."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._result = None
            self._frame = None
        logger.info("Result channel closed after %d publishes", self._sequence)

    @property
    def sequence(self) -> int:
        """Number of publishes accepted so far."""
        with self._lock:
            return self._sequence

    @property
    def is_closed(self) -> bool:
        with self._lock:
            return self._closed
