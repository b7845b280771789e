"""
Camera Capture Module
======================

Front-camera capture for hand tracking. A background thread keeps only the
newest frame, so the main loop never works on a stale image.
"""

import cv2
import time
import threading
import logging
from dataclasses import dataclass
from typing import Optional, Tuple
from collections import deque
import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    device_id: int = 0
    width: int = 640
    height: int = 480   # 4:3
    fps: int = 30
    buffer_size: int = 1
    threaded: bool = True
    mirror: bool = True  # Front camera: flip so moving right moves the pointer right
    warmup_frames: int = 5

    @classmethod
    def from_dict(cls, config: dict) -> "CameraConfig":
        """Create config from dictionary (YAML parsed)."""
        return cls(
            device_id=config.get("device_id", 0),
            width=config.get("width", 640),
            height=config.get("height", 480),
            fps=config.get("fps", 30),
            buffer_size=config.get("buffer_size", 1),
            threaded=config.get("threaded", True),
            mirror=config.get("mirror", True),
            warmup_frames=config.get("warmup_frames", 5),
        )


@dataclass
class Frame:
    """Captured BGR image with metadata."""
    image: np.ndarray
    timestamp_ms: int
    frame_number: int

    @property
    def rgb(self) -> np.ndarray:
        """Convert BGR to RGB (the detector's input format)."""
        return cv2.cvtColor(self.image, cv2.COLOR_BGR2RGB)

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) of the image."""
        height, width = self.image.shape[:2]
        return (width, height)


class Camera:
    """
    Camera capture with optional background thread.

    Example:
        >>> with Camera(CameraConfig()) as camera:
        ...     frame = camera.read()
        ...     if frame is not None:
        ...         detector.detect_async(frame.rgb, frame.timestamp_ms)
    """

    def __init__(self, config: Optional[CameraConfig] = None):
        self.config = config or CameraConfig()
        self._cap: Optional[cv2.VideoCapture] = None
        self._frame_number = 0
        self._running = False

        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._latest_frame: Optional[Frame] = None
        self._last_read_number = 0

        self._capture_times = deque(maxlen=30)  # type: deque

    def start(self) -> bool:
        """
        Open the device and start capturing.

        Returns:
            True if camera started successfully
        """
        logger.info("Starting camera (device={}, {}x{}@{}fps)".format(
            self.config.device_id, self.config.width, self.config.height, self.config.fps))

        self._cap = cv2.VideoCapture(self.config.device_id)
        if not self._cap.isOpened():
            logger.error("Failed to open camera device {}".format(self.config.device_id))
            self._cap = None
            return False

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.height)
        self._cap.set(cv2.CAP_PROP_FPS, self.config.fps)
        self._cap.set(cv2.CAP_PROP_BUFFERSIZE, self.config.buffer_size)

        actual_width = int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        actual_height = int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        logger.info("Camera initialized: {}x{}".format(actual_width, actual_height))

        for _ in range(self.config.warmup_frames):
            self._cap.read()

        self._running = True
        self._frame_number = 0

        if self.config.threaded:
            self._thread = threading.Thread(target=self._capture_loop, name="camera", daemon=True)
            self._thread.start()
            logger.info("Started threaded capture")

        return True

    def stop(self) -> None:
        """Stop camera capture and release resources."""
        logger.info("Stopping camera...")
        self._running = False

        if self._thread:
            self._thread.join(timeout=1.0)
            self._thread = None

        if self._cap:
            self._cap.release()
            self._cap = None

        logger.info("Camera stopped")

    def read(self) -> Optional[Frame]:
        """
        Read the newest frame.

        In threaded mode returns None if no frame arrived since the
        previous read, so the caller does not run detection twice on the
        same image.
        """
        if not self._running:
            return None

        if not self.config.threaded:
            return self._capture_frame()

        with self._lock:
            frame = self._latest_frame
            if frame is None or frame.frame_number == self._last_read_number:
                return None
            self._last_read_number = frame.frame_number
            return frame

    def _capture_frame(self) -> Optional[Frame]:
        """Capture a single frame from the camera."""
        if not self._cap:
            return None

        start_time = time.perf_counter()
        ret, image = self._cap.read()
        capture_time = time.perf_counter() - start_time

        if not ret or image is None:
            logger.warning("Failed to capture frame")
            return None

        if self.config.mirror:
            image = cv2.flip(image, 1)

        self._frame_number += 1
        self._capture_times.append(capture_time)

        return Frame(
            image=image,
            timestamp_ms=int(time.monotonic() * 1000),
            frame_number=self._frame_number,
        )

    def _capture_loop(self) -> None:
        """Background thread for continuous frame capture."""
        while self._running:
            frame = self._capture_frame()
            if frame is not None:
                with self._lock:
                    self._latest_frame = frame
            else:
                time.sleep(0.01)

    @property
    def is_running(self) -> bool:
        """Check if camera is currently running."""
        return self._running

    @property
    def resolution(self) -> Tuple[int, int]:
        """Get configured camera resolution."""
        return (self.config.width, self.config.height)

    @property
    def avg_capture_time_ms(self) -> float:
        """Get average frame capture time in milliseconds."""
        if not self._capture_times:
            return 0.0
        return (sum(self._capture_times) / len(self._capture_times)) * 1000

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.stop()
        return False
