"""
Hand Detection Module - MediaPipe Tasks API
============================================

Wraps the MediaPipe HandLandmarker and turns its output into
:class:`HandDetectionResult` objects. In ``LIVE_STREAM`` mode inference runs
asynchronously and every completion is published straight into a
:class:`LandmarkResultChannel`; ``VIDEO`` and ``IMAGE`` modes return the
result synchronously.
"""

import logging
import time
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import numpy as np
import mediapipe as mp
from mediapipe.tasks import python
from mediapipe.tasks.python import vision

from .result_channel import LandmarkResultChannel
from .types import HandDetectionResult, HandLandmarks, Landmark

logger = logging.getLogger(__name__)

# Model download URL
HAND_LANDMARKER_MODEL_URL = "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task"
# Resolved against the working directory
DEFAULT_MODEL_PATH = Path("models") / "hand_landmarker.task"

RUNNING_MODES = ("IMAGE", "VIDEO", "LIVE_STREAM")


@dataclass
class HandDetectorConfig:
    """Configuration for hand detector."""
    model_path: str = ""
    max_num_hands: int = 1
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5
    min_presence_confidence: float = 0.5
    running_mode: str = "LIVE_STREAM"  # IMAGE, VIDEO, or LIVE_STREAM

    @classmethod
    def from_dict(cls, d: dict) -> "HandDetectorConfig":
        """Create config from dictionary."""
        return cls(
            model_path=d.get("model_path", ""),
            max_num_hands=d.get("max_num_hands", 1),
            min_detection_confidence=d.get("min_detection_confidence", 0.5),
            min_tracking_confidence=d.get("min_tracking_confidence", 0.5),
            min_presence_confidence=d.get("min_presence_confidence", 0.5),
            running_mode=str(d.get("running_mode", "LIVE_STREAM")).upper(),
        )


def download_model(url: str, save_path: Path) -> bool:
    """Download the hand landmarker model if not present."""
    if save_path.exists():
        logger.info(f"Model already exists at {save_path}")
        return True

    try:
        save_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Downloading hand landmarker model to {save_path}...")
        urllib.request.urlretrieve(url, save_path)
        logger.info("Model download complete!")
        return True
    except Exception as e:
        logger.error(f"Failed to download model: {e}")
        return False


def convert_result(result, image_width: int, image_height: int, timestamp_ms: int) -> Optional[HandDetectionResult]:
    """
    Convert a MediaPipe ``HandLandmarkerResult`` to a :class:`HandDetectionResult`.

    Returns None when no hand was found so callers can publish it directly
    as an absence signal.
    """
    if result is None or not result.hand_landmarks:
        return None

    hands = []
    for i, hand_landmarks in enumerate(result.hand_landmarks):
        handedness = "Right"
        confidence = 0.0
        if result.handedness and len(result.handedness) > i:
            handedness = result.handedness[i][0].category_name
            confidence = result.handedness[i][0].score

        hands.append(HandLandmarks(
            landmarks=tuple(Landmark(x=lm.x, y=lm.y, z=lm.z) for lm in hand_landmarks),
            handedness=handedness,
            confidence=confidence,
        ))

    return HandDetectionResult(
        hands=tuple(hands),
        image_width=image_width,
        image_height=image_height,
        timestamp_ms=timestamp_ms,
    )


class HandDetector:
    """
    Hand detection wrapper using MediaPipe Tasks API (HandLandmarker).

    In LIVE_STREAM mode, :meth:`detect_async` returns immediately and the
    result is published to ``channel`` from MediaPipe's worker thread.
    Frames submitted while a previous inference is still running are
    dropped by MediaPipe, which keeps latency bounded.

    Example:
        >>> channel = LandmarkResultChannel()
        >>> detector = HandDetector(HandDetectorConfig(), channel)
        >>> detector.start()
        >>> detector.detect_async(rgb_image)   # RGB format!
        >>> result = channel.latest()
        >>> detector.stop()
    """

    def __init__(
        self,
        config: Optional[HandDetectorConfig] = None,
        channel: Optional[LandmarkResultChannel] = None,
        on_result: Optional[Callable[[Optional[HandDetectionResult]], None]] = None,
    ):
        self.config = config or HandDetectorConfig()
        self.channel = channel
        self._on_result = on_result
        self._landmarker: Optional[vision.HandLandmarker] = None
        self._last_timestamp_ms = 0
        self._frame_size = (0, 0)
        self._error_count = 0

    def start(self) -> bool:
        """Initialize the hand landmarker."""
        if self.config.running_mode not in RUNNING_MODES:
            logger.error(f"Unknown running mode: {self.config.running_mode}")
            return False

        try:
            model_path = self.config.model_path or str(DEFAULT_MODEL_PATH)

            if not Path(model_path).exists():
                if not download_model(HAND_LANDMARKER_MODEL_URL, Path(model_path)):
                    logger.error("Could not download hand landmarker model")
                    return False

            running_mode = getattr(vision.RunningMode, self.config.running_mode)
            base_options = python.BaseOptions(model_asset_path=model_path)

            kwargs = dict(
                base_options=base_options,
                running_mode=running_mode,
                num_hands=self.config.max_num_hands,
                min_hand_detection_confidence=self.config.min_detection_confidence,
                min_hand_presence_confidence=self.config.min_presence_confidence,
                min_tracking_confidence=self.config.min_tracking_confidence,
            )
            if self.config.running_mode == "LIVE_STREAM":
                kwargs["result_callback"] = self._handle_live_result

            options = vision.HandLandmarkerOptions(**kwargs)
            self._landmarker = vision.HandLandmarker.create_from_options(options)

            logger.info(f"HandLandmarker initialized with model: {model_path}")
            logger.info(f"Running mode: {self.config.running_mode}, Max hands: {self.config.max_num_hands}")

            return True

        except Exception as e:
            logger.error(f"Failed to initialize HandLandmarker: {e}")
            return False

    def stop(self) -> None:
        """Release resources."""
        if self._landmarker:
            try:
                self._landmarker.close()
            except Exception as e:
                logger.error(f"Failed to release HandLandmarker: {e}")
            self._landmarker = None
        logger.info("HandLandmarker stopped")

    def _next_timestamp(self, timestamp_ms: Optional[int]) -> int:
        """MediaPipe rejects timestamps that do not strictly increase."""
        if timestamp_ms is None:
            timestamp_ms = int(time.monotonic() * 1000)
        if timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = timestamp_ms
        return timestamp_ms

    def detect_async(self, image: np.ndarray, timestamp_ms: Optional[int] = None) -> bool:
        """
        Submit a frame for asynchronous detection (LIVE_STREAM mode).

        Args:
            image: RGB image as numpy array (H, W, 3)
            timestamp_ms: Frame timestamp in milliseconds

        Returns:
            True if the frame was submitted
        """
        if self._landmarker is None:
            logger.warning("HandLandmarker not initialized. Call start() first.")
            return False

        height, width = image.shape[:2]
        self._frame_size = (width, height)
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=image)

        try:
            self._landmarker.detect_async(mp_image, self._next_timestamp(timestamp_ms))
            return True
        except Exception as e:
            self._error_count += 1
            logger.error(f"Detection failed: {e}")
            self._deliver(None)
            return False

    def detect(self, image: np.ndarray, timestamp_ms: Optional[int] = None) -> Optional[HandDetectionResult]:
        """
        Detect hands synchronously (IMAGE or VIDEO mode).

        The result is also published to the channel, if one is attached.

        Returns:
            HandDetectionResult, or None if no hand was found or detection failed
        """
        if self._landmarker is None:
            logger.warning("HandLandmarker not initialized. Call start() first.")
            return None

        height, width = image.shape[:2]
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=image)
        timestamp_ms = self._next_timestamp(timestamp_ms)

        try:
            if self.config.running_mode == "IMAGE":
                raw = self._landmarker.detect(mp_image)
            else:
                raw = self._landmarker.detect_for_video(mp_image, timestamp_ms)
        except Exception as e:
            self._error_count += 1
            logger.error(f"Detection failed: {e}")
            self._deliver(None)
            return None

        result = convert_result(raw, width, height, timestamp_ms)
        self._deliver(result)
        return result

    def _handle_live_result(self, raw, output_image, timestamp_ms: int) -> None:
        """Result callback invoked on MediaPipe's worker thread."""
        width, height = self._frame_size
        try:
            result = convert_result(raw, width, height, timestamp_ms)
        except Exception as e:
            self._error_count += 1
            logger.error(f"Failed to convert detection result: {e}")
            result = None
        self._deliver(result)

    def _deliver(self, result: Optional[HandDetectionResult]) -> None:
        if self.channel is not None:
            self.channel.publish(result)
        if self._on_result is not None:
            try:
                self._on_result(result)
            except Exception as e:
                logger.error(f"Error in result callback: {e}")

    @property
    def is_running(self) -> bool:
        return self._landmarker is not None

    @property
    def error_count(self) -> int:
        return self._error_count

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
