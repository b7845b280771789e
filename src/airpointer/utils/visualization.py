"""
Visualization Module
=====================

Preview overlays: the control area, hand landmarks, status text and
performance figures, drawn on the camera frame.
"""

import cv2
import numpy as np
from typing import Optional, Tuple, List, Dict
from dataclasses import dataclass

from ..detection.types import HandDetectionResult, HandLandmarks
from ..pointer.control_area import Rect


@dataclass
class VisualizerConfig:
    """Visualization settings."""
    show_preview: bool = True
    show_landmarks: bool = True
    show_connections: bool = True
    show_control_area: bool = True
    show_status: bool = True
    show_performance: bool = True
    window_name: str = "AirPointer Preview"

    # Colors (BGR format)
    landmark_color: Tuple[int, int, int] = (0, 255, 255)     # Yellow
    connection_color: Tuple[int, int, int] = (255, 255, 0)   # Cyan
    control_area_color: Tuple[int, int, int] = (183, 58, 103) # Purple
    control_area_alpha: float = 0.25
    text_color: Tuple[int, int, int] = (255, 255, 255)       # White
    warning_color: Tuple[int, int, int] = (0, 0, 255)        # Red

    font_scale: float = 0.6
    font_thickness: int = 2

    @classmethod
    def from_dict(cls, config: dict) -> "VisualizerConfig":
        """Create config from dictionary."""
        colors = config.get("colors", {})
        return cls(
            show_preview=config.get("show_preview", True),
            show_landmarks=config.get("show_landmarks", True),
            show_connections=config.get("show_connections", True),
            show_control_area=config.get("show_control_area", True),
            show_status=config.get("show_status", True),
            show_performance=config.get("show_performance", True),
            window_name=config.get("window_name", "AirPointer Preview"),
            landmark_color=tuple(colors.get("landmarks", [0, 255, 255])),
            connection_color=tuple(colors.get("connections", [255, 255, 0])),
            control_area_color=tuple(colors.get("control_area", [183, 58, 103])),
            control_area_alpha=config.get("control_area_alpha", 0.25),
            text_color=tuple(colors.get("text", [255, 255, 255])),
            font_scale=config.get("font_scale", 0.6),
            font_thickness=config.get("font_thickness", 2),
        )


class Visualizer:
    """
    Draws the tracking preview.

    Example:
        >>> viz = Visualizer(VisualizerConfig())
        >>> display = frame.image.copy()
        >>> viz.draw_control_area(display, geometry.rect)
        >>> viz.draw_result(display, channel.latest())
        >>> viz.draw_status(display, "1 hand detected: OPEN")
        >>> cv2.imshow(viz.config.window_name, display)
    """

    # Hand connection pairs for drawing skeleton
    HAND_CONNECTIONS = [
        (0, 1), (1, 2), (2, 3), (3, 4),         # Thumb
        (0, 5), (5, 6), (6, 7), (7, 8),         # Index
        (5, 9), (9, 10), (10, 11), (11, 12),    # Middle
        (9, 13), (13, 14), (14, 15), (15, 16),  # Ring
        (13, 17), (17, 18), (18, 19), (19, 20), # Pinky
        (0, 17),                                # Palm base
    ]

    def __init__(self, config: Optional[VisualizerConfig] = None):
        self.config = config or VisualizerConfig()
        self._font = cv2.FONT_HERSHEY_SIMPLEX

    def draw_control_area(self, image: np.ndarray, rect: Rect) -> np.ndarray:
        """Blend a translucent fill over the control area."""
        if not self.config.show_control_area or rect.is_degenerate:
            return image

        top_left, bottom_right = rect.as_int_corners()
        overlay = image.copy()
        cv2.rectangle(overlay, top_left, bottom_right, self.config.control_area_color, -1)
        alpha = self.config.control_area_alpha
        cv2.addWeighted(overlay, alpha, image, 1 - alpha, 0, dst=image)
        cv2.rectangle(image, top_left, bottom_right, self.config.control_area_color, 1)
        return image

    def draw_result(self, image: np.ndarray, result: Optional[HandDetectionResult]) -> np.ndarray:
        """Draw every hand in a detection result, scaled to the image."""
        if result is None:
            return image
        for hand in result.hands:
            self.draw_hand(image, hand)
        return image

    def draw_hand(self, image: np.ndarray, hand: HandLandmarks) -> np.ndarray:
        """
        Draw single hand landmarks and connections.

        Landmarks are normalized, so they are scaled to this image's size
        rather than the size of the frame they were detected on.
        """
        height, width = image.shape[:2]
        points: List[Tuple[int, int]] = [lm.to_pixel(width, height) for lm in hand.landmarks]

        if self.config.show_connections:
            for start_idx, end_idx in self.HAND_CONNECTIONS:
                if start_idx < len(points) and end_idx < len(points):
                    cv2.line(image, points[start_idx], points[end_idx],
                             self.config.connection_color, 2)

        if self.config.show_landmarks:
            for i, (x, y) in enumerate(points):
                radius = 6 if i in (4, 8, 12, 16, 20) else 4
                cv2.circle(image, (x, y), radius, self.config.landmark_color, -1)

        return image

    def draw_status(self, image: np.ndarray, text: str) -> np.ndarray:
        """Draw the status line at the bottom-left."""
        if not self.config.show_status:
            return image
        height = image.shape[0]
        cv2.putText(image, text, (20, height - 20),
                    self._font, self.config.font_scale,
                    self.config.text_color, self.config.font_thickness)
        return image

    def draw_performance(
        self,
        image: np.ndarray,
        fps: float = 0.0,
        tick_ms: float = 0.0,
        tick_budget_ms: float = 16.0,
        extra_info: Optional[Dict[str, str]] = None
    ) -> np.ndarray:
        """
        Draw performance metrics overlay.

        Args:
            image: BGR image to draw on
            fps: Preview frames per second
            tick_ms: Average pointer tick duration
            tick_budget_ms: Tick interval; the figure turns red above half of it
            extra_info: Additional key-value pairs to display
        """
        if not self.config.show_performance:
            return image

        x, y = 20, 30
        line_height = 25

        cv2.putText(image, f"FPS: {fps:.1f}", (x, y),
                    self._font, self.config.font_scale,
                    self.config.text_color, self.config.font_thickness)
        y += line_height

        tick_color = self.config.text_color if tick_ms <= tick_budget_ms / 2 else self.config.warning_color
        cv2.putText(image, f"Tick: {tick_ms:.2f}ms", (x, y),
                    self._font, self.config.font_scale,
                    tick_color, self.config.font_thickness)
        y += line_height

        if extra_info:
            for key, value in extra_info.items():
                cv2.putText(image, f"{key}: {value}", (x, y),
                            self._font, 0.5, self.config.text_color, 1)
                y += 20

        return image
