"""
Pointer Render Surfaces
========================

Where the pointer is drawn. A surface only knows how to show a pointer at
an absolute position; bounds checking is the caller's job.

- OverlayCanvasSurface: OpenCV window with a pointer glyph
- DesktopCursorSurface: moves the operating system cursor (pyautogui)
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional, Tuple

import cv2
import numpy as np

logger = logging.getLogger(__name__)


class AirPointerError(Exception):
    """Base class for errors raised by this package."""


class SurfaceUnavailableError(AirPointerError):
    """The surface is not attached (not yet added, or already removed)."""


class SurfaceAcquisitionError(AirPointerError):
    """The surface could not be acquired at setup. Not retried."""


@dataclass
class OverlayConfig:
    """Render surface settings."""
    surface: str = "overlay"  # overlay or desktop
    width: int = 1280         # Overlay canvas size (desktop uses the screen size)
    height: int = 720
    window_name: str = "AirPointer Overlay"
    pointer_radius: int = 12
    pointer_color: Tuple[int, int, int] = (183, 58, 103)  # BGR
    background_color: Tuple[int, int, int] = (32, 32, 32)
    failsafe: bool = True     # pyautogui corner failsafe (desktop only)

    @classmethod
    def from_dict(cls, config: dict) -> "OverlayConfig":
        """Create config from dictionary."""
        return cls(
            surface=config.get("surface", "overlay"),
            width=config.get("width", 1280),
            height=config.get("height", 720),
            window_name=config.get("window_name", "AirPointer Overlay"),
            pointer_radius=config.get("pointer_radius", 12),
            pointer_color=tuple(config.get("pointer_color", [183, 58, 103])),
            background_color=tuple(config.get("background_color", [32, 32, 32])),
            failsafe=config.get("failsafe", True),
        )


class PointerSurface:
    """
    Interface of a pointer render surface.

    Subclasses implement the three ``_do_*`` hooks; this class tracks the
    attached state and turns calls on a detached surface into
    :class:`SurfaceUnavailableError`.
    """

    def __init__(self):
        self._attached = False
        self._position: Optional[Tuple[int, int]] = None

    def add_to_surface(self) -> None:
        """Acquire the surface. Raises SurfaceAcquisitionError on failure."""
        if self._attached:
            return
        try:
            self._do_add()
        except SurfaceAcquisitionError:
            raise
        except Exception as e:
            raise SurfaceAcquisitionError(f"Failed to show pointer surface: {e}") from e
        self._attached = True
        logger.info(f"{type(self).__name__} attached ({self.size[0]}x{self.size[1]})")

    def remove_from_surface(self) -> None:
        """Release the surface. Raises SurfaceUnavailableError if not attached."""
        if not self._attached:
            raise SurfaceUnavailableError(f"{type(self).__name__} is not attached")
        self._attached = False
        self._do_remove()
        logger.info(f"{type(self).__name__} removed")

    def set_position(self, x: int, y: int) -> None:
        """Move the pointer. Raises SurfaceUnavailableError if not attached."""
        if not self._attached:
            raise SurfaceUnavailableError(f"{type(self).__name__} is not attached")
        self._do_set_position(int(x), int(y))
        self._position = (int(x), int(y))

    @property
    def is_attached(self) -> bool:
        return self._attached

    @property
    def position(self) -> Optional[Tuple[int, int]]:
        """Last position successfully rendered."""
        return self._position

    @property
    def size(self) -> Tuple[int, int]:
        raise NotImplementedError

    def _do_add(self) -> None:
        raise NotImplementedError

    def _do_remove(self) -> None:
        raise NotImplementedError

    def _do_set_position(self, x: int, y: int) -> None:
        raise NotImplementedError


class OverlayCanvasSurface(PointerSurface):
    """
    Pointer drawn on an OpenCV window.

    HighGUI calls must happen on the main thread, so :meth:`set_position`
    (called from the tick thread) only records the position; the main loop
    calls :meth:`show` to paint it.
    """

    def __init__(self, config: Optional[OverlayConfig] = None):
        super().__init__()
        self.config = config or OverlayConfig()
        self._lock = threading.Lock()
        self._pending: Optional[Tuple[int, int]] = None

    @property
    def size(self) -> Tuple[int, int]:
        return (self.config.width, self.config.height)

    def _do_add(self) -> None:
        cv2.namedWindow(self.config.window_name, cv2.WINDOW_AUTOSIZE)

    def _do_remove(self) -> None:
        cv2.destroyWindow(self.config.window_name)

    def _do_set_position(self, x: int, y: int) -> None:
        with self._lock:
            self._pending = (x, y)

    def render(self) -> np.ndarray:
        """Paint the canvas with the pointer at its latest position."""
        canvas = np.full(
            (self.config.height, self.config.width, 3),
            self.config.background_color,
            dtype=np.uint8,
        )
        with self._lock:
            position = self._pending
        if position is not None:
            radius = self.config.pointer_radius
            cv2.circle(canvas, position, radius, self.config.pointer_color, -1, cv2.LINE_AA)
            cv2.circle(canvas, position, radius, (255, 255, 255), 2, cv2.LINE_AA)
        return canvas

    def show(self) -> None:
        """Display the canvas. Main thread only; no-op when detached."""
        if not self.is_attached:
            return
        cv2.imshow(self.config.window_name, self.render())


class DesktopCursorSurface(PointerSurface):
    """Moves the real desktop cursor."""

    def __init__(self, config: Optional[OverlayConfig] = None):
        super().__init__()
        self.config = config or OverlayConfig()
        self._pyautogui = None
        self._size = (self.config.width, self.config.height)

    @property
    def size(self) -> Tuple[int, int]:
        return self._size

    def _do_add(self) -> None:
        # pyautogui talks to the display server on import
        try:
            import pyautogui
        except Exception as e:
            raise SurfaceAcquisitionError(f"Desktop cursor control unavailable: {e}") from e

        pyautogui.FAILSAFE = self.config.failsafe
        pyautogui.PAUSE = 0.0
        screen = pyautogui.size()
        self._size = (screen.width, screen.height)
        self._pyautogui = pyautogui

    def _do_remove(self) -> None:
        self._pyautogui = None

    def _do_set_position(self, x: int, y: int) -> None:
        try:
            self._pyautogui.moveTo(x, y, duration=0.0)
        except self._pyautogui.FailSafeException as e:
            raise SurfaceUnavailableError(f"Cursor failsafe triggered: {e}") from e


def create_surface(config: OverlayConfig) -> PointerSurface:
    """Build the surface named by ``config.surface``."""
    if config.surface == "overlay":
        return OverlayCanvasSurface(config)
    if config.surface == "desktop":
        return DesktopCursorSurface(config)
    raise ValueError(f"Unknown surface type: {config.surface}")
