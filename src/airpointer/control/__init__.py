"""Fixed-rate pointer loop and render surfaces."""
from .surfaces import (
    AirPointerError,
    DesktopCursorSurface,
    OverlayCanvasSurface,
    OverlayConfig,
    PointerSurface,
    SurfaceAcquisitionError,
    SurfaceUnavailableError,
    create_surface,
)
from .ticker import PeriodicTicker
from .actuator import PointerActuator, PointerConfig

__all__ = [
    "AirPointerError",
    "DesktopCursorSurface",
    "OverlayCanvasSurface",
    "OverlayConfig",
    "PointerSurface",
    "SurfaceAcquisitionError",
    "SurfaceUnavailableError",
    "create_surface",
    "PeriodicTicker",
    "PointerActuator",
    "PointerConfig",
]
