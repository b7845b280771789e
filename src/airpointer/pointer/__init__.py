"""Control area geometry, landmark-to-screen mapping and pointer smoothing."""
from .control_area import ControlAreaConfig, ControlAreaGeometry, ControlLayout, Rect, compute_control_rect
from .mapper import CoordinateMapper, RelativePosition, map_to_control_area, to_screen
from .smoothing import PointerSmoothingFilter, PositionHistory, SmoothingConfig

__all__ = [
    "ControlAreaConfig",
    "ControlAreaGeometry",
    "ControlLayout",
    "Rect",
    "compute_control_rect",
    "CoordinateMapper",
    "RelativePosition",
    "map_to_control_area",
    "to_screen",
    "PointerSmoothingFilter",
    "PositionHistory",
    "SmoothingConfig",
]
