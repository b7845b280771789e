"""
Application configuration.

Loads the YAML config file, checks critical fields against a schema and
builds the per-component config dataclasses.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

import yaml

from .capture.camera import CameraConfig
from .control.actuator import PointerConfig
from .control.surfaces import OverlayConfig
from .detection.hand_detector import HandDetectorConfig
from .pointer.control_area import ControlAreaConfig
from .pointer.smoothing import SmoothingConfig
from .recognition.hand_pose import HandPoseConfig
from .utils.logger import LoggingConfig
from .utils.visualization import VisualizerConfig

logger = logging.getLogger(__name__)

# Resolved against the working directory
DEFAULT_CONFIG_PATH = Path("config") / "config.yaml"

# Schema: sections and the expected types of their critical fields
_CONFIG_SCHEMA = {
    "camera": {
        "device_id": int,
        "width": int,
        "height": int,
        "fps": int,
    },
    "mediapipe": {
        "max_num_hands": int,
        "min_detection_confidence": float,
        "running_mode": str,
    },
    "control_area": {
        "ratio": float,
    },
    "smoothing": {
        "history_size": int,
        "smooth_factor": float,
        "movement_threshold": float,
        "edge_margin": int,
        "bottom_margin": int,
    },
    "pointer": {
        "tick_interval_ms": float,
        "tracked_landmark": int,
    },
    "overlay": {
        "surface": str,
        "width": int,
        "height": int,
    },
    "logging": {
        "level": str,
    },
}


@dataclass
class AppConfig:
    """Application configuration container."""
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: HandDetectorConfig = field(default_factory=HandDetectorConfig)
    control_area: ControlAreaConfig = field(default_factory=ControlAreaConfig)
    smoothing: SmoothingConfig = field(default_factory=SmoothingConfig)
    pointer: PointerConfig = field(default_factory=PointerConfig)
    overlay: OverlayConfig = field(default_factory=OverlayConfig)
    hand_pose: HandPoseConfig = field(default_factory=HandPoseConfig)
    visualization: VisualizerConfig = field(default_factory=VisualizerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    performance_window: int = 60


def load_config(config_path: Union[str, Path, None] = None) -> dict:
    """Load configuration from a YAML file; a missing file yields defaults."""
    config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
        logger.info("Loaded config from %s", config_path)
    except FileNotFoundError:
        logger.warning("Config file not found: %s, using defaults", config_path)
        return {}

    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, using defaults", config_path)
        return {}
    return data


def validate_config(config_dict: dict) -> List[str]:
    """
    Check critical config fields against the schema.

    Problems are logged as warnings and returned; nothing is raised, since
    every field has a usable default.
    """
    warnings = []
    for section_name, fields in _CONFIG_SCHEMA.items():
        section = config_dict.get(section_name)
        if section is None:
            continue
        if not isinstance(section, dict):
            warnings.append(f"Section '{section_name}' should be a dict, got {type(section).__name__}")
            continue
        for field_name, expected_type in fields.items():
            if field_name not in section:
                continue
            value = section[field_name]
            # Allow int where float is expected; YAML booleans are never numbers
            if isinstance(value, bool):
                valid = expected_type is bool
            elif expected_type is float:
                valid = isinstance(value, (int, float))
            else:
                valid = isinstance(value, expected_type)
            if not valid:
                warnings.append(
                    f"{section_name}.{field_name}: expected {expected_type.__name__}, "
                    f"got {type(value).__name__} ({value!r})"
                )

    for w in warnings:
        logger.warning("Config validation: %s", w)
    if not warnings:
        logger.debug("Config validation passed")
    return warnings


def _section(config_dict: dict, name: str) -> dict:
    section = config_dict.get(name, {})
    return section if isinstance(section, dict) else {}


def create_app_config(config_dict: dict) -> AppConfig:
    """Create AppConfig from configuration dictionary."""
    return AppConfig(
        camera=CameraConfig.from_dict(_section(config_dict, "camera")),
        mediapipe=HandDetectorConfig.from_dict(_section(config_dict, "mediapipe")),
        control_area=ControlAreaConfig.from_dict(_section(config_dict, "control_area")),
        smoothing=SmoothingConfig.from_dict(_section(config_dict, "smoothing")),
        pointer=PointerConfig.from_dict(_section(config_dict, "pointer")),
        overlay=OverlayConfig.from_dict(_section(config_dict, "overlay")),
        hand_pose=HandPoseConfig.from_dict(_section(config_dict, "hand_pose")),
        visualization=VisualizerConfig.from_dict(_section(config_dict, "visualization")),
        logging=LoggingConfig.from_dict(_section(config_dict, "logging")),
        performance_window=_section(config_dict, "performance").get("window_size", 60),
    )
