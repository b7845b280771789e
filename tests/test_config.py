"""
Tests for Configuration Loading
================================
"""

from pathlib import Path

import pytest

from airpointer.config import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    create_app_config,
    load_config,
    validate_config,
)


class TestLoadConfig:
    """Test suite for YAML loading."""

    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("smoothing:\n  smooth_factor: 0.5\npointer:\n  tick_interval_ms: 8\n")

        config = load_config(path)

        assert config["smoothing"]["smooth_factor"] == 0.5
        assert config["pointer"]["tick_interval_ms"] == 8

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "nope.yaml") == {}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(path) == {}

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        assert load_config(path) == {}

    def test_default_path_follows_working_directory(self, tmp_path, monkeypatch):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "config.yaml").write_text("pointer:\n  tracked_landmark: 8\n")
        monkeypatch.chdir(tmp_path)

        assert not DEFAULT_CONFIG_PATH.is_absolute()
        assert load_config()["pointer"]["tracked_landmark"] == 8

    def test_repository_config_is_valid(self):
        """The shipped config file loads and passes validation."""
        config = load_config(Path(__file__).parent.parent / "config" / "config.yaml")

        assert config
        assert validate_config(config) == []


class TestValidateConfig:
    """Test suite for schema validation."""

    def test_empty_is_valid(self):
        assert validate_config({}) == []

    def test_wrong_type(self):
        warnings = validate_config({"camera": {"width": "wide"}})

        assert len(warnings) == 1
        assert "camera.width" in warnings[0]

    def test_int_accepted_for_float(self):
        assert validate_config({"smoothing": {"movement_threshold": 3}}) == []

    def test_bool_is_not_a_number(self):
        warnings = validate_config({"smoothing": {"history_size": True}})

        assert len(warnings) == 1

    def test_section_not_a_dict(self):
        warnings = validate_config({"pointer": 16})

        assert "pointer" in warnings[0]


class TestCreateAppConfig:
    """Test suite for building component configs."""

    def test_defaults(self):
        config = create_app_config({})

        assert isinstance(config, AppConfig)
        assert config.control_area.ratio == 0.5
        assert config.smoothing.edge_margin == 48
        assert config.pointer.tick_interval_ms == 16.0
        assert config.overlay.surface == "overlay"
        assert config.mediapipe.running_mode == "LIVE_STREAM"
        assert config.performance_window == 60

    def test_overrides(self):
        config = create_app_config({
            "control_area": {"ratio": 0.6},
            "overlay": {"surface": "desktop"},
            "mediapipe": {"running_mode": "video"},
            "performance": {"window_size": 30},
        })

        assert config.control_area.ratio == 0.6
        assert config.overlay.surface == "desktop"
        assert config.mediapipe.running_mode == "VIDEO"
        assert config.performance_window == 30

    def test_bad_section_ignored(self):
        config = create_app_config({"smoothing": "fast"})

        assert config.smoothing.history_size == 5


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
