"""
Tests for Preview Visualization
================================
"""

import numpy as np
import pytest

from airpointer.pointer.control_area import Rect
from airpointer.utils.visualization import Visualizer, VisualizerConfig
from conftest import make_result


@pytest.fixture
def image():
    return np.zeros((400, 800, 3), dtype=np.uint8)


class TestVisualizer:
    """Test suite for the preview overlays."""

    def test_control_area_tints_inside_only(self, image):
        viz = Visualizer()

        viz.draw_control_area(image, Rect(325, 100, 475, 300))

        assert image[200, 400].any()
        assert not image[20, 20].any()

    def test_degenerate_control_area_is_skipped(self, image):
        Visualizer().draw_control_area(image, Rect.empty())

        assert not image.any()

    def test_hand_drawn_at_landmarks(self, image):
        viz = Visualizer(VisualizerConfig(show_connections=False))

        viz.draw_result(image, make_result((0.25, 0.25)))

        assert tuple(image[100, 200]) == viz.config.landmark_color

    def test_no_result(self, image):
        Visualizer().draw_result(image, None)

        assert not image.any()

    def test_disabled_overlays(self, image):
        config = VisualizerConfig(show_status=False, show_performance=False)
        viz = Visualizer(config)

        viz.draw_status(image, "No hand detected")
        viz.draw_performance(image, fps=30.0, tick_ms=1.0)

        assert not image.any()

    def test_performance_text(self, image):
        Visualizer().draw_performance(image, fps=30.0, tick_ms=20.0, extra_info={"Pointer": "1, 2"})

        assert image.any()

    def test_from_dict_colors(self):
        config = VisualizerConfig.from_dict({"colors": {"landmarks": [1, 2, 3]}, "show_preview": False})

        assert config.landmark_color == (1, 2, 3)
        assert config.show_preview is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
