"""
Tests for Pointer Render Surfaces
==================================
"""

import sys
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from airpointer.control.surfaces import (
    DesktopCursorSurface,
    OverlayCanvasSurface,
    OverlayConfig,
    SurfaceAcquisitionError,
    SurfaceUnavailableError,
    create_surface,
)
from conftest import FakeSurface


class FailSafe(Exception):
    pass


def fake_pyautogui(width=1920, height=1080):
    module = MagicMock()
    module.size.return_value = SimpleNamespace(width=width, height=height)
    module.FailSafeException = FailSafe
    return module


class TestPointerSurface:
    """Test suite for the attach/detach contract."""

    def test_set_position_before_add(self):
        surface = FakeSurface()

        with pytest.raises(SurfaceUnavailableError):
            surface.set_position(1, 1)

    def test_remove_before_add(self):
        with pytest.raises(SurfaceUnavailableError):
            FakeSurface().remove_from_surface()

    def test_set_position_after_remove(self):
        surface = FakeSurface()
        surface.add_to_surface()
        surface.remove_from_surface()

        with pytest.raises(SurfaceUnavailableError):
            surface.set_position(1, 1)

    def test_add_twice_acquires_once(self):
        surface = FakeSurface()
        surface.add_to_surface()
        surface.add_to_surface()

        assert surface.add_calls == 1

    def test_acquisition_errors_are_wrapped(self):
        surface = FakeSurface()
        surface._do_add = MagicMock(side_effect=OSError("permission denied"))

        with pytest.raises(SurfaceAcquisitionError) as exc_info:
            surface.add_to_surface()

        assert "permission denied" in str(exc_info.value)
        assert not surface.is_attached

    def test_position_recorded(self):
        surface = FakeSurface()
        surface.add_to_surface()
        surface.set_position(10.7, 20.2)

        assert surface.position == (10, 20)
        assert surface.positions == [(10, 20)]


class TestOverlayCanvasSurface:
    """Test suite for the OpenCV overlay."""

    @pytest.fixture
    def config(self):
        return OverlayConfig(width=200, height=100, pointer_radius=5)

    def test_size(self, config):
        assert OverlayCanvasSurface(config).size == (200, 100)

    def test_render_draws_pointer(self, config):
        surface = OverlayCanvasSurface(config)
        surface._attached = True  # Skip the HighGUI window
        surface.set_position(50, 40)

        canvas = surface.render()

        assert canvas.shape == (100, 200, 3)
        assert tuple(canvas[40, 50]) == config.pointer_color
        assert tuple(canvas[5, 5]) == config.background_color

    def test_render_without_position(self, config):
        canvas = OverlayCanvasSurface(config).render()

        assert (canvas == config.background_color).all()

    @patch("airpointer.control.surfaces.cv2")
    def test_window_lifecycle(self, mock_cv2, config):
        surface = OverlayCanvasSurface(config)

        surface.add_to_surface()
        surface.remove_from_surface()

        mock_cv2.namedWindow.assert_called_once()
        mock_cv2.destroyWindow.assert_called_once_with(config.window_name)

    @patch("airpointer.control.surfaces.cv2")
    def test_show_when_detached_is_noop(self, mock_cv2, config):
        OverlayCanvasSurface(config).show()

        mock_cv2.imshow.assert_not_called()


class TestDesktopCursorSurface:
    """Test suite for the desktop cursor with pyautogui mocked out."""

    def test_size_from_screen(self):
        module = fake_pyautogui(2560, 1440)
        surface = DesktopCursorSurface()

        with patch.dict(sys.modules, {"pyautogui": module}):
            surface.add_to_surface()

        assert surface.size == (2560, 1440)
        assert module.PAUSE == 0.0

    def test_moves_cursor(self):
        module = fake_pyautogui()
        surface = DesktopCursorSurface()

        with patch.dict(sys.modules, {"pyautogui": module}):
            surface.add_to_surface()
            surface.set_position(300, 200)

        module.moveTo.assert_called_once_with(300, 200, duration=0.0)

    def test_failsafe_becomes_unavailable(self):
        module = fake_pyautogui()
        module.moveTo.side_effect = FailSafe("corner")
        surface = DesktopCursorSurface()

        with patch.dict(sys.modules, {"pyautogui": module}):
            surface.add_to_surface()
            with pytest.raises(SurfaceUnavailableError):
                surface.set_position(0, 0)

    def test_no_display_is_acquisition_error(self):
        module = fake_pyautogui()
        module.size.side_effect = KeyError("DISPLAY")
        surface = DesktopCursorSurface()

        with patch.dict(sys.modules, {"pyautogui": module}):
            with pytest.raises(SurfaceAcquisitionError):
                surface.add_to_surface()


class TestCreateSurface:
    """Test suite for the surface factory."""

    def test_overlay(self):
        assert isinstance(create_surface(OverlayConfig(surface="overlay")), OverlayCanvasSurface)

    def test_desktop(self):
        assert isinstance(create_surface(OverlayConfig(surface="desktop")), DesktopCursorSurface)

    def test_unknown(self):
        with pytest.raises(ValueError):
            create_surface(OverlayConfig(surface="hologram"))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
