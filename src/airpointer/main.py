"""
AirPointer - Main Application
==============================

Entry point for the hand-tracked pointer. Runs camera capture and the
preview on the main thread, hand detection on MediaPipe's worker thread
and the pointer loop on its own fixed-rate thread.
"""

import argparse
import logging
import signal
import sys
from typing import Optional

import cv2

from .capture.camera import Camera
from .config import AppConfig, create_app_config, load_config, validate_config
from .control.surfaces import OverlayCanvasSurface, SurfaceAcquisitionError, create_surface
from .controller import PointerController
from .detection.hand_detector import HandDetector
from .detection.result_channel import LandmarkResultChannel
from .pointer.control_area import ControlAreaGeometry
from .recognition.hand_pose import describe_result
from .utils.logger import set_log_level, setup_logging_from_config
from .utils.performance import PerformanceMonitor
from .utils.visualization import Visualizer

logger = logging.getLogger(__name__)


class AirPointerApplication:
    """
    Main application class.

    Coordinates:
    - Camera capture
    - Hand detection (MediaPipe, results into the result channel)
    - Control area geometry of the preview view
    - Pointer controller (mapping, smoothing, rendering)
    - Preview visualization and performance monitoring
    """

    def __init__(self, config: AppConfig):
        self.config = config

        self.performance = PerformanceMonitor(
            window_size=config.performance_window,
            tick_interval_ms=config.pointer.tick_interval_ms,
        )
        self.channel = LandmarkResultChannel()
        self.geometry = ControlAreaGeometry(config.control_area)
        self.camera = Camera(config.camera)
        self.detector = HandDetector(
            config.mediapipe,
            channel=self.channel,
            on_result=self.performance.record_detection,
        )
        self.surface = create_surface(config.overlay)
        self.controller = PointerController(
            self.channel,
            self.geometry,
            self.surface,
            pointer_config=config.pointer,
            smoothing_config=config.smoothing,
            monitor=self.performance,
        )
        self.visualizer = Visualizer(config.visualization)

        self._running = False
        self._last_status = ""

    def start(self) -> bool:
        """Start all components. Returns False if a component failed."""
        logger.info("Starting AirPointer...")

        if not self.camera.start():
            logger.error("Failed to start camera")
            return False

        if not self.detector.start():
            logger.error("Failed to start hand detector")
            self.camera.stop()
            return False

        try:
            self.controller.start()
        except SurfaceAcquisitionError as e:
            logger.error(f"Cannot show pointer: {e}")
            self.detector.stop()
            self.camera.stop()
            return False

        self.performance.start()
        self._running = True
        logger.info("AirPointer started successfully")
        return True

    def stop(self) -> None:
        """Stop all components."""
        logger.info("Stopping AirPointer...")
        self._running = False

        self.controller.stop()
        self.detector.stop()
        self.camera.stop()
        self.performance.stop()

        cv2.destroyAllWindows()
        logger.info("AirPointer stopped")

    def run(self) -> int:
        """Run until quit. Returns the process exit code."""
        if not self.start():
            return 1

        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

        try:
            self._main_loop()
        finally:
            self.stop()
            self._print_final_report()
        return 0

    def _main_loop(self) -> None:
        """Capture, detect and draw the preview."""
        live = self.config.mediapipe.running_mode == "LIVE_STREAM"

        while self._running:
            frame = self.camera.read()

            if frame is not None:
                self.channel.publish_frame(frame)
                if live:
                    self.detector.detect_async(frame.rgb, frame.timestamp_ms)
                else:
                    self.detector.detect(frame.rgb, frame.timestamp_ms)

                self._draw_preview()
                self.performance.frame_complete()

            if isinstance(self.surface, OverlayCanvasSurface):
                self.surface.show()

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q') or key == 27:
                self._running = False
            elif key == ord('p'):
                print(self.performance.get_report())
            elif key == ord('d'):
                level = logging.DEBUG if logging.getLogger().level != logging.DEBUG else logging.INFO
                set_log_level(level)
                logger.info(f"Log level set to {logging.getLevelName(level)}")

    def _draw_preview(self) -> None:
        """Show the latest camera frame with control area and landmarks."""
        frame = self.channel.latest_frame()
        if frame is None:
            return

        width, height = frame.size
        # The preview view is the frame itself, so a resolution change is a resize
        self.geometry.on_size_changed(width, height)

        result = self.channel.latest()
        status = describe_result(result, self.config.hand_pose)
        if status != self._last_status:
            logger.info(f"Hand tracking: {status}")
            self._last_status = status

        if not self.config.visualization.show_preview:
            return

        display = frame.image.copy()
        self.visualizer.draw_control_area(display, self.geometry.rect)
        self.visualizer.draw_result(display, result)
        self.visualizer.draw_status(display, status)
        x, y = self.controller.position
        self.visualizer.draw_performance(
            display,
            fps=self.performance.fps,
            tick_ms=self.performance.tick_time_ms,
            tick_budget_ms=self.config.pointer.tick_interval_ms,
            extra_info={"Pointer": f"{x}, {y}"},
        )
        cv2.imshow(self.config.visualization.window_name, display)

    def _signal_handler(self, signum, frame) -> None:
        """Handle shutdown signals."""
        logger.info(f"Received signal {signum}, shutting down...")
        self._running = False

    def _print_final_report(self) -> None:
        """Print final performance report."""
        print("\n" + "=" * 50)
        print("FINAL PERFORMANCE REPORT")
        print("=" * 50)
        print(self.performance.get_report())
        print("=" * 50)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="airpointer",
        description="Hand-tracked on-screen pointer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Surfaces:
  overlay   - Pointer drawn in its own OpenCV window (default)
  desktop   - Moves the operating system cursor

Keyboard Controls (preview window):
  q/ESC     - Quit
  p         - Print performance report
  d         - Toggle debug logging

Examples:
  airpointer
  airpointer --surface desktop
  airpointer --config my_config.yaml --log-file logs/airpointer.log
        """
    )

    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to configuration file (default: config/config.yaml)"
    )

    parser.add_argument(
        "--surface", "-s",
        choices=["overlay", "desktop"],
        default=None,
        help="Where to render the pointer (overrides the config file)"
    )

    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write a rotating log file"
    )

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    config_dict = load_config(args.config)
    app_config = create_app_config(config_dict)

    if args.surface:
        app_config.overlay.surface = args.surface
    if args.log_file:
        app_config.logging.log_file = args.log_file
    if args.debug:
        app_config.logging.level = "DEBUG"

    setup_logging_from_config(app_config.logging)
    validate_config(config_dict)

    app = AirPointerApplication(app_config)
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
