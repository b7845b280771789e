"""
Tests for Landmark Result Channel
==================================
"""

import threading

import pytest

from airpointer.detection.result_channel import LandmarkResultChannel
from airpointer.detection.types import HandDetectionResult
from conftest import make_result


class TestLandmarkResultChannel:
    """Test suite for the latest-wins result hand-off."""

    @pytest.fixture
    def channel(self):
        return LandmarkResultChannel()

    def test_starts_empty(self, channel):
        assert channel.latest() is None
        assert channel.take() is None
        assert channel.sequence == 0

    def test_latest_wins(self, channel):
        first = make_result((0.1, 0.1))
        second = make_result((0.9, 0.9))

        channel.publish(first)
        channel.publish(second)

        assert channel.latest() is second
        assert channel.take() is second

    def test_take_consumes(self, channel):
        result = make_result()
        channel.publish(result)

        assert channel.take() is result
        assert channel.take() is None
        # Readers that don't consume still see it
        assert channel.latest() is result

    def test_absence_after_valid(self, channel):
        """A None publish replaces a valid result, so the consumer skips."""
        channel.publish(make_result())
        channel.publish(None)

        assert channel.latest() is None
        assert channel.take() is None
        assert channel.sequence == 2

    def test_empty_result_stored_as_none(self, channel):
        empty = HandDetectionResult(hands=(), image_width=640, image_height=480)

        assert channel.publish(empty) is True
        assert channel.latest() is None

    def test_clear(self, channel):
        channel.publish(make_result())
        channel.clear()

        assert channel.latest() is None

    def test_frames(self, channel):
        channel.publish_frame("frame-1")
        channel.publish_frame("frame-2")

        assert channel.latest_frame() == "frame-2"

    def test_close_drops_references(self, channel):
        channel.publish(make_result())
        channel.publish_frame("frame")

        channel.close()

        assert channel.is_closed
        assert channel.latest() is None
        assert channel.latest_frame() is None
        assert channel.publish(make_result()) is False
        assert channel.publish_frame("frame") is False

    def test_close_is_idempotent(self, channel):
        channel.close()
        channel.close()

        assert channel.is_closed

    def test_publish_from_another_thread(self, channel):
        results = [make_result((i / 100, 0.5)) for i in range(100)]

        def producer():
            for result in results:
                channel.publish(result)

        thread = threading.Thread(target=producer)
        thread.start()
        thread.join()

        assert channel.sequence == 100
        assert channel.latest() is results[-1]
        assert channel.take() is results[-1]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
