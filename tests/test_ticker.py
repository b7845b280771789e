"""
Tests for Periodic Ticker
==========================
"""

import threading
import time

import pytest

from airpointer.control.ticker import PeriodicTicker


class TestPeriodicTicker:
    """Test suite for the fixed-rate ticker thread."""

    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            PeriodicTicker(0, lambda: None)

    def test_ticks_until_stopped(self):
        ticked = threading.Event()
        calls = []

        def callback():
            calls.append(threading.current_thread().name)
            if len(calls) >= 3:
                ticked.set()

        ticker = PeriodicTicker(0.005, callback, name="test-tick")
        ticker.start()
        assert ticked.wait(timeout=2.0)
        ticker.stop()

        assert not ticker.is_running
        assert ticker.tick_count >= 3
        assert set(calls) == {"test-tick"}

    def test_no_tick_after_stop(self):
        calls = []
        ticker = PeriodicTicker(0.005, lambda: calls.append(1))
        ticker.start()
        time.sleep(0.03)
        ticker.stop()

        count = len(calls)
        time.sleep(0.03)

        assert len(calls) == count

    def test_callback_error_does_not_stop_ticking(self):
        ticked = threading.Event()
        calls = []

        def callback():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("boom")
            ticked.set()

        ticker = PeriodicTicker(0.005, callback)
        ticker.start()
        assert ticked.wait(timeout=2.0)
        ticker.stop()

        assert len(calls) >= 2

    def test_overrun_skips_ticks(self):
        """A slow tick skips missed deadlines instead of bursting."""
        done = threading.Event()
        calls = []

        def callback():
            calls.append(1)
            if len(calls) == 1:
                time.sleep(0.05)
            else:
                done.set()

        ticker = PeriodicTicker(0.01, callback)
        ticker.start()
        assert done.wait(timeout=2.0)
        ticker.stop()

        assert ticker.skipped_ticks >= 1

    def test_start_twice_and_stop_twice(self):
        ticker = PeriodicTicker(0.01, lambda: None)
        ticker.start()
        ticker.start()
        assert ticker.is_running

        ticker.stop()
        ticker.stop()
        assert not ticker.is_running


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
