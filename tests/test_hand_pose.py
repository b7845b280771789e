"""
Tests for Hand Pose Heuristic
==============================
"""

import pytest

from airpointer.detection.types import HandLandmarks, Landmark, LandmarkIndex
from airpointer.recognition.hand_pose import (
    HandPose,
    HandPoseConfig,
    classify_pose,
    describe_result,
)
from conftest import make_result


def hand_with_gap(gap: float) -> HandLandmarks:
    """Hand whose thumb tip and index tip are ``gap`` apart horizontally."""
    points = [Landmark(0.5, 0.5)] * 21
    points[LandmarkIndex.THUMB_TIP] = Landmark(0.4, 0.5)
    points[LandmarkIndex.INDEX_TIP] = Landmark(0.4 + gap, 0.5)
    return HandLandmarks(landmarks=tuple(points))


class TestClassifyPose:
    """Test suite for pose classification."""

    def test_pinch(self):
        assert classify_pose(hand_with_gap(0.05)) == HandPose.PINCH

    def test_open(self):
        assert classify_pose(hand_with_gap(0.4)) == HandPose.OPEN

    def test_in_between(self):
        assert classify_pose(hand_with_gap(0.2)) == HandPose.OTHER

    def test_incomplete_hand(self):
        hand = HandLandmarks(landmarks=(Landmark(0.5, 0.5),) * 5)

        assert classify_pose(hand) == HandPose.UNKNOWN

    def test_custom_thresholds(self):
        config = HandPoseConfig(pinch_threshold=0.25, open_threshold=0.5)

        assert classify_pose(hand_with_gap(0.2), config) == HandPose.PINCH


class TestDescribeResult:
    """Test suite for the status line."""

    def test_no_result(self):
        assert describe_result(None) == "No hand detected"

    def test_single_hand(self):
        # make_result puts every landmark but the tracked one at the same spot
        result = make_result((0.5, 0.6))

        assert describe_result(result) == "1 hand detected: PINCH"

    def test_plural(self):
        assert describe_result(make_result(hands=2)).startswith("2 hands detected")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
