"""Geometric hand pose heuristic."""
from .hand_pose import HandPose, HandPoseConfig, classify_pose, describe_result

__all__ = ["HandPose", "HandPoseConfig", "classify_pose", "describe_result"]
