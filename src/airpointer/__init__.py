"""
AirPointer Hand-Tracked Pointer Control
========================================

Turns MediaPipe hand-landmark detections into a smoothly moving
on-screen pointer.

Modules:
    - capture: Camera frame acquisition
    - detection: MediaPipe hand landmark detection and the latest-result channel
    - pointer: Control area geometry, coordinate mapping, smoothing filter
    - control: Fixed-rate ticker, pointer actuator and render surfaces
    - recognition: Simple geometric hand pose heuristic
    - utils: Logging, performance monitoring, visualization
"""

__version__ = "1.0.0"
__author__ = "AirPointer Team"
