"""
Inertial dead reckoning from accelerometer and gyroscope streams.

This module provides platform-independent implementations of:
- Bias calibration and sample ingest
- Heading, frame rotation and damped kinematic integration
- Thresholded trajectory recording and the tracking session controller
- A camera-pose trail for side-by-side comparison
"""

__version__ = "1.0.0"
__author__ = "NavX Team"

from .controller import TrackingController
from .estimation import TrackingSession, TrackingState, PathPoint
from .sensors import SensorSample, SensorKind, CalibrationBias, CalibrationStore
from .slam import CameraPose, PoseTrail
from .math import rotate_to_world, normalize_angle

__all__ = [
    "TrackingController",
    "TrackingSession",
    "TrackingState",
    "PathPoint",
    "SensorSample",
    "SensorKind",
    "CalibrationBias",
    "CalibrationStore",
    "CameraPose",
    "PoseTrail",
    "rotate_to_world",
    "normalize_angle"
]
