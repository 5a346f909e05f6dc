"""
Simulated platform services for desktop runs.
"""

from .sensor_service import SimulatedSensorService, Subscription, WalkProfile
from .pose_source import SimulatedPoseSource, PoseUnavailable

__all__ = ["SimulatedSensorService", "Subscription", "WalkProfile",
           "SimulatedPoseSource", "PoseUnavailable"]
