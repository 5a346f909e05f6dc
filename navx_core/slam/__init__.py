"""
Visual-inertial comparison trail.
"""

from .trail import CameraPose, PoseTrail

__all__ = ["CameraPose", "PoseTrail"]
