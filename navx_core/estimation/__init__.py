"""
Planar dead-reckoning estimation components.
"""

from .state import PathPoint, KinematicState, TrackingState, ORIGIN
from .orientation import OrientationTracker
from .kinematics import KinematicIntegrator
from .path import PathSampler, Trajectory
from .session import TrackingSession, SessionSnapshot

__all__ = ["PathPoint", "KinematicState", "TrackingState", "ORIGIN",
           "OrientationTracker", "KinematicIntegrator", "PathSampler",
           "Trajectory", "TrackingSession", "SessionSnapshot"]
