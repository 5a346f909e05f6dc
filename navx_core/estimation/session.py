"""
Tracking session aggregate and its published snapshot.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .state import PathPoint, TrackingState, ORIGIN
from .orientation import OrientationTracker
from .kinematics import KinematicIntegrator
from .path import PathSampler
from ..math.constants import DEFAULT_VELOCITY_DAMPING, MIN_PATH_STEP_M
from ..sensors.calibration import CalibrationBias

class TrackingSession:
    """
    All mutable dead-reckoning state for one process.
    
    Created once and cleared (never replaced) by Start/Reset/Calibrate.
    The session is not thread-safe on its own; the owning controller
    serializes every access.
    """
    
    def __init__(self, damping: float = DEFAULT_VELOCITY_DAMPING,
                 min_step: float = MIN_PATH_STEP_M):
        self.state = TrackingState.IDLE
        self.orientation = OrientationTracker()
        self.kinematics = KinematicIntegrator(damping)
        self.sampler = PathSampler(min_step)
        self.last_sample_timestamp: Optional[float] = None
        self.sampler.reset(ORIGIN)
    
    @property
    def is_tracking(self) -> bool:
        return self.state is TrackingState.TRACKING
    
    @property
    def total_distance(self) -> float:
        return self.sampler.total_distance
    
    def clear(self):
        """Zero kinematics and heading, restart the trajectory at the origin."""
        self.kinematics.reset()
        self.orientation.reset()
        self.sampler.reset(ORIGIN)
        self.last_sample_timestamp = None

@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable view of a session handed to observers and renderers."""
    
    state: TrackingState
    trajectory: Tuple[PathPoint, ...]
    total_distance: float
    heading: float
    position: Tuple[float, float]
    velocity: Tuple[float, float]
    bias: CalibrationBias
    
    @classmethod
    def capture(cls, session: TrackingSession,
                bias: CalibrationBias) -> 'SessionSnapshot':
        k = session.kinematics.state
        return cls(
            state=session.state,
            trajectory=session.sampler.trajectory.snapshot(),
            total_distance=session.sampler.total_distance,
            heading=session.orientation.heading,
            position=(k.x, k.y),
            velocity=(k.vx, k.vy),
            bias=bias,
        )
