"""
State representation for planar dead reckoning.
"""

import numpy as np
from dataclasses import dataclass
from enum import Enum

class TrackingState(Enum):
    """Session state machine states."""
    IDLE = "idle"
    TRACKING = "tracking"

@dataclass(frozen=True)
class PathPoint:
    """A recorded trajectory vertex in world coordinates (meters)."""
    x: float
    y: float

ORIGIN = PathPoint(0.0, 0.0)

@dataclass
class KinematicState:
    """
    World-frame velocity and position.
    
    - vx, vy: Velocity in m/s
    - x, y: Position in meters relative to the session origin
    """
    
    vx: float = 0.0
    vy: float = 0.0
    x: float = 0.0
    y: float = 0.0
    
    @property
    def position(self) -> np.ndarray:
        """Get position as [x, y] vector."""
        return np.array([self.x, self.y])
    
    @property
    def velocity(self) -> np.ndarray:
        """Get velocity as [vx, vy] vector."""
        return np.array([self.vx, self.vy])
    
    @property
    def speed(self) -> float:
        """Get speed in m/s."""
        return float(np.hypot(self.vx, self.vy))
