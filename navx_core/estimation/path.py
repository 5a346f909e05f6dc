"""
Trajectory recording with a minimum-step jitter filter.
"""

import numpy as np
from typing import List, Optional, Tuple

from .state import PathPoint, ORIGIN
from ..math.constants import MIN_PATH_STEP_M
from ..math.utils import planar_distance

class Trajectory:
    """Append-only, chronologically ordered sequence of path points."""
    
    def __init__(self):
        self._points: List[PathPoint] = []
    
    def append(self, point: PathPoint):
        self._points.append(point)
    
    def clear(self):
        self._points = []
    
    def snapshot(self) -> Tuple[PathPoint, ...]:
        """Immutable copy of the recorded points."""
        return tuple(self._points)
    
    def as_array(self) -> np.ndarray:
        """Points as an (N, 2) array for plotting."""
        if not self._points:
            return np.empty((0, 2))
        return np.array([[p.x, p.y] for p in self._points])
    
    def __len__(self) -> int:
        return len(self._points)

class PathSampler:
    """
    Decides which integrated positions become trajectory vertices.
    
    A position is recorded when it lies more than ``min_step`` meters
    from the last recorded point, or when nothing has been recorded yet.
    Only recorded steps contribute to the total distance, so sub-threshold
    noise neither grows the trajectory nor inflates the distance.
    """
    
    def __init__(self, min_step: float = MIN_PATH_STEP_M):
        if min_step < 0:
            raise ValueError(f"Minimum path step must be non-negative, got {min_step}")
        
        self.min_step = min_step
        self.trajectory = Trajectory()
        self.last_point: Optional[PathPoint] = None
        self.total_distance = 0.0
        self.rejected_count = 0
    
    def consider(self, x: float, y: float) -> Optional[PathPoint]:
        """
        Offer a new position to the trajectory.
        
        Args:
            x, y: Integrated world-frame position (meters)
            
        Returns:
            The recorded point, or None if the position was filtered out
        """
        if self.last_point is None:
            d = 0.0
        else:
            d = planar_distance(self.last_point.x, self.last_point.y, x, y)
            if not d > self.min_step:
                self.rejected_count += 1
                return None
        
        point = PathPoint(x, y)
        self.trajectory.append(point)
        self.last_point = point
        if d > 0:
            self.total_distance += d
        return point
    
    def reset(self, origin: PathPoint = ORIGIN):
        """Restart the trajectory at ``origin`` with zero distance."""
        self.trajectory.clear()
        self.last_point = None
        self.total_distance = 0.0
        self.rejected_count = 0
        self.consider(origin.x, origin.y)
