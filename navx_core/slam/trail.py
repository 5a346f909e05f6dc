"""
Camera-pose trail from an external visual-inertial tracker.

The trail is shown next to the dead-reckoning trajectory for comparison
only; the two estimates are never fused.
"""

import logging
import numpy as np
from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Tuple

from ..math.constants import HUD_DISTANCE_M, TRAIL_MAX_POINTS, TRAIL_MOVE_THRESHOLD_M
from ..math.utils import spatial_distance

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]

@dataclass(frozen=True)
class CameraPose:
    """Camera position and viewing direction in the tracker's world frame."""
    
    position: Vec3 = (0.0, 0.0, 0.0)
    forward: Vec3 = (0.0, 0.0, -1.0)
    
    @classmethod
    def from_reading(cls, reading: Any) -> 'CameraPose':
        """
        Build a pose from a tracker reading.
        
        Accepts a ``CameraPose``, or a mapping/object with ``position``
        and optional ``forward``; missing fields fall back to defaults.
        """
        if isinstance(reading, cls):
            return reading
        if isinstance(reading, Mapping):
            position = reading.get("position")
            forward = reading.get("forward")
        else:
            position = getattr(reading, "position", None)
            forward = getattr(reading, "forward", None)
        return cls(
            position=_as_vec3(position, (0.0, 0.0, 0.0)),
            forward=_as_vec3(forward, (0.0, 0.0, -1.0)),
        )
    
    def point_ahead(self, distance: float = HUD_DISTANCE_M) -> Vec3:
        """Point ``distance`` meters in front of the camera."""
        p = np.asarray(self.position, dtype=float) + distance * np.asarray(self.forward, dtype=float)
        return (float(p[0]), float(p[1]), float(p[2]))

def _as_vec3(value: Optional[Sequence[float]], default: Vec3) -> Vec3:
    if value is None:
        return default
    x, y, z = value
    return (float(x), float(y), float(z))

class PoseTrail:
    """
    Thresholded, bounded trail of camera positions.
    
    A position is appended when it moved more than ``move_threshold``
    meters from the last trail point, or when the trail is empty. Only
    the most recent ``max_points`` points are kept, while the total
    length keeps counting every accepted move.
    """
    
    def __init__(self, move_threshold: float = TRAIL_MOVE_THRESHOLD_M,
                 max_points: int = TRAIL_MAX_POINTS):
        if max_points <= 0:
            raise ValueError(f"Trail capacity must be positive, got {max_points}")
        
        self.move_threshold = move_threshold
        self.max_points = max_points
        self._points = deque(maxlen=max_points)
        self.total_distance = 0.0
        self.latest_pose: Optional[CameraPose] = None
        
        # Statistics
        self.poll_count = 0
        self.failed_polls = 0
    
    def consider(self, position: Sequence[float]) -> Optional[Vec3]:
        """
        Offer a camera position to the trail.
        
        Returns:
            The appended point, or None if the move was below threshold
        """
        point = _as_vec3(position, (0.0, 0.0, 0.0))
        
        extra = 0.0
        if self._points:
            extra = spatial_distance(self._points[-1], point)
            if not extra > self.move_threshold:
                return None
        
        if extra > 0:
            self.total_distance += extra
        self._points.append(point)
        return point
    
    def poll(self, source: Callable[[], Any]) -> Optional[Vec3]:
        """
        Query the pose source once and update the trail.
        
        Failures of the source are expected while the tracker
        initializes; they leave the trail unchanged for this tick.
        """
        self.poll_count += 1
        try:
            pose = CameraPose.from_reading(source())
        except Exception as e:
            self.failed_polls += 1
            logger.debug("Pose query failed: %s", e)
            return None
        
        self.latest_pose = pose
        return self.consider(pose.position)
    
    def hud_anchor(self, distance: float = HUD_DISTANCE_M) -> Vec3:
        """Overlay anchor in front of the latest camera pose."""
        pose = self.latest_pose or CameraPose()
        return pose.point_ahead(distance)
    
    def points(self) -> Tuple[Vec3, ...]:
        return tuple(self._points)
    
    def as_array(self) -> np.ndarray:
        """Trail as an (N, 3) array for plotting."""
        if not self._points:
            return np.empty((0, 3))
        return np.array(self._points)
    
    @property
    def sample_count(self) -> int:
        return len(self._points)
    
    def reset(self):
        self._points.clear()
        self.total_distance = 0.0
        self.latest_pose = None
    
    def summary(self) -> str:
        """Short multi-line readout of the trail."""
        x, y, z = self.latest_pose.position if self.latest_pose else (0.0, 0.0, 0.0)
        return (f"SLAM\n"
                f"pos: ({x:.2f}, {y:.2f}, {z:.2f})\n"
                f"len: {self.total_distance:.2f} m\n"
                f"samples: {self.sample_count}")
