"""
Simulated camera-pose source standing in for a visual-inertial tracker.
"""

import math
import numpy as np
from typing import Optional

from navx_core.slam.trail import CameraPose

class PoseUnavailable(RuntimeError):
    """Raised when the tracker has no pose for this query."""

class SimulatedPoseSource:
    """
    Reports the simulated ground-truth position with noise.
    
    The tracker frame is y-up with the camera looking along -z, so planar
    ground-truth (x, y) maps to (x, 0, -y). Queries fail at random with
    ``failure_rate`` to mimic tracker initialization hiccups.
    """
    
    def __init__(self, sensor_service, noise_std: float = 0.01,
                 failure_rate: float = 0.05,
                 random_state: Optional[np.random.Generator] = None):
        self.sensor_service = sensor_service
        self.noise_std = noise_std
        self.failure_rate = failure_rate
        self.rng = random_state if random_state is not None else np.random.default_rng()
    
    def __call__(self) -> CameraPose:
        if self.rng.random() < self.failure_rate:
            raise PoseUnavailable("camera pose not available")
        
        x, y, heading = self.sensor_service.true_pose()
        noise = self.rng.normal(scale=self.noise_std, size=3)
        
        return CameraPose(
            position=(x + noise[0], noise[1], -y + noise[2]),
            forward=(math.cos(heading), 0.0, -math.sin(heading)),
        )
