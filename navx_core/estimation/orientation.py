"""
Heading tracking from gyroscope yaw rate.
"""

from ..math.utils import normalize_angle

class OrientationTracker:
    """
    Integrates yaw rate into a heading angle kept in (-pi, pi].
    
    The per-step rotation ``yaw_rate * dt`` is assumed to be smaller
    than 2*pi, so a single wrap always suffices. Non-finite input is
    not rejected and propagates into the heading.
    """
    
    def __init__(self):
        self.heading = 0.0
    
    def integrate(self, yaw_rate: float, dt: float) -> float:
        """
        Advance the heading by one step.
        
        Args:
            yaw_rate: Angular rate about the vertical axis (rad/s)
            dt: Time step in seconds
            
        Returns:
            New heading in radians
        """
        self.heading = normalize_angle(self.heading + yaw_rate * dt)
        return self.heading
    
    def reset(self):
        self.heading = 0.0
