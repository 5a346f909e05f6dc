"""
Damped velocity/position integration in the world frame.
"""

from typing import Optional, Tuple

from .state import KinematicState
from ..math.constants import DEFAULT_VELOCITY_DAMPING

class KinematicIntegrator:
    """
    Semi-implicit Euler integrator with per-step velocity damping.
    
    Damping is a fixed multiplicative factor applied once per step,
    independent of ``dt``. Velocity is not clamped, so a sustained bias
    grows without bound (drift).
    """
    
    def __init__(self, damping: float = DEFAULT_VELOCITY_DAMPING):
        """
        Initialize the integrator.
        
        Args:
            damping: Per-step velocity factor in (0, 1]
        """
        if not 0.0 < damping <= 1.0:
            raise ValueError(f"Damping must be in (0, 1], got {damping}")
        
        self.damping = damping
        self.state = KinematicState()
    
    def step(self, ax_world: float, ay_world: float, dt: float,
             damping: Optional[float] = None) -> Tuple[float, float]:
        """
        Advance velocity and position by one step.
        
        Args:
            ax_world: World-frame x acceleration (m/s²)
            ay_world: World-frame y acceleration (m/s²)
            dt: Time step in seconds
            damping: Override for the per-step damping factor
            
        Returns:
            New position (x, y)
        """
        if damping is None:
            damping = self.damping
        
        s = self.state
        
        # Velocity update, damped every step
        s.vx = (s.vx + ax_world * dt) * damping
        s.vy = (s.vy + ay_world * dt) * damping
        
        # Position update uses the new velocity
        s.x = s.x + s.vx * dt
        s.y = s.y + s.vy * dt
        
        return s.x, s.y
    
    def reset(self):
        """Zero velocity and position."""
        self.state = KinematicState()
