"""
Mathematical utility functions for dead reckoning.
"""

import numpy as np
import math

from .constants import PI, TWO_PI

def rotate_to_world(ax_body, ay_body, heading):
    """
    Rotate a body-frame planar acceleration into the world frame.
    
    Args:
        ax_body (float): Body-frame x acceleration (m/s²)
        ay_body (float): Body-frame y acceleration (m/s²)
        heading (float): Current yaw angle in radians
        
    Returns:
        tuple: (ax_world, ay_world)
    """
    cos_h = math.cos(heading)
    sin_h = math.sin(heading)
    
    ax_world = ax_body * cos_h - ay_body * sin_h
    ay_world = ax_body * sin_h + ay_body * cos_h
    return ax_world, ay_world

def normalize_angle(angle):
    """
    Wrap angle into the (-pi, pi] range.
    
    Adds or subtracts 2*pi at most once, so the input must lie within
    (-3*pi, 3*pi]. Non-finite input is returned unchanged.
    
    Args:
        angle (float): Angle in radians
        
    Returns:
        float: Wrapped angle in (-pi, pi]
    """
    if angle > PI:
        angle -= TWO_PI
    elif angle <= -PI:
        angle += TWO_PI
    return angle

def planar_distance(x1, y1, x2, y2):
    """Euclidean distance between two points in the plane."""
    return math.hypot(x2 - x1, y2 - y1)

def spatial_distance(p1, p2):
    """Euclidean distance between two 3D points."""
    return float(np.linalg.norm(np.asarray(p2, dtype=float) - np.asarray(p1, dtype=float)))

