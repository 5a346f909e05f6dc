"""
Mathematical utilities for dead reckoning calculations.
"""

from .utils import rotate_to_world, normalize_angle, planar_distance, spatial_distance
from .constants import *

__all__ = ["rotate_to_world", "normalize_angle",
           "planar_distance", "spatial_distance"]
