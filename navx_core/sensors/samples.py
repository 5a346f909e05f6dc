"""
Timestamped accelerometer and gyroscope readings.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

class SensorKind(Enum):
    """Sensor stream delivered by the platform sensor service."""
    ACCEL = "accelerometer"
    GYRO = "gyroscope"

@dataclass(frozen=True)
class SensorSample:
    """
    A single 3-axis reading from either sensor.
    
    Units are m/s² for acceleration and rad/s for angular rate;
    ``t`` is a timestamp in seconds.
    """
    
    x: float
    y: float
    z: float
    t: float
    
    @classmethod
    def from_reading(cls, reading: Mapping[str, Any],
                     t: Optional[float] = None) -> 'SensorSample':
        """
        Build a sample from a raw ``{x, y, z}`` mapping.
        
        Args:
            reading: Raw reading as delivered by the sensor service
            t: Timestamp in seconds (wall clock now if omitted)
        """
        if t is None:
            t = time.time()
        return cls(x=float(reading["x"]),
                   y=float(reading["y"]),
                   z=float(reading["z"]),
                   t=t)

ZERO_SAMPLE = SensorSample(0.0, 0.0, 0.0, 0.0)
