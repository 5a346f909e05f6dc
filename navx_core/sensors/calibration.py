"""
Accelerometer bias calibration.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

from .samples import SensorSample

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class CalibrationBias:
    """Stationary accelerometer reading subtracted from later samples."""
    
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

class CalibrationStore:
    """
    Holds the current accelerometer bias.
    
    The bias is replaced wholesale by ``calibrate`` and is otherwise
    immutable. Only x and y are used by the estimator.
    """
    
    def __init__(self):
        self._bias = CalibrationBias()
        self.calibration_count = 0
    
    def calibrate(self, sample: SensorSample) -> CalibrationBias:
        """Replace the bias with the reading of ``sample``."""
        self._bias = CalibrationBias(sample.x, sample.y, sample.z)
        self.calibration_count += 1
        logger.info("Accel bias set to [%.3f, %.3f, %.3f] m/s²",
                    sample.x, sample.y, sample.z)
        return self._bias
    
    def current(self) -> CalibrationBias:
        """Latest bias, zero before the first calibration."""
        return self._bias
    
    def correct(self, sample: SensorSample) -> Tuple[float, float]:
        """Bias-corrected planar acceleration ``(x - bx, y - by)``."""
        bias = self._bias
        return sample.x - bias.x, sample.y - bias.y
