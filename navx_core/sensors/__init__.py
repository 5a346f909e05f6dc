"""
Sensor samples and accelerometer calibration.
"""

from .samples import SensorSample, SensorKind, ZERO_SAMPLE
from .calibration import CalibrationBias, CalibrationStore

__all__ = ["SensorSample", "SensorKind", "ZERO_SAMPLE",
           "CalibrationBias", "CalibrationStore"]
