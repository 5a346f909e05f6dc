"""
Boundary adapter between the sensor service and the estimator.

Gyroscope samples only refresh a last-write-wins cache. Every
accelerometer sample refreshes the live readout and, while the session
is tracking, drives one integration step using whatever gyroscope rate
was cached last. That rate may be up to one sampling period old; it is
never interpolated or matched by timestamp.
"""

import logging
import time
from typing import Any, Callable, Mapping, Optional

from .estimation.session import TrackingSession
from .estimation.state import PathPoint
from .math.utils import rotate_to_world
from .sensors.calibration import CalibrationStore
from .sensors.samples import SensorSample, ZERO_SAMPLE

logger = logging.getLogger(__name__)

class SampleIngest:
    """
    Feeds accelerometer/gyroscope samples through the estimation pipeline.
    """

    def __init__(self, session: TrackingSession,
                 calibration: CalibrationStore,
                 clock: Callable[[], float] = time.time):
        """
        Initialize the adapter.

        Args:
            session: Session whose state is advanced
            calibration: Source of the accelerometer bias
            clock: Wall-clock used to tag raw readings (seconds)
        """
        self.session = session
        self.calibration = calibration
        self.clock = clock

        # Live readouts
        self.latest_accel: SensorSample = ZERO_SAMPLE
        self.latest_gyro: Optional[SensorSample] = None

        # Statistics
        self.accel_count = 0
        self.gyro_count = 0
        self.step_count = 0
        self.discarded_count = 0

    @property
    def yaw_rate(self) -> float:
        """Most recent gyroscope z rate, 0 before any gyroscope sample."""
        if self.latest_gyro is None:
            return 0.0
        return self.latest_gyro.z

    def tag(self, reading: Mapping[str, Any]) -> SensorSample:
        """Stamp a raw ``{x, y, z}`` reading with the wall clock."""
        return SensorSample.from_reading(reading, self.clock())

    def on_gyro(self, sample: SensorSample):
        """Overwrite the cached gyroscope reading. Never integrates."""
        self.latest_gyro = sample
        self.gyro_count += 1

    def on_accel(self, sample: SensorSample) -> Optional[PathPoint]:
        """
        Process one accelerometer sample.

        Args:
            sample: Timestamped accelerometer reading

        Returns:
            The trajectory point recorded by this step, if any
        """
        self.latest_accel = sample
        self.accel_count += 1

        session = self.session
        if not session.is_tracking:
            return None

        if session.last_sample_timestamp is None:
            # First sample of the session only establishes the time base
            session.last_sample_timestamp = sample.t
            logger.debug("Time base established at t=%.3f", sample.t)
            return None

        dt = sample.t - session.last_sample_timestamp
        session.last_sample_timestamp = sample.t

        if dt <= 0:
            self.discarded_count += 1
            logger.debug("Discarding accel sample with dt=%.4f s", dt)
            return None

        return self._integrate(sample, dt)

    def _integrate(self, sample: SensorSample, dt: float) -> Optional[PathPoint]:
        session = self.session

        ax_body, ay_body = self.calibration.correct(sample)
        heading = session.orientation.integrate(self.yaw_rate, dt)
        ax_world, ay_world = rotate_to_world(ax_body, ay_body, heading)
        x, y = session.kinematics.step(ax_world, ay_world, dt)

        self.step_count += 1
        return session.sampler.consider(x, y)

    def get_statistics(self) -> dict:
        """Get ingest statistics."""
        return {
            'accel_samples': self.accel_count,
            'gyro_samples': self.gyro_count,
            'integration_steps': self.step_count,
            'discarded_samples': self.discarded_count,
        }
