"""
Tracking session state machine and control/query surface.
"""

import logging
import threading
import time
from typing import Any, Callable, List, Mapping, Optional, Tuple

from .estimation.session import TrackingSession, SessionSnapshot
from .estimation.state import PathPoint, TrackingState
from .ingest import SampleIngest
from .math.constants import (DEFAULT_UPDATE_INTERVAL_MS, DEFAULT_VELOCITY_DAMPING,
                             MIN_PATH_STEP_M)
from .sensors.calibration import CalibrationBias, CalibrationStore
from .sensors.samples import SensorKind, SensorSample, ZERO_SAMPLE

logger = logging.getLogger(__name__)

SnapshotObserver = Callable[[SessionSnapshot], None]

class TrackingController:
    """
    Owns the tracking session and exposes Start/Stop/Reset/Calibrate.

    States are Idle (initial) and Tracking. Integration only happens
    while Tracking. Every command and every sensor callback runs to
    completion under one lock, so a command never interleaves with a
    partially applied integration step and queries never observe a
    partial append.
    """

    def __init__(self,
                 damping: float = DEFAULT_VELOCITY_DAMPING,
                 min_step: float = MIN_PATH_STEP_M,
                 calibration: Optional[CalibrationStore] = None,
                 clock: Callable[[], float] = time.time):
        """
        Initialize the controller in the Idle state.

        Args:
            damping: Per-step velocity damping factor
            min_step: Minimum distance between trajectory vertices (m)
            calibration: Bias store (a fresh one if omitted)
            clock: Wall clock used to tag raw sensor readings
        """
        self.calibration = calibration or CalibrationStore()
        self.session = TrackingSession(damping=damping, min_step=min_step)
        self.ingest = SampleIngest(self.session, self.calibration, clock=clock)

        self._lock = threading.RLock()
        self._observers: List[SnapshotObserver] = []

        # Snapshots are numbered under the session lock; delivery skips
        # any snapshot older than one already delivered
        self._deliver_lock = threading.RLock()
        self._publish_seq = 0
        self._delivered_seq = 0

        # Sensor service subscriptions
        self._service = None
        self._subscriptions = []

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self):
        """Clear the session and begin tracking."""
        with self._lock:
            self.session.clear()
            self.session.state = TrackingState.TRACKING
            published = self._capture_locked()
        logger.info("Tracking started")
        self._deliver(published)

    def stop(self):
        """Stop tracking, keeping the trajectory and distance for display."""
        with self._lock:
            self.session.state = TrackingState.IDLE
            self.session.last_sample_timestamp = None
            points = len(self.session.sampler.trajectory)
            distance = self.session.total_distance
            published = self._capture_locked()
        logger.info("Tracking stopped (%d points, %.2f m)", points, distance)
        self._deliver(published)

    def reset(self):
        """Clear the session and return to Idle."""
        with self._lock:
            self._reset_locked()
            published = self._capture_locked()
        logger.info("Session reset")
        self._deliver(published)

    def calibrate(self) -> CalibrationBias:
        """
        Capture the latest raw accelerometer reading as the new bias.

        The session is reset afterwards so the next run starts clean
        under the new bias.

        Returns:
            The new bias
        """
        with self._lock:
            bias = self.calibration.calibrate(self.ingest.latest_accel)
            self._reset_locked()
            published = self._capture_locked()
        self._deliver(published)
        return bias

    def _reset_locked(self):
        self.session.clear()
        self.session.state = TrackingState.IDLE

    # ------------------------------------------------------------------
    # Sensor callbacks
    # ------------------------------------------------------------------

    def on_accel(self, sample: SensorSample) -> Optional[PathPoint]:
        """Accelerometer callback; integrates while tracking."""
        with self._lock:
            tracking = self.session.is_tracking
            point = self.ingest.on_accel(sample)
            published = self._capture_locked() if tracking else None
        self._deliver(published)
        return point

    def on_gyro(self, sample: SensorSample):
        """Gyroscope callback; refreshes the cached yaw rate."""
        with self._lock:
            self.ingest.on_gyro(sample)

    def on_raw_accel(self, reading: Mapping[str, Any]) -> Optional[PathPoint]:
        """Accelerometer callback for untimestamped ``{x, y, z}`` readings."""
        return self.on_accel(self.ingest.tag(reading))

    def on_raw_gyro(self, reading: Mapping[str, Any]):
        """Gyroscope callback for untimestamped ``{x, y, z}`` readings."""
        self.on_gyro(self.ingest.tag(reading))

    # ------------------------------------------------------------------
    # Sensor service lifecycle
    # ------------------------------------------------------------------

    def attach(self, service, interval_ms: int = DEFAULT_UPDATE_INTERVAL_MS):
        """
        Subscribe to a sensor service for both sensor streams.

        The service must provide ``set_update_interval(ms)``,
        ``add_listener(kind, callback)`` and ``remove(handle)``.
        Listeners receive raw ``{x, y, z}`` readings.
        """
        if self._service is not None:
            self.detach()

        service.set_update_interval(interval_ms)
        self._service = service
        self._subscriptions = [
            service.add_listener(SensorKind.ACCEL, self.on_raw_accel),
            service.add_listener(SensorKind.GYRO, self.on_raw_gyro),
        ]
        logger.info("Subscribed to sensor service at %d ms", interval_ms)

    def detach(self):
        """Remove all listeners from the attached sensor service."""
        if self._service is None:
            return

        for handle in self._subscriptions:
            self._service.remove(handle)
        self._subscriptions = []
        self._service = None
        logger.info("Unsubscribed from sensor service")

    @property
    def attached(self) -> bool:
        return self._service is not None

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, observer: SnapshotObserver) -> Callable[[], None]:
        """
        Register a snapshot observer.

        Returns:
            A function that unregisters the observer
        """
        self._observers.append(observer)

        def unsubscribe():
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _capture_locked(self) -> Optional[Tuple[int, SessionSnapshot]]:
        """Number and capture the current snapshot; caller holds the session lock."""
        if not self._observers:
            return None

        self._publish_seq += 1
        return self._publish_seq, SessionSnapshot.capture(self.session, self.calibration.current())

    def _deliver(self, published: Optional[Tuple[int, SessionSnapshot]]):
        """Hand a captured snapshot to observers unless a newer one went out first."""
        if published is None:
            return

        seq, snap = published
        with self._deliver_lock:
            if seq <= self._delivered_seq:
                logger.debug("Dropping superseded snapshot %d", seq)
                return
            self._delivered_seq = seq

            for observer in list(self._observers):
                # An observer may issue a command that publishes re-entrantly
                if self._delivered_seq != seq:
                    break
                try:
                    observer(snap)
                except Exception:
                    logger.exception("Snapshot observer failed")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> TrackingState:
        return self.session.state

    @property
    def is_tracking(self) -> bool:
        return self.session.is_tracking

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return SessionSnapshot.capture(self.session, self.calibration.current())

    def current_trajectory(self) -> Tuple[PathPoint, ...]:
        with self._lock:
            return self.session.sampler.trajectory.snapshot()

    def current_distance(self) -> float:
        with self._lock:
            return self.session.total_distance

    def current_bias(self) -> CalibrationBias:
        return self.calibration.current()

    def current_heading(self) -> float:
        with self._lock:
            return self.session.orientation.heading

    def current_position(self) -> Tuple[float, float]:
        with self._lock:
            k = self.session.kinematics.state
            return k.x, k.y

    def current_velocity(self) -> Tuple[float, float]:
        with self._lock:
            k = self.session.kinematics.state
            return k.vx, k.vy

    def latest_raw_accel(self) -> SensorSample:
        return self.ingest.latest_accel

    def latest_raw_gyro(self) -> SensorSample:
        return self.ingest.latest_gyro or ZERO_SAMPLE

    def get_statistics(self) -> dict:
        """Get controller statistics."""
        with self._lock:
            stats = self.ingest.get_statistics()
            stats.update({
                'state': self.session.state.value,
                'trajectory_points': len(self.session.sampler.trajectory),
                'rejected_positions': self.session.sampler.rejected_count,
                'total_distance': self.session.total_distance,
                'calibrations': self.calibration.calibration_count,
            })
            return stats
