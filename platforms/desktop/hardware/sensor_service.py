"""
Simulated accelerometer/gyroscope service for desktop runs.

Mirrors the listener API of a mobile sensor service: callers set an
update interval, attach per-sensor listeners and remove them through the
returned handle. Readings are synthesized from a simple walking motion
with constant turn rate, plus gravity, a fixed accelerometer offset and
white noise.
"""

import math
import threading
import time
import numpy as np
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from navx_core.math.constants import DEFAULT_UPDATE_INTERVAL_MS, GRAVITY_MS2
from navx_core.sensors.samples import SensorKind

Listener = Callable[[Dict[str, float]], None]

@dataclass
class WalkProfile:
    """Ground-truth planar motion driving the simulated readings.
    
    Parameters:
        surge_amplitude (float): Peak longitudinal acceleration (m/s²).
        surge_period_s (float): Period of the longitudinal acceleration cycle (s).
        turn_rate (float): Constant yaw rate (rad/s).
        accel_offset (np.ndarray): Accelerometer offset in body frame (3,).
        accel_noise_std (float): Accelerometer white noise (m/s²).
        gyro_noise_std (float): Gyroscope white noise (rad/s).
    """
    surge_amplitude: float = 0.3
    surge_period_s: float = 4.0
    turn_rate: float = 0.1
    accel_offset: np.ndarray = field(default_factory=lambda: np.array([0.05, -0.03, 0.0]))
    accel_noise_std: float = 0.02
    gyro_noise_std: float = 0.002
    
    def __post_init__(self):
        self.accel_offset = np.asarray(self.accel_offset, dtype=float)
    
    @classmethod
    def from_config(cls, cfg: dict) -> 'WalkProfile':
        return cls(**{k: v for k, v in cfg.items() if k in cls.__dataclass_fields__})

class Subscription:
    """Handle returned by ``add_listener``."""
    
    def __init__(self, service: 'SimulatedSensorService', kind: SensorKind, listener: Listener):
        self.service = service
        self.kind = kind
        self.listener = listener
    
    def remove(self):
        self.service.remove(self)

class SimulatedSensorService:
    """
    Emits synthetic accelerometer and gyroscope readings on a background thread.
    """
    
    def __init__(self, profile: Optional[WalkProfile] = None,
                 random_state: Optional[np.random.Generator] = None):
        """
        Initialize the service.
        
        Args:
            profile: Motion and noise profile
            random_state: RNG for reproducible noise
        """
        self.profile = profile or WalkProfile()
        self.rng = random_state if random_state is not None else np.random.default_rng()
        self.interval_s = DEFAULT_UPDATE_INTERVAL_MS / 1000.0
        
        self._listeners = {SensorKind.ACCEL: [], SensorKind.GYRO: []}
        self._lock = threading.Lock()
        
        # Ground truth
        self.sim_time = 0.0
        self.speed = 0.0
        self.heading = 0.0
        self.x = 0.0
        self.y = 0.0
        
        # Threading control
        self.running = False
        self.thread = None
    
    def set_update_interval(self, interval_ms: int):
        """Set the emission interval for both sensors (milliseconds)."""
        if interval_ms <= 0:
            raise ValueError(f"Update interval must be positive, got {interval_ms} ms")
        self.interval_s = interval_ms / 1000.0
    
    def add_listener(self, kind: SensorKind, listener: Listener) -> Subscription:
        handle = Subscription(self, kind, listener)
        with self._lock:
            self._listeners[kind].append(handle)
        return handle
    
    def remove(self, handle: Subscription):
        with self._lock:
            if handle in self._listeners[handle.kind]:
                self._listeners[handle.kind].remove(handle)
    
    def listener_count(self, kind: SensorKind) -> int:
        with self._lock:
            return len(self._listeners[kind])
    
    def true_pose(self) -> Tuple[float, float, float]:
        """Consistent ground-truth (x, y, heading) from a single simulation step."""
        with self._lock:
            return self.x, self.y, self.heading
    
    @property
    def true_position(self) -> Tuple[float, float]:
        x, y, _ = self.true_pose()
        return x, y
    
    def start(self):
        if self.running:
            return
        self.running = True
        self.thread = threading.Thread(target=self._emit_loop, daemon=True)
        self.thread.start()
    
    def stop(self):
        self.running = False
        if self.thread and self.thread.is_alive():
            self.thread.join(timeout=2.0)
        self.thread = None
    
    def advance(self, dt: float):
        """
        Advance ground truth by ``dt`` and return the body-frame readings.
        
        Returns:
            (accel, gyro) readings as ``{x, y, z}`` dicts
        """
        p = self.profile
        
        with self._lock:
            a_long = p.surge_amplitude * math.sin(2 * math.pi * self.sim_time / p.surge_period_s)
            self.speed = max(0.0, self.speed + a_long * dt)
            self.heading += p.turn_rate * dt
            self.x += self.speed * math.cos(self.heading) * dt
            self.y += self.speed * math.sin(self.heading) * dt
            self.sim_time += dt
            speed = self.speed
        
        # Longitudinal + centripetal specific force, gravity on z
        specific_force = np.array([a_long, speed * p.turn_rate, GRAVITY_MS2])
        accel = specific_force + p.accel_offset + self.rng.normal(scale=p.accel_noise_std, size=3)
        gyro = np.array([0.0, 0.0, p.turn_rate]) + self.rng.normal(scale=p.gyro_noise_std, size=3)
        
        return (
            {'x': float(accel[0]), 'y': float(accel[1]), 'z': float(accel[2])},
            {'x': float(gyro[0]), 'y': float(gyro[1]), 'z': float(gyro[2])},
        )
    
    def emit(self, dt: float):
        """Advance ground truth by ``dt`` and deliver one reading per sensor."""
        accel, gyro = self.advance(dt)
        self._dispatch(SensorKind.GYRO, gyro)
        self._dispatch(SensorKind.ACCEL, accel)
    
    def _dispatch(self, kind: SensorKind, reading: Dict[str, float]):
        with self._lock:
            handles = list(self._listeners[kind])
        for handle in handles:
            handle.listener(reading)
    
    def _emit_loop(self):
        """Sensor emission loop."""
        last_time = time.time()
        
        while self.running:
            try:
                current_time = time.time()
                dt = current_time - last_time
                last_time = current_time
                
                self.emit(dt)
                
                time.sleep(self.interval_s)
                
            except Exception as e:
                print(f"Sensor loop error: {e}")
                time.sleep(0.1)
