"""
Mathematical, physical and estimator constants for dead reckoning.
"""

import math

# Mathematical constants
PI = math.pi
TWO_PI = 2 * math.pi

# Physical constants
GRAVITY_MS2 = 9.80665       # Standard gravity in m/s²

# Sensor delivery
DEFAULT_UPDATE_INTERVAL_MS = 50     # 20 Hz accelerometer/gyroscope stream

# Dead reckoning parameters
DEFAULT_VELOCITY_DAMPING = 0.98     # Per-step multiplicative factor (not per second)
MIN_PATH_STEP_M = 0.005             # Jitter filter for trajectory vertices (meters)

# Visual-inertial comparison trail
POSE_POLL_INTERVAL_S = 0.1          # 10 Hz camera pose polling
TRAIL_MOVE_THRESHOLD_M = 0.01       # 1 cm
TRAIL_MAX_POINTS = 400
HUD_DISTANCE_M = 1.2                # Overlay anchor distance in front of camera
