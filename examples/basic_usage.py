#!/usr/bin/env python3
"""
Basic usage example of the dead reckoning core.

This example demonstrates how to drive the tracking controller directly
with timestamped samples, without a sensor service or any hardware.
"""

import sys
import os
import numpy as np

# Add core modules to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from navx_core import TrackingController, SensorSample

def simulate_samples(duration=10, dt=0.05, bias=(0.1, -0.05, 9.81)):
    """
    Simulate a device pushed forward, then turning while coasting.

    Args:
        duration: Simulation duration in seconds
        dt: Sampling period in seconds
        bias: Constant accelerometer offset (m/s²)

    Yields:
        (accel_sample, gyro_sample) tuples
    """
    accel_noise = 0.01  # m/s²
    gyro_noise = 0.001  # rad/s

    t = 0.0
    while t < duration:
        # Push forward for 2 s, then coast while turning left
        ax = 0.5 if t < 2.0 else 0.0
        yaw_rate = 0.0 if t < 2.0 else 0.3

        accel = SensorSample(
            x=bias[0] + ax + np.random.normal(0, accel_noise),
            y=bias[1] + np.random.normal(0, accel_noise),
            z=bias[2] + np.random.normal(0, accel_noise),
            t=t
        )
        gyro = SensorSample(
            x=np.random.normal(0, gyro_noise),
            y=np.random.normal(0, gyro_noise),
            z=yaw_rate + np.random.normal(0, gyro_noise),
            t=t
        )

        yield accel, gyro

        t += dt

def main():
    """Main example function."""
    print("Dead Reckoning Core - Basic Usage Example")
    print("=" * 50)

    controller = TrackingController()

    # Hold still and calibrate against a stationary reading
    controller.on_accel(SensorSample(x=0.1, y=-0.05, z=9.81, t=-0.05))
    bias = controller.calibrate()
    print(f"Calibrated bias: [{bias.x:.3f}, {bias.y:.3f}, {bias.z:.3f}] m/s²")

    controller.start()
    print("Tracking started")
    print()

    last_print_time = 0.0
    print_interval = 2.0

    for accel, gyro in simulate_samples(duration=10, dt=0.05):
        controller.on_gyro(gyro)
        controller.on_accel(accel)

        if accel.t - last_print_time >= print_interval:
            print_status(controller, accel.t)
            last_print_time = accel.t

    controller.stop()

    print("\nSimulation completed!")

    stats = controller.get_statistics()
    print("\n=== Final Statistics ===")
    print(f"Integration steps: {stats['integration_steps']}")
    print(f"Trajectory points: {stats['trajectory_points']}")
    print(f"Filtered positions: {stats['rejected_positions']}")
    print(f"Total distance: {stats['total_distance']:.2f} m")

def print_status(controller: TrackingController, timestamp: float):
    """Print current tracking status."""
    x, y = controller.current_position()
    vx, vy = controller.current_velocity()
    heading = controller.current_heading()

    print(f"Time: {timestamp:.1f}s")
    print(f"  Position: [{x:6.2f}, {y:6.2f}] m")
    print(f"  Velocity: [{vx:5.2f}, {vy:5.2f}] m/s")
    print(f"  Heading:  {heading:6.3f} rad ({np.degrees(heading):6.1f}°)")
    print(f"  Distance: {controller.current_distance():5.2f} m")
    print()

if __name__ == "__main__":
    main()
