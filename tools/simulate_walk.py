#!/usr/bin/env python3
"""
simulate_walk.py

Offline run of the dead reckoning estimator on a synthetic walk. Samples
come from the simulated sensor service at a fixed time step (no threads,
no wall clock), the camera-pose trail is polled at its own rate, and both
trajectories are plotted with Matplotlib next to the ground truth.

Usage:
    python tools/simulate_walk.py --duration 30 --seed 1
"""

from __future__ import annotations

import argparse
import os
import sys
import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from navx_core import TrackingController, PoseTrail, SensorSample
from navx_core.math.constants import POSE_POLL_INTERVAL_S
from platforms.desktop.hardware import SimulatedSensorService, SimulatedPoseSource, WalkProfile

def run_simulation(duration: float, dt: float, seed: int = None):
    """Run the estimator over a synthetic walk.

    Args:
        duration (float): Simulated walk duration in seconds.
        dt (float): Sensor sampling period in seconds.
        seed (int): RNG seed for reproducible noise.

    Returns:
        dict: ``dr`` (N, 2) dead-reckoning path, ``slam`` (M, 3) trail,
        ``truth`` (K, 2) ground truth, and the final controller statistics.
    """
    rng = np.random.default_rng(seed)
    service = SimulatedSensorService(WalkProfile(), random_state=rng)
    pose_source = SimulatedPoseSource(service, random_state=rng)
    controller = TrackingController()
    trail = PoseTrail()

    # Device is at rest for the first sample: capture it as bias
    t = 0.0
    accel, gyro = service.advance(dt)
    t += dt
    controller.on_gyro(SensorSample.from_reading(gyro, t))
    controller.on_accel(SensorSample.from_reading(accel, t))
    controller.calibrate()
    controller.start()

    truth = [service.true_position]
    next_poll = 0.0
    while t < duration:
        accel, gyro = service.advance(dt)
        t += dt
        controller.on_gyro(SensorSample.from_reading(gyro, t))
        controller.on_accel(SensorSample.from_reading(accel, t))
        truth.append(service.true_position)

        if t >= next_poll:
            trail.poll(pose_source)
            next_poll += POSE_POLL_INTERVAL_S

    controller.stop()

    dr = np.array([[p.x, p.y] for p in controller.current_trajectory()])
    return {
        'dr': dr,
        'slam': trail.as_array(),
        'slam_distance': trail.total_distance,
        'truth': np.array(truth),
        'stats': controller.get_statistics(),
    }

def plot_result(result: dict) -> None:
    import matplotlib.pyplot as plt

    dr = result['dr']
    slam = result['slam']
    truth = result['truth']

    plt.figure(figsize=(8, 8))
    plt.plot(truth[:, 0], truth[:, 1], 'k--', label="Ground truth", linewidth=1)
    plt.plot(dr[:, 0], dr[:, 1], 'g-', label="Dead Reckoning (DR)", linewidth=2)
    if len(slam):
        # Tracker frame is y-up, camera along -z
        plt.scatter(slam[:, 0], -slam[:, 2], s=8, c='red', label="Camera trail", alpha=0.7)

    plt.xlabel("X (m)")
    plt.ylabel("Y (m)")
    plt.title("Estimated 2D Path (Top View)")
    plt.grid(True)
    plt.axis('equal')
    plt.legend()
    plt.tight_layout()
    plt.show()

def main():
    ap = argparse.ArgumentParser(description="Dead reckoning on a synthetic walk")
    ap.add_argument("--duration", type=float, default=30.0, help="Walk duration (s)")
    ap.add_argument("--dt", type=float, default=0.05, help="Sensor period (s)")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--no-plot", action="store_true")
    args = ap.parse_args()

    result = run_simulation(args.duration, args.dt, args.seed)
    stats = result['stats']

    print(f"DR path:     {stats['trajectory_points']} points, {stats['total_distance']:.2f} m")
    print(f"Camera path: {len(result['slam'])} points, {result['slam_distance']:.2f} m")
    end_err = np.hypot(*(result['dr'][-1] - result['truth'][-1]))
    print(f"Final DR error vs truth: {end_err:.2f} m")

    if not args.no_plot:
        plot_result(result)

if __name__ == "__main__":
    main()
