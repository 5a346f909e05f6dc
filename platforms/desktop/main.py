#!/usr/bin/env python3
"""
Dead Reckoning Application for desktop runs.
Sensors: simulated accelerometer/gyroscope service + simulated camera-pose tracker

Commands (stdin): start, stop, reset, calibrate, status, quit
"""

import argparse
import logging
import math
import os
import signal
import sys
import threading
import time
import numpy as np

# Add repository root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from navx_core import TrackingController, PoseTrail
from platforms.desktop.config import Config
from platforms.desktop.hardware import SimulatedSensorService, SimulatedPoseSource, WalkProfile

logger = logging.getLogger(__name__)

COMMANDS = ("start", "stop", "reset", "calibrate", "status", "quit")

class NavigationApp:
    """Dead reckoning application with a side-by-side camera-pose trail."""

    def __init__(self, config: Config):
        """Initialize the application from configuration."""
        self.config = config

        sim_cfg = dict(config.simulation)
        seed = sim_cfg.pop("seed", None)
        rng = np.random.default_rng(seed)

        # Platform services
        self.sensor_service = SimulatedSensorService(
            profile=WalkProfile.from_config(sim_cfg),
            random_state=rng
        )

        slam_cfg = config.slam
        self.pose_source = SimulatedPoseSource(
            self.sensor_service,
            noise_std=slam_cfg.get("noise_std", 0.01),
            failure_rate=slam_cfg.get("failure_rate", 0.05),
            random_state=rng
        )

        # Estimator
        self.controller = TrackingController(
            damping=config.velocity_damping,
            min_step=config.min_path_step_m
        )
        self.trail = PoseTrail(
            move_threshold=slam_cfg.get("move_threshold_m", 0.01),
            max_points=slam_cfg.get("max_points", 400)
        )

        # Threading control
        self.running = False
        self.pose_thread = None
        self.output_thread = None
        self.print_status_enabled = True

        # Statistics
        self.start_time = time.time()

    def _signal_handler(self, signum, frame):
        """Handle shutdown signals."""
        print("\nShutdown signal received, stopping application...")
        self.stop()
        sys.exit(0)

    def start(self) -> bool:
        """Subscribe to sensors and start background loops."""
        if self.running:
            print("Application already running")
            return False

        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

        self.controller.attach(self.sensor_service, self.config.sensor_update_interval_ms)
        self.sensor_service.start()

        self.running = True

        if self.config.get("slam.enabled", True):
            self.pose_thread = threading.Thread(target=self._pose_loop, daemon=True)
            self.pose_thread.start()

        self.output_thread = threading.Thread(target=self._output_loop, daemon=True)
        self.output_thread.start()

        logger.info("Sensor service running at %d ms", self.config.sensor_update_interval_ms)
        return True

    def stop(self):
        """Stop loops and unsubscribe from sensors."""
        if not self.running:
            return

        self.running = False

        for thread in (self.pose_thread, self.output_thread):
            if thread and thread.is_alive():
                thread.join(timeout=2.0)

        self.controller.detach()
        self.sensor_service.stop()

        print("Dead reckoning application stopped")

    def handle_command(self, command: str) -> bool:
        """
        Execute one operator command.

        Returns:
            False when the application should exit
        """
        command = command.strip().lower()

        if command == "start":
            self.controller.start()
        elif command == "stop":
            self.controller.stop()
        elif command == "reset":
            self.controller.reset()
        elif command == "calibrate":
            bias = self.controller.calibrate()
            print(f"Calibrated bias: [{bias.x:.3f}, {bias.y:.3f}, {bias.z:.3f}] m/s²")
        elif command == "status":
            self._print_status()
        elif command in ("quit", "exit"):
            return False
        elif command:
            print(f"Unknown command '{command}'. Commands: {', '.join(COMMANDS)}")

        return True

    def _pose_loop(self):
        """Camera pose polling loop."""
        interval = self.config.get("slam.poll_interval_s", 0.1)

        while self.running:
            try:
                self.trail.poll(self.pose_source)
                time.sleep(interval)

            except Exception as e:
                print(f"Pose loop error: {e}")
                time.sleep(1.0)

    def _output_loop(self):
        """Periodic status output loop."""
        last_output_time = time.time()
        output_interval = 1.0 / self.config.output_rate_hz

        while self.running:
            try:
                current_time = time.time()

                if (self.print_status_enabled and self.controller.is_tracking
                        and current_time - last_output_time >= output_interval):
                    self._print_status()
                    last_output_time = current_time

                time.sleep(0.1)

            except Exception as e:
                print(f"Output loop error: {e}")
                time.sleep(1.0)

    def _print_status(self):
        """Print current application status."""
        uptime = time.time() - self.start_time
        snap = self.controller.snapshot()
        accel = self.controller.latest_raw_accel()
        gyro = self.controller.latest_raw_gyro()
        speed = math.hypot(*snap.velocity)

        print(f"\n=== Dead Reckoning Status (Uptime: {uptime:.1f}s, {snap.state.value}) ===")
        print(f"Position: [{snap.position[0]:.2f}, {snap.position[1]:.2f}] m")
        print(f"Velocity: [{snap.velocity[0]:.2f}, {snap.velocity[1]:.2f}] m/s (Speed: {speed:.2f} m/s)")
        print(f"Heading:  {snap.heading:.3f} rad ({math.degrees(snap.heading):.1f}°)")
        print(f"Path:     {len(snap.trajectory)} points, {snap.total_distance:.2f} m")
        print(f"Bias:     [{snap.bias.x:.3f}, {snap.bias.y:.3f}, {snap.bias.z:.3f}] m/s²")
        print(f"Accel:    [{accel.x:.3f}, {accel.y:.3f}, {accel.z:.3f}] m/s²")
        print(f"Gyro:     [{gyro.x:.3f}, {gyro.y:.3f}, {gyro.z:.3f}] rad/s")
        print(self.trail.summary())

        stats = self.controller.get_statistics()
        print(f"Ingest: {stats['accel_samples']} accel, {stats['gyro_samples']} gyro, "
              f"{stats['integration_steps']} steps, {stats['discarded_samples']} discarded")

def main():
    """Main entry point."""
    ap = argparse.ArgumentParser(description="Inertial dead reckoning (desktop simulation)")
    ap.add_argument("--config", default="config.json", help="Path to JSON configuration")
    ap.add_argument("--no-status", action="store_true", help="Disable periodic status output")
    args = ap.parse_args()

    config = Config(args.config)
    config.setup_logging()

    print("Dead Reckoning Application")
    print(f"Commands: {', '.join(COMMANDS)}")
    print("=" * 50)

    app = NavigationApp(config)
    app.print_status_enabled = not args.no_status

    if not app.start():
        print("Failed to start application")
        return 1

    try:
        for line in sys.stdin:
            if not app.handle_command(line):
                break

    except KeyboardInterrupt:
        print("\nKeyboard interrupt received")

    finally:
        app.stop()

    return 0

if __name__ == "__main__":
    sys.exit(main())
