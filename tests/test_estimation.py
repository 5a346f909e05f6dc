#!/usr/bin/env python3
"""
Unit tests for the dead reckoning estimation components.
"""

import unittest
import math
import numpy as np
import sys
import os

# Add core modules to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from navx_core.estimation import (OrientationTracker, KinematicIntegrator, KinematicState,
                                  PathSampler, PathPoint, ORIGIN)
from navx_core.math.utils import normalize_angle, rotate_to_world
from navx_core.sensors import CalibrationStore, CalibrationBias, SensorSample

class TestNormalizeAngle(unittest.TestCase):
    """Test single-wrap angle normalization."""

    def test_in_range_unchanged(self):
        for angle in [0.0, 1.0, -1.0, 3.0, -3.0, math.pi]:
            self.assertEqual(normalize_angle(angle), angle)

    def test_negative_pi_maps_to_pi(self):
        """The range is (-pi, pi], so -pi becomes +pi."""
        self.assertAlmostEqual(normalize_angle(-math.pi), math.pi)

    def test_wraps_once(self):
        self.assertAlmostEqual(normalize_angle(3.5), 3.5 - 2 * math.pi)
        self.assertAlmostEqual(normalize_angle(-3.5), -3.5 + 2 * math.pi)

    def test_non_finite_propagates(self):
        self.assertTrue(math.isnan(normalize_angle(float('nan'))))

class TestOrientationTracker(unittest.TestCase):
    """Test OrientationTracker class."""

    def test_initial_heading(self):
        tracker = OrientationTracker()
        self.assertEqual(tracker.heading, 0.0)

    def test_integrate(self):
        """Heading advances by yaw_rate * dt."""
        tracker = OrientationTracker()

        heading = tracker.integrate(1.0, 0.5)

        self.assertAlmostEqual(heading, 0.5)
        self.assertEqual(tracker.heading, heading)

    def test_wrap_past_pi(self):
        tracker = OrientationTracker()
        tracker.heading = 3.0

        heading = tracker.integrate(1.0, 0.5)

        self.assertAlmostEqual(heading, 3.5 - 2 * math.pi)

    def test_heading_stays_in_range(self):
        """Heading stays in (-pi, pi] after every step."""
        rng = np.random.default_rng(0)
        tracker = OrientationTracker()

        for _ in range(5000):
            yaw_rate = rng.uniform(-10.0, 10.0)
            dt = rng.uniform(1e-4, 0.5)
            heading = tracker.integrate(yaw_rate, dt)
            self.assertGreater(heading, -math.pi)
            self.assertLessEqual(heading, math.pi)

    def test_reset(self):
        tracker = OrientationTracker()
        tracker.integrate(0.5, 1.0)
        tracker.reset()
        self.assertEqual(tracker.heading, 0.0)

class TestFrameRotation(unittest.TestCase):
    """Test body-to-world rotation."""

    def test_zero_heading_is_identity(self):
        rng = np.random.default_rng(1)
        for ax, ay in rng.uniform(-50.0, 50.0, size=(200, 2)):
            self.assertEqual(rotate_to_world(ax, ay, 0.0), (ax, ay))

    def test_quarter_turn(self):
        ax, ay = rotate_to_world(1.0, 0.0, math.pi / 2)
        self.assertAlmostEqual(ax, 0.0)
        self.assertAlmostEqual(ay, 1.0)

    def test_matches_rotation_matrix(self):
        heading = 0.7
        rotation = np.array([[math.cos(heading), -math.sin(heading)],
                             [math.sin(heading),  math.cos(heading)]])
        expected = rotation @ np.array([0.3, -1.2])
        np.testing.assert_allclose(rotate_to_world(0.3, -1.2, heading), expected, atol=1e-12)

class TestKinematicIntegrator(unittest.TestCase):
    """Test KinematicIntegrator class."""

    def test_single_step_from_rest(self):
        integ = KinematicIntegrator()

        x, y = integ.step(1.0, 0.0, 0.05)

        # v = (0 + 1.0 * 0.05) * 0.98, x = v * 0.05
        self.assertAlmostEqual(integ.state.vx, 0.049)
        self.assertAlmostEqual(x, 0.049 * 0.05)
        self.assertEqual(y, 0.0)

    def test_damping_decay(self):
        """With zero input, speed shrinks by exactly the damping factor every step."""
        integ = KinematicIntegrator()
        integ.state.vx = 3.0
        integ.state.vy = 4.0

        speed = integ.state.speed
        steps = 0
        while speed > 1e-6:
            integ.step(0.0, 0.0, 0.05)
            new_speed = integ.state.speed
            self.assertLess(new_speed, speed)
            self.assertAlmostEqual(new_speed / speed, 0.98)
            speed = new_speed
            steps += 1

        self.assertGreater(steps, 100)

    def test_damping_independent_of_dt(self):
        """Damping is per step, not per second."""
        short = KinematicIntegrator()
        long = KinematicIntegrator()
        short.state.vx = long.state.vx = 1.0

        short.step(0.0, 0.0, 0.001)
        long.step(0.0, 0.0, 1.0)

        self.assertAlmostEqual(short.state.vx, 0.98)
        self.assertAlmostEqual(long.state.vx, 0.98)

    def test_damping_override(self):
        integ = KinematicIntegrator()
        integ.state.vx = 2.0

        integ.step(0.0, 0.0, 0.1, damping=1.0)

        self.assertEqual(integ.state.vx, 2.0)
        self.assertAlmostEqual(integ.state.x, 0.2)

    def test_invalid_damping(self):
        with self.assertRaises(ValueError):
            KinematicIntegrator(damping=0.0)
        with self.assertRaises(ValueError):
            KinematicIntegrator(damping=1.5)

    def test_reset(self):
        integ = KinematicIntegrator()
        integ.step(1.0, 2.0, 0.1)
        integ.reset()
        self.assertEqual(integ.state, KinematicState())

class TestKinematicState(unittest.TestCase):
    """Test KinematicState class."""

    def test_speed_property(self):
        state = KinematicState(vx=3.0, vy=4.0)
        self.assertAlmostEqual(state.speed, 5.0, places=6)

    def test_vectors(self):
        state = KinematicState(vx=1.0, vy=2.0, x=3.0, y=4.0)
        np.testing.assert_array_equal(state.velocity, [1.0, 2.0])
        np.testing.assert_array_equal(state.position, [3.0, 4.0])

class TestPathSampler(unittest.TestCase):
    """Test PathSampler class."""

    def setUp(self):
        self.sampler = PathSampler()
        self.sampler.reset()

    def test_reset_seeds_origin(self):
        self.assertEqual(self.sampler.trajectory.snapshot(), (ORIGIN,))
        self.assertEqual(self.sampler.total_distance, 0.0)

    def test_below_threshold_discarded(self):
        self.assertIsNone(self.sampler.consider(0.004, 0.0))
        self.assertEqual(len(self.sampler.trajectory), 1)
        self.assertEqual(self.sampler.total_distance, 0.0)
        self.assertEqual(self.sampler.rejected_count, 1)

    def test_above_threshold_recorded(self):
        point = self.sampler.consider(0.006, 0.0)

        self.assertEqual(point, PathPoint(0.006, 0.0))
        self.assertEqual(len(self.sampler.trajectory), 2)
        self.assertAlmostEqual(self.sampler.total_distance, 0.006, places=12)

    def test_distance_measured_from_last_recorded_point(self):
        """Small moves accumulate until they clear the threshold."""
        self.assertIsNone(self.sampler.consider(0.003, 0.0))
        self.assertIsNone(self.sampler.consider(0.0, 0.004))
        self.assertIsNotNone(self.sampler.consider(0.0, 0.008))
        self.assertAlmostEqual(self.sampler.total_distance, 0.008)

    def test_distance_is_monotonic(self):
        rng = np.random.default_rng(2)
        last = 0.0
        for x, y in rng.uniform(-1.0, 1.0, size=(500, 2)):
            self.sampler.consider(x, y)
            self.assertGreaterEqual(self.sampler.total_distance, last)
            last = self.sampler.total_distance

    def test_first_point_always_recorded(self):
        sampler = PathSampler()

        point = sampler.consider(1.0, 2.0)

        self.assertEqual(point, PathPoint(1.0, 2.0))
        self.assertEqual(sampler.total_distance, 0.0)

    def test_snapshot_is_immutable_copy(self):
        snap = self.sampler.trajectory.snapshot()
        self.sampler.consider(1.0, 0.0)

        self.assertEqual(len(snap), 1)
        self.assertIsInstance(snap, tuple)

    def test_as_array(self):
        self.sampler.consider(1.0, 2.0)
        np.testing.assert_array_equal(self.sampler.trajectory.as_array(),
                                      [[0.0, 0.0], [1.0, 2.0]])

    def test_negative_step_rejected(self):
        with self.assertRaises(ValueError):
            PathSampler(min_step=-0.1)

class TestCalibrationStore(unittest.TestCase):
    """Test CalibrationStore class."""

    def test_default_bias(self):
        store = CalibrationStore()
        self.assertEqual(store.current(), CalibrationBias(0.0, 0.0, 0.0))

    def test_calibrate_replaces_bias(self):
        store = CalibrationStore()

        store.calibrate(SensorSample(0.2, -0.1, 9.8, t=1.0))
        store.calibrate(SensorSample(0.3, 0.4, 9.7, t=2.0))

        self.assertEqual(store.current(), CalibrationBias(0.3, 0.4, 9.7))
        self.assertEqual(store.calibration_count, 2)

    def test_correction(self):
        """Corrected input is (s.x - b.x, s.y - b.y) for any bias and sample."""
        rng = np.random.default_rng(3)
        store = CalibrationStore()

        for bx, by, bz, sx, sy, sz in rng.uniform(-20.0, 20.0, size=(200, 6)):
            store.calibrate(SensorSample(bx, by, bz, t=0.0))
            corrected = store.correct(SensorSample(sx, sy, sz, t=1.0))
            self.assertEqual(corrected, (sx - bx, sy - by))

if __name__ == '__main__':
    unittest.main(verbosity=2)
