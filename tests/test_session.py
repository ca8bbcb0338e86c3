"""
Tests for the breathing session state machine.
"""

import unittest

import numpy as np

from breathease.model.errors import InvalidArgument
from breathease.model.exercises import get_exercise
from breathease.model.session import SessionController, SessionSnapshot, SessionState


class TestSessionLifecycle(unittest.TestCase):
    """Tests for start/stop/toggle transitions."""

    def test_initial_state(self):
        session = SessionController(duration_seconds=10)
        self.assertEqual(session.state, SessionState.IDLE)
        self.assertEqual(session.progress, 0.0)
        self.assertEqual(session.elapsed_seconds, 0.0)
        self.assertEqual(session.duration_seconds, 10.0)

    def test_start_and_stop(self):
        session = SessionController()
        snapshot = session.start(30)
        self.assertEqual(snapshot.state, SessionState.ACTIVE)
        self.assertEqual(snapshot.duration_seconds, 30.0)
        self.assertEqual(snapshot.progress, 0.0)

        session.tick(3.0)
        snapshot = session.stop()
        self.assertEqual(snapshot.state, SessionState.IDLE)
        self.assertEqual(snapshot.progress, 0.0)
        self.assertEqual(snapshot.elapsed_seconds, 0.0)

    def test_start_uses_configured_duration(self):
        session = SessionController(duration_seconds=12.5)
        self.assertEqual(session.start().duration_seconds, 12.5)

    def test_restart_discards_progress(self):
        session = SessionController()
        session.start(10)
        session.tick(4)
        snapshot = session.start(20)
        self.assertEqual(snapshot.elapsed_seconds, 0.0)
        self.assertEqual(snapshot.progress, 0.0)
        self.assertEqual(snapshot.duration_seconds, 20.0)

    def test_stop_when_idle_is_noop(self):
        session = SessionController()
        before = session.snapshot()
        self.assertEqual(session.stop(), before)

    def test_toggle(self):
        session = SessionController(duration_seconds=8)
        self.assertEqual(session.toggle().state, SessionState.ACTIVE)
        session.tick(2)
        self.assertEqual(session.toggle().state, SessionState.IDLE)
        self.assertEqual(session.progress, 0.0)
        self.assertEqual(session.toggle(4).duration_seconds, 4.0)

    def test_start_exercise(self):
        session = SessionController()
        snapshot = session.start_exercise(get_exercise("Box Breathing"))
        self.assertTrue(snapshot.is_active)
        self.assertEqual(snapshot.duration_seconds, 480.0)


class TestSessionValidation(unittest.TestCase):
    """Tests for rejected durations."""

    def test_non_positive_duration_rejected_when_idle(self):
        session = SessionController(duration_seconds=10)
        for bad in (0, -5, float("nan"), float("inf"), "ten"):
            with self.subTest(duration=bad):
                with self.assertRaises(InvalidArgument):
                    session.start(bad)
                self.assertEqual(session.state, SessionState.IDLE)
                self.assertEqual(session.duration_seconds, 10.0)

    def test_rejected_start_leaves_active_session_untouched(self):
        session = SessionController()
        session.start(10)
        session.tick(3)
        before = session.snapshot()

        with self.assertRaises(InvalidArgument):
            session.start(0)
        with self.assertRaises(InvalidArgument):
            session.start(-5)

        self.assertEqual(session.snapshot(), before)

    def test_rejected_toggle(self):
        session = SessionController()
        with self.assertRaises(InvalidArgument):
            session.toggle(-1)
        self.assertEqual(session.state, SessionState.IDLE)

    def test_invalid_constructor_duration(self):
        with self.assertRaises(InvalidArgument):
            SessionController(duration_seconds=0)


class TestSessionProgress(unittest.TestCase):
    """Tests for elapsed time and progress accounting."""

    def test_end_to_end_scenario(self):
        session = SessionController(duration_seconds=10)
        session.start(10)

        snapshot = session.tick(5)
        self.assertEqual(snapshot.progress, 0.5)

        snapshot = session.tick(6)
        self.assertEqual(snapshot.progress, 1.0)
        self.assertEqual(snapshot.elapsed_seconds, 11.0)

        snapshot = session.stop()
        self.assertEqual(snapshot.progress, 0.0)
        self.assertEqual(snapshot.state, SessionState.IDLE)

    def test_completion_does_not_auto_stop(self):
        session = SessionController()
        session.start(2)
        for _ in range(10):
            snapshot = session.tick(0.5)
        self.assertEqual(snapshot.state, SessionState.ACTIVE)
        self.assertEqual(snapshot.progress, 1.0)
        self.assertTrue(snapshot.is_complete)
        self.assertEqual(snapshot.remaining_seconds, 0.0)

    def test_progress_is_monotonic_and_bounded(self):
        rng = np.random.default_rng(0)
        session = SessionController()
        session.start(7.5)
        previous = 0.0
        for dt in rng.uniform(0.0, 0.4, size=200):
            progress = session.tick(float(dt)).progress
            self.assertGreaterEqual(progress, previous)
            self.assertLessEqual(progress, 1.0)
            previous = progress
        self.assertEqual(previous, 1.0)

    def test_idle_tick_has_no_effect(self):
        session = SessionController()
        snapshot = session.tick(5)
        self.assertEqual(snapshot.progress, 0.0)
        self.assertEqual(snapshot.elapsed_seconds, 0.0)

    def test_negative_and_non_finite_dt_count_as_zero(self):
        session = SessionController()
        session.start(10)
        session.tick(2)
        for dt in (-3.0, 0.0, float("nan"), float("inf"), float("-inf")):
            snapshot = session.tick(dt)
            self.assertEqual(snapshot.elapsed_seconds, 2.0)
            self.assertAlmostEqual(snapshot.progress, 0.2)

    def test_remaining_seconds(self):
        session = SessionController()
        session.start(10)
        self.assertEqual(session.tick(4).remaining_seconds, 6.0)
        self.assertEqual(session.stop().remaining_seconds, 0.0)


class TestSessionSnapshot(unittest.TestCase):
    """Tests for the snapshot value object."""

    def test_to_dict(self):
        snapshot = SessionSnapshot(
            state=SessionState.ACTIVE, progress=0.25, elapsed_seconds=2.5, duration_seconds=10.0
        )
        self.assertEqual(snapshot.to_dict(), {
            "state": "active",
            "progress": 0.25,
            "elapsed_seconds": 2.5,
            "duration_seconds": 10.0,
        })

    def test_idle_snapshot_is_not_complete(self):
        self.assertFalse(SessionController().snapshot().is_complete)


if __name__ == "__main__":
    unittest.main(verbosity=2)
