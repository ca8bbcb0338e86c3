"""Command-line interface.

Runs one breathing session together with the particle field and the breathing
pulse, either as a fixed-step headless simulation or in real time on the Qt
frame driver, and logs what a renderer would receive.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from breathease.config import DEFAULT_FPS, DEFAULT_SESSION_SECONDS
from breathease.logging_config import setup_logging
from breathease.model.breathing import BreathingPulse
from breathease.model.errors import InvalidArgument
from breathease.model.exercises import EXERCISES, get_exercise
from breathease.model.particles import ParticleField, ParticleSnapshot
from breathease.model.session import SessionController, SessionSnapshot

logger = logging.getLogger("breathease.cli")


def _log_frame(session: SessionSnapshot, particles: ParticleSnapshot, scale: float) -> None:
    mean_opacity = sum(p.opacity for p in particles) / max(particles.count, 1)
    logger.info(
        f"t={session.elapsed_seconds:6.2f} s  progress={session.progress:6.1%}  "
        f"particles={particles.count:3d}  mean opacity={mean_opacity:.3f}  pulse={scale:.3f}"
    )


def run_headless(duration: float, fps: int = DEFAULT_FPS, seed: Optional[int] = None) -> SessionSnapshot:
    """
    Step the components with a fixed ``dt = 1 / fps`` until the session completes.

    Returns:
        The session snapshot of the frame on which progress reached 1.0.
    """
    session = SessionController(duration)
    particles = ParticleField(seed=seed)
    pulse = BreathingPulse()

    dt = 1.0 / fps
    snapshot = session.start()
    particles.start()
    pulse.start()

    frame = 0
    while not snapshot.is_complete:
        snapshot = session.tick(dt)
        field_snapshot = particles.tick(dt)
        scale = pulse.tick(dt)
        frame += 1
        if frame % fps == 0 or snapshot.is_complete:
            _log_frame(snapshot, field_snapshot, scale)

    # Completion never stops the session on its own
    logger.info(f"Session complete after {frame} frames; stopping.")
    session.stop()
    particles.stop()
    pulse.stop()
    return snapshot


def run_realtime(duration: float, fps: int = DEFAULT_FPS, seed: Optional[int] = None) -> SessionSnapshot:
    """
    Drive the components from a wall-clock QTimer until the session completes.
    """
    from PySide6.QtCore import QCoreApplication

    from breathease.controller.driver import FrameDriver

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])

    session = SessionController(duration)
    particles = ParticleField(seed=seed)
    pulse = BreathingPulse()

    driver = FrameDriver(fps=fps)
    driver.add("session", session)
    driver.add("particles", particles)
    driver.add("pulse", pulse)

    result = {"session": session.snapshot(), "frames": 0}

    def on_snapshots(snapshots: dict) -> None:
        result["session"] = snapshots["session"]
        result["frames"] += 1
        if result["frames"] % fps == 0:
            _log_frame(snapshots["session"], snapshots["particles"], snapshots["pulse"])
        if snapshots["session"].is_complete:
            _log_frame(snapshots["session"], snapshots["particles"], snapshots["pulse"])
            driver.stop()
            app.quit()

    driver.snapshots_published.connect(on_snapshots)

    session.start()
    particles.start()
    pulse.start()
    driver.start()
    app.exec()

    logger.info(f"Session complete after {result['frames']} frames; stopping.")
    session.stop()
    particles.stop()
    pulse.stop()
    return result["session"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="breathease",
        description="Run a breathing session with its particle field and log the frames.",
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--duration", type=float, default=None,
                        help=f"Session length in seconds (default {DEFAULT_SESSION_SECONDS:g}).")
    target.add_argument("--exercise", default=None,
                        help="Take the duration from an exercise: "
                             + ", ".join(f"'{e.name}'" for e in EXERCISES) + ".")
    parser.add_argument("--fps", type=int, default=DEFAULT_FPS, help="Frames per second.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the particle generator.")
    parser.add_argument("--realtime", action="store_true",
                        help="Run on the Qt frame driver in wall-clock time.")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None, help="Also write the log to this file.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.fps <= 0:
        parser.error(f"--fps must be positive, got {args.fps}")

    if args.exercise is not None:
        try:
            exercise = get_exercise(args.exercise)
        except KeyError as e:
            parser.error(str(e.args[0]))
        duration = exercise.duration_seconds
        logger.info(f"Exercise '{exercise.name}': {exercise.description}.")
    elif args.duration is not None:
        duration = args.duration
    else:
        duration = DEFAULT_SESSION_SECONDS

    runner = run_realtime if args.realtime else run_headless
    try:
        runner(duration, fps=args.fps, seed=args.seed)
    except InvalidArgument as e:
        parser.error(str(e))
    return 0


if __name__ == "__main__":
    sys.exit(main())
