"""
Breathing Session (State Machine)
=================================
Tracks one breathing session: whether it is running, how long it has run and
how far it is through its target duration.

Why is this file needed?
------------------------
1. Timing: It accumulates frame ``dt`` into elapsed seconds and derives the
   progress fraction shown by the progress ring.
2. Guards: It validates the target duration before touching any state, so a
   rejected ``start`` leaves the controller exactly as it was.

States: IDLE (initial) and ACTIVE. ``start`` moves to ACTIVE, ``stop`` back to
IDLE. There is no pause: stopping discards the session.

Note: Reaching the full duration does NOT stop the session. Progress is
clamped at 1.0 and the controller stays ACTIVE until ``stop()`` is called,
the same way the on-screen control has to be pressed again to finish.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
import logging
import math
from typing import Any, Dict, Optional, TYPE_CHECKING

from breathease.config import DEFAULT_SESSION_SECONDS
from breathease.model.errors import InvalidArgument

if TYPE_CHECKING:
    from breathease.model.exercises import Exercise

logger = logging.getLogger(__name__)


class SessionState(StrEnum):
    IDLE = "idle"
    ACTIVE = "active"


@dataclass(frozen=True)
class SessionSnapshot:
    state: SessionState
    progress: float
    elapsed_seconds: float
    duration_seconds: float

    @property
    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    @property
    def is_complete(self) -> bool:
        return self.is_active and self.progress >= 1.0

    @property
    def remaining_seconds(self) -> float:
        if not self.is_active:
            return 0.0
        return max(self.duration_seconds - self.elapsed_seconds, 0.0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "progress": self.progress,
            "elapsed_seconds": self.elapsed_seconds,
            "duration_seconds": self.duration_seconds,
        }


def _validate_duration(duration_seconds: float) -> float:
    try:
        value = float(duration_seconds)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"Session duration must be a number, got {duration_seconds!r}.") from e
    if not math.isfinite(value) or value <= 0.0:
        raise InvalidArgument(f"Session duration must be positive and finite, got {duration_seconds!r}.")
    return value


class SessionController:
    """
    Frame-driven breathing session.

    Owned by one screen and reused for every session started on it.
    """

    def __init__(self, duration_seconds: float = DEFAULT_SESSION_SECONDS) -> None:
        """
        Args:
            duration_seconds: Target length used when ``start`` is called
                without an explicit duration.
        """
        self.duration_seconds: float = _validate_duration(duration_seconds)
        self.state: SessionState = SessionState.IDLE
        self.elapsed_seconds: float = 0.0
        self.progress: float = 0.0

    @property
    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            state=self.state,
            progress=self.progress,
            elapsed_seconds=self.elapsed_seconds,
            duration_seconds=self.duration_seconds,
        )

    def start(self, duration_seconds: Optional[float] = None) -> SessionSnapshot:
        """
        Begin a new session, discarding any session in progress.

        Args:
            duration_seconds: Target length in seconds. Defaults to the
                configured duration.

        Raises:
            InvalidArgument: If the duration is not a positive finite number.
                The controller is left unchanged.
        """
        if duration_seconds is None:
            duration_seconds = self.duration_seconds
        try:
            duration = _validate_duration(duration_seconds)
        except InvalidArgument:
            logger.warning(f"Rejected session start with duration {duration_seconds!r}.")
            raise

        if self.is_active:
            logger.info("Session restarted while active; previous progress discarded.")

        self.duration_seconds = duration
        self.state = SessionState.ACTIVE
        self.elapsed_seconds = 0.0
        self.progress = 0.0
        logger.info(f"Session started ({duration:.1f} s).")
        return self.snapshot()

    def start_exercise(self, exercise: Exercise) -> SessionSnapshot:
        """Start a session lasting as long as the given exercise."""
        logger.info(f"Starting exercise '{exercise.name}'.")
        return self.start(exercise.duration_seconds)

    def stop(self) -> SessionSnapshot:
        """End the session. Stopping an idle controller does nothing."""
        if self.is_active:
            logger.info(f"Session stopped after {self.elapsed_seconds:.1f} s ({self.progress:.0%}).")
        self.state = SessionState.IDLE
        self.elapsed_seconds = 0.0
        self.progress = 0.0
        return self.snapshot()

    def toggle(self, duration_seconds: Optional[float] = None) -> SessionSnapshot:
        """Stop an active session, or start one when idle."""
        if self.is_active:
            return self.stop()
        return self.start(duration_seconds)

    def tick(self, dt: float) -> SessionSnapshot:
        """
        Advance the session clock by ``dt`` seconds.

        Has no effect while idle. Negative or non-finite ``dt`` counts as zero.
        """
        if not self.is_active:
            return self.snapshot()

        dt = float(dt)
        if not math.isfinite(dt):
            dt = 0.0
        self.elapsed_seconds += max(dt, 0.0)
        self.progress = min(self.elapsed_seconds / self.duration_seconds, 1.0)
        return self.snapshot()
