"""
Exercise Catalog
================
The guided breathing exercises offered by the app. Each one only contributes
a name, a description and a target duration to a ``SessionController``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class Exercise:
    name: str
    description: str
    duration_minutes: int
    icon: str
    color: str

    @property
    def duration_seconds(self) -> float:
        return float(self.duration_minutes * 60)


EXERCISES: Tuple[Exercise, ...] = (
    Exercise(
        name="Deep Breathing",
        description="Calm your mind and reduce stress",
        duration_minutes=5,
        icon="lungs.fill",
        color="blue",
    ),
    Exercise(
        name="Box Breathing",
        description="Navy SEAL breathing technique",
        duration_minutes=8,
        icon="square",
        color="purple",
    ),
    Exercise(
        name="4-7-8 Technique",
        description="Natural tranquilizer for the nervous system",
        duration_minutes=10,
        icon="clock.fill",
        color="green",
    ),
    Exercise(
        name="Alternate Nostril",
        description="Balance your energy",
        duration_minutes=7,
        icon="nose.fill",
        color="orange",
    ),
)

_BY_NAME: Dict[str, Exercise] = {e.name.casefold(): e for e in EXERCISES}


def get_exercise(name: str) -> Exercise:
    """Look up an exercise by name, ignoring case."""
    try:
        return _BY_NAME[name.strip().casefold()]
    except KeyError:
        raise KeyError(f"Unknown exercise '{name}'.") from None
