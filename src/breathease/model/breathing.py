from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt

from breathease.model.errors import InvalidArgument

if TYPE_CHECKING:
    import numpy.typing as npt

TAU = 2.0 * math.pi


def _valid_dt(dt: float) -> bool:
    return math.isfinite(dt) and dt > 0.0


def ease_in_out(u: float) -> float:
    """Smoothstep easing on [0, 1]."""
    u = min(max(u, 0.0), 1.0)
    return u * u * (3.0 - 2.0 * u)


class BreathingPulse:
    """
    Scale of the breathing button.

    While active the scale eases from ``min_scale`` up to ``max_scale`` over
    ``half_period`` seconds (inhale) and back down again (exhale), forever.
    While inactive it rests at ``min_scale``.
    """

    def __init__(self, min_scale: float = 1.0, max_scale: float = 1.1, half_period: float = 4.0) -> None:
        if not (math.isfinite(half_period) and half_period > 0.0):
            raise InvalidArgument(f"Half period must be positive, got {half_period}.")
        if min_scale > max_scale:
            raise InvalidArgument(f"min_scale ({min_scale}) must not exceed max_scale ({max_scale}).")
        self.min_scale = float(min_scale)
        self.max_scale = float(max_scale)
        self.half_period = float(half_period)
        self.active = False
        self._time = 0.0

    def scale_at(self, t: float) -> float:
        """Scale reached ``t`` seconds into an active pulse."""
        u = (t % (2.0 * self.half_period)) / self.half_period
        if u > 1.0:
            u = 2.0 - u
        return self.min_scale + (self.max_scale - self.min_scale) * ease_in_out(u)

    @property
    def scale(self) -> float:
        if not self.active:
            return self.min_scale
        return self.scale_at(self._time)

    @property
    def inhaling(self) -> bool:
        """True during the rising half of the cycle."""
        return self.active and (self._time % (2.0 * self.half_period)) < self.half_period

    def start(self) -> None:
        self.active = True

    def stop(self) -> None:
        self.active = False
        self._time = 0.0

    def tick(self, dt: float) -> float:
        dt = float(dt)
        if self.active and _valid_dt(dt):
            self._time = (self._time + dt) % (2.0 * self.half_period)
        return self.scale

    def plot(self, cycles: int = 2) -> None:
        """
        Plot the scale curve over a few breathing cycles.
        """
        times = np.linspace(0.0, cycles * 2.0 * self.half_period, 500)
        scales = [self.scale_at(t) for t in times]

        plt.rcParams["figure.constrained_layout.use"] = True
        plt.figure(figsize=(7, 4))
        plt.plot(times, scales, 'b', lw=2)
        plt.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
        plt.title("Breathing pulse")
        plt.xlabel("Time (s)")
        plt.ylabel("Scale")
        plt.show()


class Waveform:
    """
    Scrolling sine wave shown while a breathing analysis is running.

    The phase advances by a full turn every ``period`` seconds.
    """

    def __init__(self, period: float = 2.0, wavelength: float = 50.0, amplitude: float = 30.0) -> None:
        if not (math.isfinite(period) and period > 0.0):
            raise InvalidArgument(f"Period must be positive, got {period}.")
        if not (math.isfinite(wavelength) and wavelength > 0.0):
            raise InvalidArgument(f"Wavelength must be positive, got {wavelength}.")
        self.period = float(period)
        self.wavelength = float(wavelength)
        self.amplitude = float(amplitude)
        self.phase = 0.0

    def reset(self) -> None:
        self.phase = 0.0

    def tick(self, dt: float) -> float:
        dt = float(dt)
        if _valid_dt(dt):
            self.phase = (self.phase + TAU * dt / self.period) % TAU
        return self.phase

    def samples(self, width: float, height: float) -> npt.NDArray[np.float64]:
        """
        Polyline of the wave for a canvas of the given size.

        Returns:
            (n, 2) array of (x, y) points, one per integer x in [0, width].
        """
        xs = np.arange(0, max(int(width), -1) + 1, dtype=np.float64)
        ys = height / 2.0 + np.sin(xs / self.wavelength + self.phase) * self.amplitude
        return np.column_stack((xs, ys))

    def plot(self, width: float = 300.0, height: float = 180.0) -> None:
        """
        Plot the current frame of the wave.
        """
        points = self.samples(width, height)

        plt.rcParams["figure.constrained_layout.use"] = True
        plt.figure(figsize=(7, 4))
        plt.plot(points[:, 0], points[:, 1], 'b', lw=3)
        plt.gca().invert_yaxis()
        plt.title(f"Waveform (phase {self.phase:.2f} rad)")
        plt.show()
