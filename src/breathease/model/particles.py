"""
Particle Field (Data Model + Kinetics)
======================================
A bounded pool of decaying particles that shimmer while the field is active.

Why is this file needed?
------------------------
1. Kinetics: Each tick moves every particle along its heading and fades it by
   ``decay_rate * dt``, so the animation runs at the same visual speed under
   any frame rate.
2. Lifecycle: Particles whose opacity reaches zero are dropped in the same
   tick. An active field that ends a tick empty is refilled with a fresh pool
   before the tick returns, so no empty frame is ever published while active.
3. Determinism: All randomness comes from an injectable
   ``numpy.random.Generator``; the same seed and the same ``dt`` sequence
   always produce the same snapshots.

The pool is stored as NumPy structure-of-arrays. Boolean-mask filtering keeps
the spawn order, so iteration order is stable within and across ticks.

Classes:
    Particle: Immutable view of one particle, handed to renderers.
    ParticleFieldConfig: Bounds, pool size, spawn ranges and decay rate.
    ParticleSnapshot: Immutable state of the field after a tick.
    ParticleField: The simulation itself.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple, TYPE_CHECKING

import numpy as np

from breathease.config import (
    DECAY_RATE,
    FIELD_HEIGHT,
    FIELD_WIDTH,
    OPACITY_RANGE,
    POOL_SIZE,
    SIZE_RANGE,
    SPEED_RANGE,
)
from breathease.model.errors import InvalidArgument
from breathease.model.palette import DEFAULT_PALETTE, ParticleColor

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

TAU = 2.0 * math.pi


@dataclass(frozen=True)
class Particle:
    position: Tuple[float, float]
    size: float
    color: ParticleColor
    opacity: float
    speed: float
    angle: float
    # Spawn counter, unique within one field
    serial: int = 0

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": list(self.position),
            "size": self.size,
            "color": self.color.value,
            "opacity": self.opacity,
            "speed": self.speed,
            "angle": self.angle,
            "serial": self.serial,
        }


@dataclass(frozen=True)
class ParticleFieldConfig:
    """
    Tunables of a particle field.

    All ranges are sampled uniformly at spawn time. ``decay_rate`` is the
    opacity lost per second of simulated time.
    """
    width: float = FIELD_WIDTH
    height: float = FIELD_HEIGHT
    pool_size: int = POOL_SIZE
    size_range: Tuple[float, float] = SIZE_RANGE
    opacity_range: Tuple[float, float] = OPACITY_RANGE
    speed_range: Tuple[float, float] = SPEED_RANGE
    decay_rate: float = DECAY_RATE
    palette: Tuple[ParticleColor, ...] = DEFAULT_PALETTE

    def __post_init__(self) -> None:
        if not (self.width > 0 and self.height > 0):
            raise InvalidArgument(f"Field bounds must be positive, got {self.width} x {self.height}.")
        if not isinstance(self.pool_size, int) or self.pool_size < 1:
            raise InvalidArgument(f"Pool size must be a positive integer, got {self.pool_size}.")
        _check_range("size_range", self.size_range, minimum=0.0)
        _check_range("speed_range", self.speed_range, minimum=0.0)
        _check_range("opacity_range", self.opacity_range, minimum=0.0, maximum=1.0)
        if self.opacity_range[0] <= 0.0:
            raise InvalidArgument(f"Spawn opacity must be above zero, got {self.opacity_range}.")
        if not (math.isfinite(self.decay_rate) and self.decay_rate > 0):
            raise InvalidArgument(f"Decay rate must be positive, got {self.decay_rate}.")
        if not self.palette:
            raise InvalidArgument("Palette must contain at least one colour.")


def _check_range(
    name: str,
    value: Tuple[float, float],
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
) -> None:
    if len(value) != 2:
        raise InvalidArgument(f"{name} must be a (low, high) pair, got {value!r}.")
    low, high = value
    if not (math.isfinite(low) and math.isfinite(high)) or low > high:
        raise InvalidArgument(f"{name} must satisfy low <= high, got {value!r}.")
    if minimum is not None and low < minimum:
        raise InvalidArgument(f"{name} must not go below {minimum}, got {value!r}.")
    if maximum is not None and high > maximum:
        raise InvalidArgument(f"{name} must not exceed {maximum}, got {value!r}.")


@dataclass(frozen=True)
class ParticleSnapshot:
    """State of a field as published after a tick."""
    particles: Tuple[Particle, ...] = ()
    active: bool = False

    @property
    def count(self) -> int:
        return len(self.particles)

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self.particles)

    def positions(self) -> npt.NDArray[np.float64]:
        """Particle centres as an (n, 2) array."""
        return np.array([p.position for p in self.particles], dtype=np.float64).reshape(-1, 2)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "active": self.active,
            "particles": [p.to_dict() for p in self.particles],
        }


def _palette_color(value: Any) -> ParticleColor:
    try:
        return ParticleColor(value)
    except ValueError as e:
        raise InvalidArgument(f"Particle colour {value!r} is not in the palette.") from e


class ParticleField:
    """
    Frame-driven particle pool.

    Created empty and inactive. ``start()`` fills the pool (if empty) and
    enables auto-respawn; ``stop()`` disables auto-respawn and lets the
    remaining particles fade out on their own.
    """

    def __init__(
        self,
        config: Optional[ParticleFieldConfig] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        particles: Iterable[Particle] = (),
    ) -> None:
        """
        Args:
            config: Field tunables. Defaults to ``ParticleFieldConfig()``.
            rng: Random generator used for every spawn.
            seed: Seed for a new generator when ``rng`` is not given.
            particles: Optional initial pool. The field still starts inactive.
        """
        self.config = config if config is not None else ParticleFieldConfig()
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self._active = False
        self._next_serial = 0
        self._reset_arrays()
        self._load(particles)

    # ---- state access
    @property
    def active(self) -> bool:
        return self._active

    @property
    def particles(self) -> Tuple[Particle, ...]:
        return self.snapshot().particles

    def __len__(self) -> int:
        return int(self._opacity.size)

    def snapshot(self) -> ParticleSnapshot:
        particles = tuple(
            Particle(
                position=(x, y),
                size=size,
                color=color,
                opacity=opacity,
                speed=speed,
                angle=angle,
                serial=serial,
            )
            for x, y, size, color, opacity, speed, angle, serial in zip(
                self._x.tolist(),
                self._y.tolist(),
                self._size.tolist(),
                self._color.tolist(),
                self._opacity.tolist(),
                self._speed.tolist(),
                self._angle.tolist(),
                self._serial.tolist(),
            )
        )
        return ParticleSnapshot(particles=particles, active=self._active)

    # ---- control
    def start(self) -> ParticleSnapshot:
        """Enable auto-respawn. Spawns a full pool only if the pool is empty."""
        if len(self) == 0:
            self._spawn_pool()
        if not self._active:
            logger.debug(f"Particle field started with {len(self)} particles.")
        self._active = True
        return self.snapshot()

    def stop(self) -> ParticleSnapshot:
        """Disable auto-respawn. Existing particles keep fading."""
        if self._active:
            logger.debug(f"Particle field stopped, {len(self)} particles left to fade.")
        self._active = False
        return self.snapshot()

    def clear(self) -> None:
        """Return to the initial state: empty and inactive."""
        self._active = False
        self._reset_arrays()

    # ---- simulation
    def tick(self, dt: float) -> ParticleSnapshot:
        """
        Advance the field by ``dt`` seconds.

        Non-positive or non-finite ``dt`` leaves the field untouched. Opacity
        strictly decreases on every tick whose ``decay_rate * dt`` is above the
        float resolution of the opacities; a smaller step can round to no change.

        Returns:
            The snapshot after the update.
        """
        dt = float(dt)
        if not math.isfinite(dt) or dt <= 0.0:
            return self.snapshot()

        if len(self):
            step = self._speed * dt
            self._x = self._x + np.cos(self._angle) * step
            self._y = self._y + np.sin(self._angle) * step
            self._opacity = self._opacity - self.config.decay_rate * dt

            alive = self._opacity > 0.0
            if not alive.all():
                self._apply_mask(alive)

        if self._active and len(self) == 0:
            self._spawn_pool()
            logger.debug(f"Particle pool exhausted, respawned {len(self)} particles.")

        return self.snapshot()

    # ---- internals
    def _reset_arrays(self) -> None:
        self._x: npt.NDArray[np.float64] = np.empty(0, dtype=np.float64)
        self._y: npt.NDArray[np.float64] = np.empty(0, dtype=np.float64)
        self._size: npt.NDArray[np.float64] = np.empty(0, dtype=np.float64)
        self._color: npt.NDArray[np.object_] = np.empty(0, dtype=object)
        self._opacity: npt.NDArray[np.float64] = np.empty(0, dtype=np.float64)
        self._speed: npt.NDArray[np.float64] = np.empty(0, dtype=np.float64)
        self._angle: npt.NDArray[np.float64] = np.empty(0, dtype=np.float64)
        self._serial: npt.NDArray[np.int64] = np.empty(0, dtype=np.int64)

    def _apply_mask(self, mask: npt.NDArray[np.bool_]) -> None:
        self._x = self._x[mask]
        self._y = self._y[mask]
        self._size = self._size[mask]
        self._color = self._color[mask]
        self._opacity = self._opacity[mask]
        self._speed = self._speed[mask]
        self._angle = self._angle[mask]
        self._serial = self._serial[mask]

    def _spawn_pool(self) -> None:
        cfg = self.config
        n = cfg.pool_size
        rng = self.rng

        self._x = rng.uniform(0.0, cfg.width, n)
        self._y = rng.uniform(0.0, cfg.height, n)
        self._size = rng.uniform(cfg.size_range[0], cfg.size_range[1], n)
        color_idx = rng.integers(0, len(cfg.palette), n)
        self._color = np.array([cfg.palette[i] for i in color_idx], dtype=object)
        self._opacity = rng.uniform(cfg.opacity_range[0], cfg.opacity_range[1], n)
        self._speed = rng.uniform(cfg.speed_range[0], cfg.speed_range[1], n)
        self._angle = rng.random(n) * TAU
        self._serial = np.arange(self._next_serial, self._next_serial + n, dtype=np.int64)
        self._next_serial += n

    def _load(self, particles: Iterable[Particle]) -> None:
        # Already-extinct particles are never retained
        pool = [p for p in particles if p.opacity > 0.0]
        if not pool:
            return

        self._x = np.array([p.position[0] for p in pool], dtype=np.float64)
        self._y = np.array([p.position[1] for p in pool], dtype=np.float64)
        self._size = np.array([p.size for p in pool], dtype=np.float64)
        self._color = np.array([_palette_color(p.color) for p in pool], dtype=object)
        self._opacity = np.clip(np.array([p.opacity for p in pool], dtype=np.float64), 0.0, 1.0)
        self._speed = np.array([p.speed for p in pool], dtype=np.float64)
        self._angle = np.array([p.angle for p in pool], dtype=np.float64)
        self._serial = np.array([p.serial for p in pool], dtype=np.int64)
        self._next_serial = int(self._serial.max()) + 1
