"""
Configuration & Default Constants
=================================
This module is the central registry for the tunable constants of the core.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (pool sizes, spawn ranges, decay
   rates) from being scattered across the simulation code.
2. Host overrides: Hosts build their own ``ParticleFieldConfig`` or pass a
   different session duration; these values are only the defaults.

Exports:
    FIELD_WIDTH, FIELD_HEIGHT (float): Logical extent of the particle field.
    POOL_SIZE (int): Number of particles spawned per pool.
    SIZE_RANGE, OPACITY_RANGE, SPEED_RANGE (tuple): Uniform spawn ranges.
    DECAY_RATE (float): Opacity lost per second.
    DEFAULT_SESSION_SECONDS (float): Session length used when none is given.
    DEFAULT_FPS (int): Frame rate of the demo runner and the Qt frame driver.
"""
from typing import Tuple

# Particle field
FIELD_WIDTH: float = 300.0
FIELD_HEIGHT: float = 200.0
POOL_SIZE: int = 20

SIZE_RANGE: Tuple[float, float] = (2.0, 6.0)
OPACITY_RANGE: Tuple[float, float] = (0.1, 0.5)
SPEED_RANGE: Tuple[float, float] = (20.0, 40.0)  # units/second

# The reference animation removed 0.01 opacity per frame at 60 fps
REFERENCE_FPS: int = 60
REFERENCE_DECAY_PER_FRAME: float = 0.01
DECAY_RATE: float = REFERENCE_DECAY_PER_FRAME * REFERENCE_FPS  # 0.6 / second

# Breathing session
DEFAULT_SESSION_SECONDS: float = 60.0

# Frame loop
DEFAULT_FPS: int = 60
