"""
Particle Palette
================
Fixed colour palette for particles, taken from the app's brand gradient,
plus the hex parsing used to hand renderers plain RGB(A) tuples.
"""
from __future__ import annotations

from enum import StrEnum
from typing import Tuple

RGB = Tuple[int, int, int]
RGBA = Tuple[int, int, int, int]


def hex_to_rgba(value: str) -> RGBA:
    """
    Parse a hex colour string into an (r, g, b, a) tuple of 0-255 ints.

    Accepts 3 (RGB, 4-bit), 6 (RRGGBB) and 8 (AARRGGBB) digit forms, with or
    without a leading '#'. Anything else resolves to opaque black.
    """
    digits = "".join(ch for ch in value if ch.isalnum())
    try:
        n = int(digits, 16) if digits else 0
    except ValueError:
        return 0, 0, 0, 255

    if len(digits) == 3:
        return (n >> 8) * 17, (n >> 4 & 0xF) * 17, (n & 0xF) * 17, 255
    if len(digits) == 6:
        return n >> 16, n >> 8 & 0xFF, n & 0xFF, 255
    if len(digits) == 8:
        return n >> 16 & 0xFF, n >> 8 & 0xFF, n & 0xFF, n >> 24
    return 0, 0, 0, 255


def hex_to_rgb(value: str) -> RGB:
    r, g, b, _a = hex_to_rgba(value)
    return r, g, b


class ParticleColor(StrEnum):
    INDIGO = "#4158D0"
    ORCHID = "#C850C0"
    APRICOT = "#FFCC70"

    @property
    def rgb(self) -> RGB:
        return hex_to_rgb(self.value)


DEFAULT_PALETTE: Tuple[ParticleColor, ...] = tuple(ParticleColor)
