"""Shared helpers: random numbers, small value types and window settings."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import IntEnum

WINDOW_WIDTH = 1920
WINDOW_HEIGHT = 1080
ASPECT_RATIO = WINDOW_WIDTH / WINDOW_HEIGHT

NEAR_PLANE = 0.0
FAR_PLANE = 1e6


class Direction(IntEnum):
    """Movement directions."""

    FRONT = 0
    BACK = 1
    LEFT = 2
    RIGHT = 3
    UP = 4
    DOWN = 5


@dataclass(frozen=True)
class RGB:
    """An 8-bit-per-channel colour."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"channel {name}={value} is outside 0..255")


def make_rng(seed: int | None = None) -> random.Random:
    """Return a random generator; without a seed it draws from system entropy."""
    return random.Random(seed)


def random_float(rng: random.Random) -> float:
    """Return a uniform float in [0, 1) built from 32 random bits."""
    return math.ldexp(rng.getrandbits(32), -32)