"""Strange attractors that accumulate visits into a density map."""

from __future__ import annotations

import math
import random
import time
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable

import numpy as np

from .utils import make_rng, random_float

ITERATIONS_PER_BATCH = 10000
CHAOS_WARMUP_ITERATIONS = 25000
CHAOS_OCCUPANCY_THRESHOLD = 0.01
RENDER_MARGIN = 0.05


class AttractorType(IntEnum):
    """Kinds of attractor the engine knows."""

    CLIFFORD = 0


@dataclass(frozen=True)
class AttractorSettings:
    """Static description of an attractor kind."""

    type: AttractorType
    name: str
    description: str
    default_parameters: tuple[float, ...]
    iterate: Callable[["Attractor", int], None]
    randomize: Callable[["Attractor"], None]

    @property
    def num_parameters(self) -> int:
        return len(self.default_parameters)


def iterate_clifford(
    attractor: "Attractor", num_iterations: int, x: float, y: float
) -> tuple[float, float]:
    """Run the Clifford map from (x, y), counting each visited cell.

    x' = sin(a y) + c cos(a x), y' = sin(b x) + d cos(b y).
    Returns the last point reached.
    """
    if num_iterations < 0:
        raise ValueError("num_iterations must not be negative")

    a, b, c, d = attractor.parameters[:4]
    width, height = attractor.width, attractor.height

    min_x = (-1 - abs(c)) * (1 + RENDER_MARGIN)
    max_x = (1 + abs(c)) * (1 + RENDER_MARGIN)
    min_y = (-1 - abs(d)) * (1 + RENDER_MARGIN)
    max_y = (1 + abs(d)) * (1 + RENDER_MARGIN)
    scale_x = width / (max_x - min_x)
    scale_y = height / (max_y - min_y)

    sin, cos = math.sin, math.cos
    cells: list[int] = []
    append = cells.append
    for _ in range(num_iterations):
        x, y = sin(a * y) + c * cos(a * x), sin(b * x) + d * cos(b * y)
        append(int((x + max_x) * scale_x) + int((y + max_y) * scale_y) * width)

    if cells:
        counts = np.bincount(np.asarray(cells, dtype=np.intp), minlength=width * height)
        flat = attractor.density_map.reshape(-1)
        flat += counts.astype(np.uint32)
    return x, y


def _iterate_clifford_from_random_point(attractor: "Attractor", num_iterations: int) -> None:
    rng = attractor.rng
    iterate_clifford(attractor, num_iterations, random_float(rng) * 2 - 1, random_float(rng) * 2 - 1)


def randomize_clifford(attractor: "Attractor") -> None:
    """Draw each of the four parameters uniformly from [-2, 2)."""
    attractor.parameters = [random_float(attractor.rng) * 4 - 2 for _ in range(4)]


ATTRACTORS: dict[AttractorType, AttractorSettings] = {
    AttractorType.CLIFFORD: AttractorSettings(
        type=AttractorType.CLIFFORD,
        name="Clifford",
        description=(
            "A chaotic attractor defined by the equations x(n+1) = sin(a y(n)) + c cos(a x(n)), "
            "y(n+1) = sin(b x(n)) + d cos(b y(n))"
        ),
        default_parameters=(-1.4, 1.6, 1.0, 0.7),
        iterate=_iterate_clifford_from_random_point,
        randomize=randomize_clifford,
    ),
}


class Attractor:
    """An attractor with its parameters and a width x height visit-count map."""

    def __init__(
        self,
        width: int,
        height: int,
        type: AttractorType = AttractorType.CLIFFORD,
        rng: random.Random | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be positive")
        self.type = AttractorType(type)
        self.width = int(width)
        self.height = int(height)
        self.rng = rng if rng is not None else make_rng()
        self.density_map = np.zeros((self.height, self.width), dtype=np.uint32)
        self.parameters: list[float] = []
        self.reset()

    @property
    def settings(self) -> AttractorSettings:
        return ATTRACTORS[self.type]

    @property
    def num_parameters(self) -> int:
        return self.settings.num_parameters

    def iterate(self, num_iterations: int) -> None:
        """Run the map from a random starting point."""
        self.settings.iterate(self, num_iterations)

    def iterate_until_timeout(self, timeout: float) -> None:
        """Iterate in batches until ``timeout`` seconds have passed."""
        start = time.monotonic()
        while time.monotonic() - start < timeout:
            self.iterate(ITERATIONS_PER_BATCH)

    def reset(self) -> None:
        """Clear the map and restore the default parameters."""
        self.clean()
        self.parameters = list(self.settings.default_parameters)

    def clean(self) -> None:
        """Zero the density map, keeping the parameters."""
        self.density_map.fill(0)

    def occupancy(self) -> float:
        """Fraction of cells visited at least once."""
        return float(np.count_nonzero(self.density_map)) / self.density_map.size

    def randomize(self) -> None:
        """Reset, then draw new random parameters."""
        self.reset()
        self.settings.randomize(self)

    def randomize_until_chaotic(self) -> None:
        """Randomize until a warm-up run covers enough of the map."""
        while True:
            self.randomize()
            self.iterate(CHAOS_WARMUP_ITERATIONS)
            if self.occupancy() >= CHAOS_OCCUPANCY_THRESHOLD:
                return