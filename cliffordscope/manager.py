"""Coordinates the main attractor, its worker threads and the texture it renders into."""

from __future__ import annotations

import math
import random
import time
from enum import IntEnum

import numpy as np

from .attractor import Attractor, AttractorType
from .compute import Compute
from .utils import WINDOW_HEIGHT, WINDOW_WIDTH, make_rng

DEFAULT_COMPUTE_COUNT = 8
DEFAULT_BORDER_SIZE_PERCENT = 0.05
_SLEEP_STEP = 0.001


class ScalingMethod(IntEnum):
    """How raw visit counts are mapped onto [0, 1]."""

    LINEAR = 0
    LOG = 1
    POWER = 2
    SIGMOID = 3
    SQRT = 4


class ToneMappingMode(IntEnum):
    """Tone-mapping operators offered for post-processing."""

    NONE = 0
    ACES = 1
    FILMIC = 2
    LOTTES = 3
    REINHARD = 4
    REINHARD2 = 5
    UCHIMURA = 6
    UNCHARTED2 = 7
    UNREAL = 8


def sigmoid_normalize(x, midpoint: float, steepness: float):
    """Logistic curve centred on ``midpoint``; works on scalars and arrays."""
    result = 1.0 / (1.0 + np.exp(-(np.asarray(x, dtype=np.float64) - midpoint) * steepness))
    return float(result) if np.ndim(result) == 0 else result


class Manager:
    """Owns the displayed attractor, the worker pool and the texture buffers.

    ``texture_data`` holds raw counts as RGBA rows of shape (height, width, 4);
    ``texture_data_gl`` holds the normalized float image of the same shape.
    """

    def __init__(
        self,
        width: int = WINDOW_WIDTH,
        height: int = WINDOW_HEIGHT,
        compute_count: int = DEFAULT_COMPUTE_COUNT,
        rng: random.Random | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be positive")
        if compute_count < 0:
            raise ValueError("compute_count must not be negative")
        self.width = int(width)
        self.height = int(height)
        self.rng = rng if rng is not None else make_rng()

        self.delta_time = 0.0
        self.current_time = 0.0
        self.current_frame_time = 0.0
        self.last_frame_time = 0.0
        self.frame_count = 0

        self.incremental_rendering = True
        self.tone_mapping_mode = ToneMappingMode.ACES
        self.exposure = 0.75
        self.gamma = 2.2
        self.brightness = 0.0
        self.contrast = 1.0
        self.scaling_method = ScalingMethod.POWER
        self.freeze_movement = False

        self.power_exponent = 0.5
        self.sigmoid_midpoint = 0.5
        self.sigmoid_steepness = 3.0

        self.border_size_percent = DEFAULT_BORDER_SIZE_PERCENT
        self.hide_ui = False

        self.compute_count = int(compute_count)
        self.computes: list[Compute] = []

        self.texture_data = np.zeros((self.height, self.width, 4), dtype=np.uint32)
        self.texture_data_gl = np.zeros((self.height, self.width, 4), dtype=np.float32)
        self.clean_texture()

        self.attractor = self._make_attractor(self.rng)

    def _make_attractor(self, rng: random.Random) -> Attractor:
        scale = 1.0 - self.border_size_percent
        return Attractor(
            int(scale * self.width), int(scale * self.height), AttractorType.CLIFFORD, rng=rng
        )

    def tick_timer(self, now: float | None = None) -> None:
        """Advance the frame clock to ``now`` (seconds) and count the frame."""
        if now is None:
            now = time.monotonic()
        self.current_time = now
        self.last_frame_time = self.current_frame_time
        self.current_frame_time = now
        self.delta_time = self.current_frame_time - self.last_frame_time
        self.frame_count += 1

    def clean_texture(self) -> None:
        """Set both textures to opaque black."""
        self.texture_data.fill(0)
        self.texture_data[..., 3] = 255
        self.texture_data_gl.fill(0.0)
        self.texture_data_gl[..., 3] = 1.0

    def copy_attractor_to_texture(self) -> None:
        """Place the attractor's density map in the raw texture, inset by the border."""
        border_x = int(self.width * self.border_size_percent)
        border_y = int(self.height * self.border_size_percent)
        density = self.attractor.density_map
        region = self.texture_data[
            border_y : border_y + self.attractor.height, border_x : border_x + self.attractor.width
        ]
        rows, cols = region.shape[:2]
        region[..., :3] = density[:rows, :cols, None]
        region[..., 3] = 255

    def normalize_texture(self) -> None:
        """Scale raw counts to [0, 1] with the selected method into the float texture."""
        values = self.texture_data[..., 0].astype(np.float64)
        max_value = values.max() if values.size else 0.0
        if max_value == 0:
            max_value = 1.0
        normalized = values / max_value

        method = self.scaling_method
        if method == ScalingMethod.LOG:
            normalized = np.log(1.0 + normalized * 9.0) / math.log(10.0)
        elif method == ScalingMethod.POWER:
            normalized = np.power(normalized, self.power_exponent)
        elif method == ScalingMethod.SIGMOID:
            normalized = sigmoid_normalize(normalized, self.sigmoid_midpoint, self.sigmoid_steepness)
        elif method == ScalingMethod.SQRT:
            normalized = np.sqrt(normalized)

        self.texture_data_gl[..., :3] = normalized[..., None]
        self.texture_data_gl[..., 3] = 1.0

    def merge_attractors_data(self) -> None:
        """Add every worker's density map into the main attractor's map."""
        for compute in self.computes:
            with compute.lock:
                self.attractor.density_map += compute.attractor.density_map

    def blit_attractor_to_texture(self) -> np.ndarray:
        """Rebuild the float texture from the current attractor data and return it."""
        self.clean_texture()
        self.merge_attractors_data()
        self.copy_attractor_to_texture()
        self.normalize_texture()
        return self.texture_data_gl

    def init_compute(self) -> None:
        """Start ``compute_count`` paused workers, each with its own attractor."""
        for _ in range(self.compute_count):
            worker_rng = make_rng(self.rng.getrandbits(64))
            self.computes.append(Compute(self._make_attractor(worker_rng)))

    def destroy_compute(self) -> None:
        """Stop all workers and forget them."""
        for compute in self.computes:
            compute.destroy()
        self.computes.clear()

    def pause_compute(self) -> None:
        for compute in self.computes:
            compute.pause()

    def resume_compute(self) -> None:
        for compute in self.computes:
            compute.resume()

    def compute_iterate_until_timeout(self, timeout: float) -> None:
        """Let the workers run for ``timeout`` seconds, then pause them."""
        start = time.monotonic()
        self.resume_compute()
        try:
            while time.monotonic() - start < timeout:
                time.sleep(_SLEEP_STEP)
        finally:
            self.pause_compute()

    def clean_attractor(self) -> None:
        """Zero the density maps of the main attractor and every worker."""
        self.attractor.clean()
        for compute in self.computes:
            compute.clean_attractor()

    def reset_attractor(self) -> None:
        """Restore default parameters and empty maps everywhere."""
        self.attractor.reset()
        for compute in self.computes:
            compute.reset_attractor()

    def propagate_attractor(self) -> None:
        """Copy the main attractor's parameters to every worker."""
        for compute in self.computes:
            with compute.lock:
                compute.attractor.parameters = list(self.attractor.parameters)

    def __enter__(self) -> "Manager":
        return self

    def __exit__(self, *exc_info) -> None:
        self.destroy_compute()