"""Rolling frame-rate statistics."""

from __future__ import annotations

from collections import deque
from itertools import islice

FPS_BUFFER_SIZE = 512


class FpsCounter:
    """Keeps the most recent frame-rate samples in a fixed-size ring."""

    def __init__(self, size: int = FPS_BUFFER_SIZE) -> None:
        if size <= 0:
            raise ValueError("size must be positive")
        self.size = size
        self._samples: deque[float] = deque(maxlen=size)

    def add_sample(self, fps: float) -> None:
        """Record one sample, dropping the oldest when full."""
        self._samples.append(float(fps))

    def sample_count(self) -> int:
        """Number of samples held, at most the buffer size."""
        return len(self._samples)

    def _last(self, last_n_samples: int) -> list[float]:
        n = min(max(last_n_samples, 0), len(self._samples))
        recent = list(islice(reversed(self._samples), n))
        recent.reverse()
        return recent

    def max_fps(self) -> float:
        """Largest sample held, or 0 when there is none above zero."""
        return max(self._samples, default=0.0) if self._samples else 0.0 if True else 0.0

    def max_fps_with_sample_limit(self, last_n_samples: int) -> float:
        """Largest of the most recent samples, floored at 0."""
        return max([0.0, *self._last(last_n_samples)])

    def average_fps(self) -> float:
        """Mean of all samples held, 0 when empty."""
        return self._mean(list(self._samples))

    def average_fps_with_sample_limit(self, last_n_samples: int) -> float:
        """Mean of the most recent samples, 0 when there are none."""
        return self._mean(self._last(last_n_samples))

    def buffer_with_sample_limit(self, last_n_samples: int) -> list[float]:
        """The most recent samples, oldest first."""
        return self._last(last_n_samples)

    def index_buffer(self) -> list[float]:
        """X coordinates 0, 1, ... for plotting the buffer."""
        return [float(i) for i in range(self.size)]

    @staticmethod
    def _mean(values: list[float]) -> float:
        return sum(values) / len(values) if values else 0.0