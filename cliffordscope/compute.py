"""A background worker thread that keeps iterating one attractor."""

from __future__ import annotations

import threading
import time
from enum import Enum

from .attractor import ITERATIONS_PER_BATCH, Attractor


class ComputeState(Enum):
    """Lifecycle of a compute worker."""

    PAUSED = "paused"
    RUNNING = "running"
    DIE = "die"


class Compute:
    """Runs ``attractor.iterate`` in batches on its own thread while resumed.

    The worker starts paused. ``lock`` guards the attractor's data; once
    ``pause`` returns no batch is in progress.
    """

    def __init__(self, attractor: Attractor) -> None:
        self.attractor = attractor
        self.lock = threading.RLock()
        self._cond = threading.Condition(self.lock)
        self._state = ComputeState.PAUSED
        self._thread = threading.Thread(target=self._loop, name="attractor-compute", daemon=True)
        self._thread.start()

    @property
    def state(self) -> ComputeState:
        return self._state

    @property
    def alive(self) -> bool:
        return self._thread.is_alive()

    def _set_state(self, state: ComputeState) -> None:
        with self._cond:
            self._state = state
            self._cond.notify_all()

    def _loop(self) -> None:
        while True:
            with self._cond:
                while self._state is ComputeState.PAUSED:
                    self._cond.wait()
                if self._state is ComputeState.DIE:
                    return
                self.tick()
            time.sleep(0)

    def tick(self) -> None:
        """Run one batch of iterations."""
        with self.lock:
            self.attractor.iterate(ITERATIONS_PER_BATCH)

    def resume(self) -> None:
        if self._state is not ComputeState.DIE:
            self._set_state(ComputeState.RUNNING)

    def pause(self) -> None:
        if self._state is not ComputeState.DIE:
            self._set_state(ComputeState.PAUSED)

    def destroy(self) -> None:
        """Stop the worker and wait for its thread to end."""
        self._set_state(ComputeState.DIE)
        if self._thread is not threading.current_thread():
            self._thread.join()

    def clean_attractor(self) -> None:
        with self.lock:
            self.attractor.clean()

    def reset_attractor(self) -> None:
        with self.lock:
            self.attractor.reset()

    def __enter__(self) -> "Compute":
        return self

    def __exit__(self, *exc_info) -> None:
        self.destroy()