#!filepath: heldout/observability/timer.py
import time
from typing import Callable, Dict, Literal

Clock = Literal["cpu", "wall"]

_CLOCKS: Dict[str, Callable[[], float]] = {
    # CPU time of the calling thread; the run is single threaded
    "cpu": time.thread_time,
    "wall": time.perf_counter,
}


class Timer:
    """
    Named interval timer
    - start(name)
    - end(name) -> elapsed seconds
    """

    def __init__(self, clock: Clock = "cpu", enabled: bool = True):
        if clock not in _CLOCKS:
            raise ValueError(f"[Timer] unknown clock: {clock}")
        self.clock = clock
        self.enabled = enabled
        self._now = _CLOCKS[clock]
        self._start: Dict[str, float] = {}

    def start(self, name: str):
        if not self.enabled:
            return
        self._start[name] = self._now()

    def end(self, name: str) -> float:
        if not self.enabled:
            return 0.0
        if name not in self._start:
            return 0.0
        elapsed = self._now() - self._start.pop(name)
        return elapsed
