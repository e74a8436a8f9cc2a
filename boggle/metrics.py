import logging
import time
from contextlib import contextmanager

from boggle.grid import Position

logger = logging.getLogger("boggle")


class StageTimer:
    """Collects per-stage timing for one verify/solve/turn."""

    def __init__(self):
        self.timings: dict[str, float] = {}
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - t0
            self.timings[name] = round(elapsed * 1000, 1)  # ms
            logger.info("stage=%s elapsed=%.1fms", name, self.timings[name])

    @property
    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 1)

    def summary(self) -> dict:
        return {**self.timings, "total": self.total_ms}


class VisitCounter:
    """on_visit hook that counts the cells a search steps onto."""

    def __init__(self, delay_ms: int = 0):
        self.visits = 0
        self.delay_ms = delay_ms

    def __call__(self, pos: Position):
        self.visits += 1
        if self.delay_ms:
            time.sleep(self.delay_ms / 1000)
