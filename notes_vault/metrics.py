"""In-process counters for a vault session.

Nothing is exported; :func:`snapshot` is logged when the session ends.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass


@dataclass
class Counter:
    name: str
    value: int = 0

    def inc(self, n: int = 1) -> None:
        self.value += n

    def reset(self) -> None:
        self.value = 0


@dataclass
class Gauge:
    name: str
    value: int = 0

    def set(self, v: int) -> None:
        self.value = v

    def reset(self) -> None:
        self.value = 0


@dataclass
class Timer:
    """Keeps the duration of the most recent timed block, in milliseconds."""

    name: str
    last_ms: float | None = None

    @contextmanager
    def time(self):  # noqa: ANN201
        started = time.perf_counter()
        try:
            yield
        finally:
            self.last_ms = (time.perf_counter() - started) * 1000

    def reset(self) -> None:
        self.last_ms = None


commands_total = Counter("commands_total")
validation_errors_total = Counter("validation_errors_total")
entries_total = Gauge("entries_total")
save_ms = Timer("save_ms")

_ALL = (commands_total, validation_errors_total, entries_total, save_ms)


def snapshot() -> dict[str, float | int | None]:
    values: dict[str, float | int | None] = {}
    for metric in _ALL:
        values[metric.name] = metric.last_ms if isinstance(metric, Timer) else metric.value
    return values


def reset() -> None:
    for metric in _ALL:
        metric.reset()
