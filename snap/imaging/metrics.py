"""Lightweight in-process metrics for transforms.

Counters and timings live in memory only; tests read them through
``snapshot()``.

Usage:
    from snap.imaging.metrics import metrics
    with metrics.transform("resize") as outcome:
        ...
        outcome.ok = True
    snapshot = metrics.snapshot()
"""

from __future__ import annotations

import time
from collections import defaultdict
from contextlib import contextmanager
from threading import RLock
from typing import Any


class _Outcome:
    __slots__ = ("ok",)

    def __init__(self) -> None:
        self.ok = False


class _Metrics:
    def __init__(self) -> None:
        self._counters: dict[str, int] = defaultdict(int)
        self._timings: dict[str, list[float]] = defaultdict(list)
        self._lock = RLock()

    def inc(self, key: str, amount: int = 1) -> None:
        with self._lock:
            self._counters[key] += int(amount)

    def add_timing(self, key: str, seconds: float) -> None:
        with self._lock:
            self._timings[key].append(float(seconds))

    @contextmanager
    def transform(self, name: str):
        """Time a transform and count it as ``<name>.success`` or ``<name>.failure``.

        The body flips ``outcome.ok``; an exception leaves it False.
        """
        outcome = _Outcome()
        start = time.perf_counter()
        try:
            yield outcome
        finally:
            self.add_timing(f"{name}.duration", time.perf_counter() - start)
            self.inc(f"{name}.success" if outcome.ok else f"{name}.failure")

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return {
                "counters": dict(self._counters),
                "timings": {k: list(v) for k, v in self._timings.items()},
            }

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._timings.clear()


metrics = _Metrics()
