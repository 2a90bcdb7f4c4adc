"""Per-pipeline execution metrics."""

from __future__ import annotations

from collections import Counter
from contextlib import contextmanager
from time import perf_counter
from typing import Any, Dict, Generator

from .logging import get_logger

LOGGER = get_logger("telemetry")


class MetricsCollector:
    """Counts pipeline runs and elements and keeps run timings.

    ``timings`` holds the most recent duration per name in seconds;
    ``totals`` accumulates every duration recorded under that name.
    """

    def __init__(self) -> None:
        self.counters: Counter[str] = Counter()
        self.timings: Dict[str, float] = {}
        self.totals: Dict[str, float] = {}

    def increment(self, name: str, value: int = 1) -> None:
        self.counters[name] += value
        LOGGER.debug("counter=%s value=%s", name, self.counters[name])

    @contextmanager
    def time(self, name: str) -> Generator[None, None, None]:
        start = perf_counter()
        try:
            yield
        finally:
            elapsed = perf_counter() - start
            self.timings[name] = elapsed
            self.totals[name] = self.totals.get(name, 0.0) + elapsed
            LOGGER.debug("timing=%s duration=%.6f", name, elapsed)

    def record_run(self, elements: int) -> None:
        """Account for one completed pipeline execution over ``elements`` items."""

        self.increment("executions")
        self.increment("elements", elements)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "counters": dict(self.counters),
            "timings": dict(self.timings),
            "totals": dict(self.totals),
        }

    def reset(self) -> None:
        self.counters.clear()
        self.timings.clear()
        self.totals.clear()
