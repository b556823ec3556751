# Project: climate-stats
# Owner: GreenUnicorn
"""
pacing.py — Throttled task sequences for upstream rate limits.

Loops that call out to the weather API iterate through `paced()` with a
pacer instead of sleeping inline, so tests can swap in NoDelayPacer.
"""

import time
from collections.abc import Iterable, Iterator
from typing import Protocol, TypeVar

T = TypeVar("T")

DEFAULT_FETCH_DELAY = 0.1      # seconds between yearly historical fetches
DEFAULT_FORECAST_DELAY = 0.2   # seconds between forecast days in a comparison


class Pacer(Protocol):
    def wait(self) -> None:
        ...


class FixedDelayPacer:
    """Sleep a fixed number of seconds on every wait()."""

    def __init__(self, delay: float):
        if delay < 0:
            raise ValueError(f"Delay must be non-negative, got {delay}")
        self.delay = delay

    def wait(self) -> None:
        if self.delay > 0:
            time.sleep(self.delay)


class NoDelayPacer:
    """Pacer that never waits."""

    def wait(self) -> None:
        pass


def paced(items: Iterable[T], pacer: Pacer) -> Iterator[T]:
    """Yield items in order, calling pacer.wait() between consecutive items."""
    for i, item in enumerate(items):
        if i:
            pacer.wait()
        yield item
