# Project: climate-stats
# Owner: GreenUnicorn
"""
stats.py — Statistical primitives shared by every climate calculation.

Standard library only. Every function returns None for an empty sequence so
results stay JSON-serialisable; callers filter out null samples first.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence


def mean(values: Sequence[float]) -> float | None:
    """Arithmetic mean, or None for an empty sequence."""
    if not values:
        return None
    return sum(values) / len(values)


def std_dev(values: Sequence[float]) -> float | None:
    """Population standard deviation, or None for an empty sequence."""
    avg = mean(values)
    if avg is None:
        return None
    return math.sqrt(sum((v - avg) ** 2 for v in values) / len(values))


def percentile(values: Sequence[float], p: float) -> float | None:
    """Nearest-rank percentile of `values` for p in [0, 100].

    Uses index ceil(p/100 * n) - 1 into a sorted copy, clamped to 0, so the
    result is always one of the observed samples. The caller's sequence is
    never reordered.

    Raises:
        ValueError: If p is outside [0, 100].
    """
    if not 0 <= p <= 100:
        raise ValueError(f"Percentile must be between 0 and 100, got {p}")
    if not values:
        return None
    ordered = sorted(values)
    index = math.ceil((p / 100) * len(ordered)) - 1
    return ordered[max(0, index)]


def present(values: Iterable[float | None]) -> list[float]:
    """Drop None entries from a sequence of optional samples."""
    return [v for v in values if v is not None]
