"""Top-N busiest hour selection."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from timing_engine.config import DEFAULT_FALLBACK_HOURS, SchedulingConfigError
from timing_engine.schema import HOURS_PER_DAY

_CONSUMED = -1


def fallback_hour(position: int, fallback_hours: Sequence[int] = DEFAULT_FALLBACK_HOURS) -> int:
    """Fallback for a selection position; the list is cycled past its end."""

    return int(fallback_hours[position % len(fallback_hours)])


def select_top_hours(
    histogram: Sequence[int] | np.ndarray,
    n: int = 3,
    fallback_hours: Sequence[int] = DEFAULT_FALLBACK_HOURS,
) -> list[int]:
    """Pick the n busiest hours, highest first.

    Ties go to the lowest hour. Once no bucket has a positive count left, the
    remaining positions are filled from ``fallback_hours``.
    """

    if n < 0:
        raise SchedulingConfigError(f"n must be >= 0, got {n}")
    if not fallback_hours:
        raise SchedulingConfigError("fallback_hours must not be empty")
    if any(not 0 <= int(hour) < HOURS_PER_DAY for hour in fallback_hours):
        raise SchedulingConfigError(f"fallback_hours out of range: {list(fallback_hours)}")

    counts = np.array(histogram, dtype=np.int64, copy=True)
    if counts.shape != (HOURS_PER_DAY,):
        raise SchedulingConfigError(f"histogram must have {HOURS_PER_DAY} buckets, got shape {counts.shape}")

    top_hours: list[int] = []
    for position in range(n):
        hour = int(np.argmax(counts))
        if counts[hour] > 0:
            top_hours.append(hour)
            counts[hour] = _CONSUMED
        else:
            top_hours.append(fallback_hour(position, fallback_hours))
    return top_hours
