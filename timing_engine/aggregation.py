"""Hour-of-day aggregation of activity events."""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Iterable, Optional, Union

import numpy as np
import pytz

from timing_engine.schema import HOURS_PER_DAY, ActivityEvent

logger = logging.getLogger(__name__)

TimezoneLike = Union[str, tzinfo, None]


def resolve_timezone(tz: TimezoneLike) -> Optional[tzinfo]:
    """Turn a zone name into a pytz timezone; pass tzinfo objects and None through."""

    if tz is None or isinstance(tz, tzinfo):
        return tz
    return pytz.timezone(tz)


def event_hour(event: ActivityEvent, tz: TimezoneLike = None) -> Optional[int]:
    """Return the event's hour-of-day, or None when it has no usable timestamp."""

    timestamp = getattr(event, "timestamp", None)
    if not isinstance(timestamp, datetime):
        return None

    zone = resolve_timezone(tz)
    if zone is None:
        return timestamp.hour
    if timestamp.tzinfo is None:
        timestamp = pytz.utc.localize(timestamp)
    return timestamp.astimezone(zone).hour


def build_hour_histogram(events: Iterable[ActivityEvent], tz: TimezoneLike = None) -> np.ndarray:
    """Count events per hour-of-day into a fixed 24-bucket histogram.

    Without ``tz`` each timestamp's own wall-clock hour is used as-is. With
    ``tz`` aware timestamps are converted into that zone and naive ones are
    read as UTC first.
    """

    zone = resolve_timezone(tz)
    hours = []
    skipped = 0
    for event in events:
        hour = event_hour(event, zone)
        if hour is None:
            skipped += 1
            continue
        hours.append(hour)

    if skipped:
        logger.debug("Skipped %d activity events without a usable timestamp.", skipped)

    return np.bincount(np.asarray(hours, dtype=np.int64), minlength=HOURS_PER_DAY).astype(np.int64)


def count_usable_events(events: Iterable[ActivityEvent]) -> int:
    """Number of events that contribute to the histogram."""

    return sum(1 for event in events if isinstance(getattr(event, "timestamp", None), datetime))
