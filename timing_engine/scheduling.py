"""Preferred-window matching and notification schedule composition."""

from __future__ import annotations

import logging
import numbers
from datetime import datetime
from typing import Iterable, Optional, Sequence

import pytz

from timing_engine.aggregation import TimezoneLike, build_hour_histogram, resolve_timezone
from timing_engine.config import SchedulerConfig, SchedulingConfigError
from timing_engine.ranking import select_top_hours
from timing_engine.schema import HOURS_PER_DAY, ActivityEvent, ScheduleDecision
from timing_engine.windows import WindowLike, parse_windows

logger = logging.getLogger(__name__)

DEFAULT_HOUR = 18


def _check_hour(hour: int) -> int:
    if isinstance(hour, bool) or not isinstance(hour, numbers.Integral):
        raise SchedulingConfigError(f"hour {hour!r} must be an integer")
    if not 0 <= int(hour) < HOURS_PER_DAY:
        raise SchedulingConfigError(f"hour {hour!r} outside 0..23")
    return int(hour)


def match_preferred_hour(
    candidates: Sequence[int],
    windows: Iterable[WindowLike],
    default_hour: int = DEFAULT_HOUR,
) -> int:
    """Return the best-ranked candidate inside any preferred window.

    Falls back to the top candidate when nothing matches, and to
    ``default_hour`` when there are no candidates at all.
    """

    ranked = [_check_hour(hour) for hour in candidates]
    parsed = parse_windows(windows)

    for hour in ranked:
        for window in parsed:
            if window.contains(hour):
                return hour

    if ranked:
        return ranked[0]
    return _check_hour(default_hour)


def compose_schedule(
    hour: int,
    now: Optional[datetime] = None,
    tz: TimezoneLike = None,
    candidates: Sequence[int] = (),
) -> ScheduleDecision:
    """Place ``hour`` on today's date, zeroing minutes and below.

    The date is never rolled forward, even when the hour is already past.
    """

    hour = _check_hour(hour)
    zone = resolve_timezone(tz)

    if zone is None:
        reference = now if now is not None else datetime.now()
        scheduled = reference.replace(hour=hour, minute=0, second=0, microsecond=0)
    else:
        if now is None:
            reference = datetime.now(zone)
        elif now.tzinfo is None:
            # naive values are UTC, as in aggregation
            reference = pytz.utc.localize(now).astimezone(zone)
        else:
            reference = now.astimezone(zone)
        wall_clock = reference.replace(tzinfo=None, hour=hour, minute=0, second=0, microsecond=0)
        if hasattr(zone, "localize"):
            # normalize shifts hours skipped by a DST gap onto a real wall time
            scheduled = zone.normalize(zone.localize(wall_clock))
        else:
            scheduled = wall_clock.replace(tzinfo=zone)

    return ScheduleDecision(scheduled_hour=hour, scheduled_date=scheduled, candidates=list(candidates))


def plan_schedule(
    events: Iterable[ActivityEvent],
    windows: Iterable[WindowLike],
    config: Optional[SchedulerConfig] = None,
    now: Optional[datetime] = None,
) -> ScheduleDecision:
    """Run aggregation, top-N selection, window matching and composition."""

    config = config or SchedulerConfig()
    histogram = build_hour_histogram(events, tz=config.tzinfo)
    candidates = select_top_hours(histogram, n=config.top_n, fallback_hours=config.fallback_hours)
    hour = match_preferred_hour(candidates, windows, default_hour=config.default_hour)
    decision = compose_schedule(hour, now=now, tz=config.tzinfo, candidates=candidates)
    logger.debug("Planned hour %d from candidates %s.", hour, candidates)
    return decision
