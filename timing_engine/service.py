"""Notification timing service wired to external stores."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

import pytz

from timing_engine.aggregation import build_hour_histogram
from timing_engine.config import SchedulerConfig
from timing_engine.ranking import select_top_hours
from timing_engine.schema import HOURS_PER_DAY, ActivityEvent, ScheduleDecision, TimeWindow
from timing_engine.scheduling import compose_schedule, match_preferred_hour
from timing_engine.stores import ActivityEventStore, NotificationDispatcher, PreferenceStore
from timing_engine.windows import parse_windows

logger = logging.getLogger(__name__)


class TimingService:
    """Pick when to nudge a user, based on when their friends are active.

    The service holds collaborators and configuration only; the user being
    scheduled is passed into every call.
    """

    def __init__(
        self,
        activity_store: ActivityEventStore,
        preference_store: PreferenceStore,
        config: Optional[SchedulerConfig] = None,
        dispatcher: Optional[NotificationDispatcher] = None,
    ) -> None:
        self.activity_store = activity_store
        self.preference_store = preference_store
        self.config = config or SchedulerConfig()
        self.dispatcher = dispatcher

    def record_activity(self, user_id: str, action: str = "app_open", now: Optional[datetime] = None) -> ActivityEvent:
        """Store an activity event stamped with the current UTC time."""

        timestamp = now if now is not None else datetime.now(pytz.utc)
        event = ActivityEvent(user_id=user_id, timestamp=timestamp, action=action)
        self.activity_store.add_activity(event)
        logger.debug("Recorded %s for user %s.", action, user_id)
        return event

    def preferred_windows(self, user_id: str) -> list[TimeWindow]:
        return parse_windows(self.preference_store.fetch_preferred_windows(user_id))

    def optimal_hours(self, friend_ids: Iterable[str]) -> list[int]:
        """Rank the hours when the given friends are most active."""

        friends = list(dict.fromkeys(friend_ids))
        if not friends:
            logger.info("No friends to learn from; using fallback hours.")
            return select_top_hours([0] * HOURS_PER_DAY, n=self.config.top_n, fallback_hours=self.config.fallback_hours)

        events = self.activity_store.fetch_recent_activity(friends, self.config.max_events)
        histogram = build_hour_histogram(events, tz=self.config.tzinfo)
        return select_top_hours(histogram, n=self.config.top_n, fallback_hours=self.config.fallback_hours)

    def schedule_notification(
        self,
        user_id: str,
        friend_ids: Iterable[str],
        now: Optional[datetime] = None,
    ) -> ScheduleDecision:
        """Choose today's notification time and hand it to the dispatcher."""

        windows = self.preferred_windows(user_id)
        candidates = self.optimal_hours(friend_ids)
        hour = match_preferred_hour(candidates, windows, default_hour=self.config.default_hour)
        decision = compose_schedule(hour, now=now, tz=self.config.tzinfo, candidates=candidates)

        logger.info(
            "Scheduled notification for user %s at %02d:00",
            user_id,
            decision.scheduled_hour,
            extra={"event": "timing.scheduled", "extra_fields": decision.to_dict()},
        )
        if self.dispatcher is not None:
            self.dispatcher.dispatch(user_id, decision)
        return decision
