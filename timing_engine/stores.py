"""Boundaries to the activity store, preference store and notification dispatcher."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Iterable, Protocol, Sequence

from timing_engine.schema import ActivityEvent, ScheduleDecision
from timing_engine.windows import WindowLike


class ActivityEventStore(Protocol):
    def fetch_recent_activity(self, user_ids: Iterable[str], max_count: int) -> list[ActivityEvent]:
        ...

    def add_activity(self, event: ActivityEvent) -> None:
        ...


class PreferenceStore(Protocol):
    def fetch_preferred_windows(self, user_id: str) -> list[WindowLike]:
        ...

    def set_preferred_windows(self, user_id: str, windows: Sequence[WindowLike]) -> None:
        ...


class NotificationDispatcher(Protocol):
    def dispatch(self, user_id: str, decision: ScheduleDecision) -> None:
        ...


def _recency_key(event: ActivityEvent) -> tuple[int, float]:
    timestamp = event.timestamp
    if not isinstance(timestamp, datetime):
        return (1, 0.0)
    # naive timestamps are compared as if they were UTC
    if timestamp.tzinfo is None:
        return (0, -(timestamp - datetime(1970, 1, 1)).total_seconds())
    return (0, -timestamp.timestamp())


class InMemoryActivityStore:
    """Activity log kept in a list, queried newest first."""

    def __init__(self, events: Iterable[ActivityEvent] = ()) -> None:
        self._events: list[ActivityEvent] = list(events)

    def add_activity(self, event: ActivityEvent) -> None:
        self._events.append(event)

    def fetch_recent_activity(self, user_ids: Iterable[str], max_count: int) -> list[ActivityEvent]:
        wanted = set(user_ids)
        if not wanted or max_count <= 0:
            return []
        matching = [event for event in self._events if event.user_id in wanted]
        matching.sort(key=_recency_key)
        return matching[:max_count]

    def __len__(self) -> int:
        return len(self._events)


class InMemoryPreferenceStore:
    """Preferred windows per user; unknown users have none."""

    def __init__(self, windows: dict[str, Sequence[WindowLike]] | None = None) -> None:
        self._windows: dict[str, list[WindowLike]] = {
            user_id: list(values) for user_id, values in (windows or {}).items()
        }

    def fetch_preferred_windows(self, user_id: str) -> list[WindowLike]:
        return list(self._windows.get(user_id, []))

    def set_preferred_windows(self, user_id: str, windows: Sequence[WindowLike]) -> None:
        self._windows[user_id] = list(windows)


class CollectingDispatcher:
    """Dispatcher that only records what it was asked to deliver."""

    def __init__(self) -> None:
        self.dispatched: dict[str, list[ScheduleDecision]] = defaultdict(list)

    def dispatch(self, user_id: str, decision: ScheduleDecision) -> None:
        self.dispatched[user_id].append(decision)
