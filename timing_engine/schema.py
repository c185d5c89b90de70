"""Core data schema for activity events and schedule decisions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

HOURS_PER_DAY = 24


@dataclass(frozen=True)
class ActivityEvent:
    """Timestamped user action used as an "online now" signal."""

    user_id: str
    timestamp: Optional[datetime]
    action: str = "app_open"


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive hour range, no wraparound across midnight."""

    start_hour: int
    end_hour: int

    def contains(self, hour: int) -> bool:
        return self.start_hour <= hour <= self.end_hour

    def __str__(self) -> str:
        return f"{self.start_hour:02d}:00-{self.end_hour:02d}:00"


@dataclass(frozen=True)
class ScheduleDecision:
    """Hour and concrete datetime chosen for a notification."""

    scheduled_hour: int
    scheduled_date: datetime
    candidates: list[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "scheduled_hour": self.scheduled_hour,
            "scheduled_date": self.scheduled_date.isoformat(),
            "candidates": list(self.candidates),
        }
