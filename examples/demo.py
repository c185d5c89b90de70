"""Demo script for timing-engine."""

import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from timing_engine.adapters.csv_adapter import parse
from timing_engine.service import TimingService
from timing_engine.stores import CollectingDispatcher, InMemoryActivityStore, InMemoryPreferenceStore


def main() -> None:
    events = parse(str(Path(__file__).with_name("sample_activity.csv")))
    preferences = InMemoryPreferenceStore({"me": ["17:00-20:00"]})
    dispatcher = CollectingDispatcher()
    service = TimingService(InMemoryActivityStore(events), preferences, dispatcher=dispatcher)

    friends = sorted({event.user_id for event in events})
    print("Optimal hours:", service.optimal_hours(friends))
    decision = service.schedule_notification("me", friends, now=datetime(2025, 1, 6, 8, 30))
    print("Decision:", decision.to_dict())


if __name__ == "__main__":
    main()
