import json
from datetime import datetime, timezone

import pytest

from timing_engine.adapters.csv_adapter import parse as parse_csv
from timing_engine.adapters.json_adapter import parse as parse_json


def test_csv_parse_success(tmp_path):
    path = tmp_path / "activity.csv"
    path.write_text(
        "user_id,timestamp,action\n"
        "alice,2025-01-01T09:00:00,app_open\n"
        "bob,2025-01-01T10:00:00Z,\n",
        encoding="utf-8",
    )
    events = parse_csv(str(path))
    assert len(events) == 2
    assert events[0].timestamp == datetime(2025, 1, 1, 9, 0)
    assert events[1].action == "app_open"
    assert events[1].timestamp == datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc)


def test_csv_bad_timestamp_is_kept_without_time(tmp_path):
    path = tmp_path / "activity.csv"
    path.write_text("user_id,timestamp\nalice,bad\n", encoding="utf-8")
    events = parse_csv(str(path))
    assert len(events) == 1
    assert events[0].timestamp is None


def test_csv_missing_user_or_column(tmp_path):
    path = tmp_path / "activity.csv"
    path.write_text("user_id,timestamp\n,2025-01-01T09:00:00\n", encoding="utf-8")
    with pytest.raises(ValueError):
        parse_csv(str(path))

    path.write_text("timestamp\n2025-01-01T09:00:00\n", encoding="utf-8")
    with pytest.raises(ValueError):
        parse_csv(str(path))


def test_csv_empty_file(tmp_path):
    path = tmp_path / "activity.csv"
    path.write_text("", encoding="utf-8")
    assert parse_csv(str(path)) == []


def test_json_parse_success(tmp_path):
    path = tmp_path / "activity.json"
    payload = [
        {"user_id": "alice", "timestamp": "2025-01-01T09:00:00", "action": "snap_sent"},
        {"user_id": "bob", "timestamp": None},
    ]
    path.write_text(json.dumps(payload), encoding="utf-8")
    events = parse_json(str(path))
    assert len(events) == 2
    assert events[0].action == "snap_sent"
    assert events[1].timestamp is None


def test_json_parse_malformed(tmp_path):
    path = tmp_path / "activity.json"
    path.write_text(json.dumps({"user_id": "a"}), encoding="utf-8")
    with pytest.raises(ValueError):
        parse_json(str(path))

    path.write_text(json.dumps([{"timestamp": "2025-01-01T09:00:00"}]), encoding="utf-8")
    with pytest.raises(ValueError):
        parse_json(str(path))
