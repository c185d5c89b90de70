"""CSV adapter for activity events."""

from __future__ import annotations

import csv
import logging
from datetime import datetime
from typing import Optional

from timing_engine.schema import ActivityEvent

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("user_id", "timestamp")
_DEFAULT_ACTION = "app_open"


def parse_timestamp(raw: object) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp, returning None when it is unusable."""

    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _parse_row(row: dict, row_number: int) -> ActivityEvent:
    if not (row.get("user_id") or "").strip():
        raise ValueError(f"Row {row_number}: missing required field 'user_id'")

    timestamp = parse_timestamp(row.get("timestamp"))
    if timestamp is None:
        logger.warning("Row %d: malformed timestamp %r; event will not be counted.", row_number, row.get("timestamp"))

    action = (row.get("action") or "").strip() or _DEFAULT_ACTION
    return ActivityEvent(user_id=row["user_id"].strip(), timestamp=timestamp, action=action)


def parse(file_path: str) -> list[ActivityEvent]:
    """Parse CSV file into a list of activity events."""

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        missing = [field for field in _REQUIRED_FIELDS if field not in reader.fieldnames]
        if missing:
            raise ValueError(f"CSV header missing required columns {missing}")

        return [_parse_row(row, row_number) for row_number, row in enumerate(reader, start=2)]
