"""JSON adapter for activity events."""

from __future__ import annotations

import json
import logging

from timing_engine.adapters.csv_adapter import parse_timestamp
from timing_engine.schema import ActivityEvent

logger = logging.getLogger(__name__)

_DEFAULT_ACTION = "app_open"


def _parse_item(item: object, index: int) -> ActivityEvent:
    if not isinstance(item, dict):
        raise ValueError(f"Item {index}: expected an object")

    user_id = str(item.get("user_id") or "").strip()
    if not user_id:
        raise ValueError(f"Item {index}: missing required field 'user_id'")

    timestamp = parse_timestamp(item.get("timestamp"))
    if timestamp is None:
        logger.warning("Item %d: malformed timestamp %r; event will not be counted.", index, item.get("timestamp"))

    action = str(item.get("action") or "").strip() or _DEFAULT_ACTION
    return ActivityEvent(user_id=user_id, timestamp=timestamp, action=action)


def parse(file_path: str) -> list[ActivityEvent]:
    """Parse JSON file into activity events."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    return [_parse_item(item, i) for i, item in enumerate(payload, start=1)]
