"""Preferred time-window parsing."""

from __future__ import annotations

import logging
import re
from typing import Iterable, Union

from timing_engine.schema import TimeWindow

logger = logging.getLogger(__name__)

DEFAULT_PREFERRED_WINDOWS: tuple[str, ...] = ("17:00-19:00",)

_WINDOW_RE = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?\s*-\s*(\d{1,2})(?::(\d{2}))?\s*$")

WindowLike = Union[str, TimeWindow, tuple, list]


class MalformedWindowError(ValueError):
    """Raised when a window cannot be read as two hours of the day."""


def _check_hour(value: object, raw: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedWindowError(f"Window {raw!r}: hour must be an integer")
    if not 0 <= value <= 23:
        raise MalformedWindowError(f"Window {raw!r}: hour {value} outside 0..23")
    return value


def parse_window(value: WindowLike) -> TimeWindow:
    """Parse ``"HH:MM-HH:MM"``, an ``(start, end)`` pair or a TimeWindow."""

    if isinstance(value, TimeWindow):
        window = TimeWindow(_check_hour(value.start_hour, value), _check_hour(value.end_hour, value))
    elif isinstance(value, str):
        match = _WINDOW_RE.match(value)
        if not match:
            raise MalformedWindowError(f"Window {value!r}: expected HH:MM-HH:MM")
        start_hour, start_min, end_hour, end_min = match.groups()
        for minutes in (start_min, end_min):
            if minutes is not None and int(minutes) > 59:
                raise MalformedWindowError(f"Window {value!r}: minutes outside 0..59")
        window = TimeWindow(_check_hour(int(start_hour), value), _check_hour(int(end_hour), value))
    elif isinstance(value, (tuple, list)) and len(value) == 2:
        window = TimeWindow(_check_hour(value[0], value), _check_hour(value[1], value))
    else:
        raise MalformedWindowError(f"Window {value!r}: unsupported type {type(value).__name__}")

    if window.start_hour > window.end_hour:
        logger.debug("Window %s wraps midnight and will never match.", window)
    return window


def parse_windows(values: Iterable[WindowLike] | None) -> list[TimeWindow]:
    """Parse windows in order, skipping malformed entries."""

    windows: list[TimeWindow] = []
    for index, value in enumerate(values or ()):
        try:
            windows.append(parse_window(value))
        except MalformedWindowError as exc:
            logger.warning("Skipping preferred window #%d: %s", index, exc)
    return windows
