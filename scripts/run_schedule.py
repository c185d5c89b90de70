"""Compute a notification schedule from a CSV/JSON activity log."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from timing_engine.adapters import csv_adapter, json_adapter
from timing_engine.config import load_config
from timing_engine.logging_utils import configure_logging
from timing_engine.scheduling import plan_schedule
from timing_engine.windows import DEFAULT_PREFERRED_WINDOWS


def _load_events(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def _parse_now(raw: str | None) -> datetime | None:
    if raw is None:
        return None
    now = csv_adapter.parse_timestamp(raw)
    if now is None:
        raise ValueError(f"--now {raw!r} is not an ISO-8601 timestamp")
    return now


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pick the best notification hour from friend activity")
    parser.add_argument("--events", required=True, help="Path to CSV/JSON activity events file")
    parser.add_argument(
        "--window",
        action="append",
        dest="windows",
        help="Preferred window as HH:MM-HH:MM; repeatable (default: %s)" % ", ".join(DEFAULT_PREFERRED_WINDOWS),
    )
    parser.add_argument("--top-n", type=int, default=None, help="Number of candidate hours to rank")
    parser.add_argument("--timezone", default=None, help="Zone name used to read event hours, e.g. Europe/Berlin")
    parser.add_argument("--now", default=None, help="Reference time in ISO-8601 (default: current time)")
    parser.add_argument("--json-logs", action="store_true", help="Emit structured JSON logs")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    overrides = {}
    if args.top_n is not None:
        overrides["top_n"] = args.top_n
    if args.timezone:
        overrides["timezone"] = args.timezone
    config = load_config(**overrides)
    configure_logging(config, json_output=args.json_logs)

    events = _load_events(Path(args.events))
    windows = args.windows if args.windows is not None else list(DEFAULT_PREFERRED_WINDOWS)
    now = _parse_now(args.now)

    decision = plan_schedule(events, windows, config=config, now=now)
    print(json.dumps(decision.to_dict(), indent=2))


if __name__ == "__main__":
    main()
