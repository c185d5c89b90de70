import logging

import pytest
from pydantic import ValidationError

from timing_engine.config import SchedulerConfig, SchedulingConfigError, load_config
from timing_engine.logging_utils import JsonFormatter, configure_logging


def test_defaults():
    config = load_config()
    assert config.top_n == 3
    assert config.fallback_hours == (18, 19, 20)
    assert config.default_hour == 18
    assert config.max_events == 500
    assert config.tzinfo is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TIMING_TOP_N", "5")
    monkeypatch.setenv("TIMING_FALLBACK_HOURS", "7, 8")
    monkeypatch.setenv("TIMING_TIMEZONE", "America/Chicago")
    config = load_config()
    assert config.top_n == 5
    assert config.fallback_hours == (7, 8)
    assert config.tzinfo.zone == "America/Chicago"


def test_env_file(tmp_path):
    env_path = tmp_path / "timing.env"
    env_path.write_text("TIMING_DEFAULT_HOUR=9\n", encoding="utf-8")
    assert load_config(env_path).default_hour == 9


@pytest.mark.parametrize(
    "overrides",
    [
        {"top_n": 0},
        {"default_hour": 24},
        {"fallback_hours": ()},
        {"fallback_hours": (18, 30)},
        {"timezone": "Mars/Olympus"},
        {"log_level": "LOUD"},
    ],
)
def test_invalid_config_raises(overrides):
    with pytest.raises(SchedulingConfigError):
        load_config(**overrides)


def test_config_is_frozen():
    config = SchedulerConfig()
    with pytest.raises(ValidationError):
        config.top_n = 4


def test_configure_logging_installs_single_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        handler = configure_logging(load_config(log_level="debug"), json_output=True)
        assert root.handlers == [handler]
        assert root.level == logging.DEBUG
        assert isinstance(handler.formatter, JsonFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("timing", logging.INFO, __file__, 1, "hello %s", ("there",), None)
    record.extra_fields = {"scheduled_hour": 18}
    text = JsonFormatter().format(record)
    assert '"message": "hello there"' in text
    assert '"scheduled_hour": 18' in text


def test_load_config_logs_under_module_logger(caplog):
    with caplog.at_level(logging.DEBUG, logger="timing_engine.config"):
        load_config()
    assert [record.name for record in caplog.records] == ["timing_engine.config"]
    assert caplog.records[0].event == "config.loaded"
