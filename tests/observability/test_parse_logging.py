"""Tests for parser logging."""

import logging

import pytest

from vecset import parse
from vecset.errors import ParseError
from vecset.observability.logging import (
    LOG_LEVEL_ENV,
    configure_logging,
    get_logger,
    log_parse_event,
    resolve_log_level,
)


def events(caplog):
    return [record for record in caplog.records if hasattr(record, "vecset_event")]


class TestParseEvents:
    """Structured records emitted by parse."""

    def test_success_event(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="vecset.parser"):
            parse("[0]")
        (record,) = events(caplog)
        assert record.vecset_event == "parse_succeeded"
        assert record.vecset_data == {"tokens": 3, "nodes": 4, "depth": 1}
        assert record.levelno == logging.DEBUG

    def test_failure_event(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="vecset.parser"):
            with pytest.raises(ParseError):
                parse("[0}")
        (record,) = events(caplog)
        assert record.vecset_event == "parse_failed"
        assert record.vecset_data["code"] == "MISMATCHED_CLOSER"
        assert record.vecset_data["column"] == 3
        assert record.vecset_data["length"] == 3

    def test_quiet_by_default(self, caplog):
        parse("[0]")
        assert events(caplog) == []

    def test_none_values_are_dropped(self, caplog):
        with caplog.at_level(logging.INFO, logger="vecset.parser"):
            log_parse_event("custom", message="Custom", level=logging.INFO, line=None, column=2)
        (record,) = events(caplog)
        assert record.vecset_data == {"column": 2}


class TestLoggingSetup:
    """Logger configuration helpers."""

    def test_get_logger_is_cached(self):
        assert get_logger("vecset.example") is get_logger("vecset.example")

    @pytest.mark.parametrize("name,level", [
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        ("warn", logging.WARNING),
        ("error", logging.ERROR),
        ("bogus", logging.WARNING),
    ])
    def test_resolve_log_level(self, name, level):
        assert resolve_log_level(name) == level

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
        assert resolve_log_level() == logging.DEBUG

    def test_default_level(self):
        assert resolve_log_level() == logging.WARNING

    def test_configure_logging_adds_one_handler(self):
        logger = logging.getLogger("vecset")
        logger.handlers.clear()
        configure_logging("info")
        configure_logging("debug")
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
