"""Lightweight observability helpers for logging instrumentation."""

from __future__ import annotations

from .logging import configure_logging, get_logger, log_parse_event, resolve_log_level

__all__ = [
    "configure_logging",
    "get_logger",
    "log_parse_event",
    "resolve_log_level",
]
