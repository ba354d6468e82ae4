"""Centralised logging helpers for vecset."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

_LOGGER_CACHE: Dict[str, logging.Logger] = {}

LOG_LEVEL_ENV = "VECSET_LOG_LEVEL"

_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'warning': logging.WARNING,
    'error': logging.ERROR,
}


def get_logger(name: str = "vecset") -> logging.Logger:
    """Return a cached :class:`logging.Logger` instance."""

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def resolve_log_level(level: Optional[str] = None) -> int:
    """Map a level name from the CLI or environment onto a logging level."""

    name = (level or os.getenv(LOG_LEVEL_ENV, 'warning')).lower()
    return _LEVELS.get(name, logging.WARNING)


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a console handler to the ``vecset`` logger."""

    logger = get_logger("vecset")
    logger.setLevel(resolve_log_level(level))

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        # Avoid duplicate records through the root logger
        logger.propagate = False
    return logger


def log_parse_event(
    event: str,
    *,
    message: str,
    level: int = logging.DEBUG,
    logger: Optional[logging.Logger] = None,
    **data: Any,
) -> None:
    """Emit a structured parser log entry."""

    payload = {key: value for key, value in data.items() if value is not None}
    target_logger = logger or get_logger("vecset.parser")
    target_logger.log(
        level,
        message,
        extra={"vecset_event": event, "vecset_data": payload},
    )
