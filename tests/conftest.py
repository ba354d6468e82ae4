"""Shared pytest fixtures and configuration for all tests."""

import logging
from pathlib import Path
from textwrap import dedent

import pytest

from vecset.config import ENV_MAX_DEPTH, ENV_RESERVED, ParserConfig
from vecset.observability.logging import LOG_LEVEL_ENV

FIXTURES_FILE = Path(__file__).resolve().parents[1] / "fixtures" / "collections.toml"


@pytest.fixture
def default_config():
    """Parser configuration with every default applied."""
    return ParserConfig()


@pytest.fixture
def fixtures_file():
    """The fixture file shipped with the repository."""
    return FIXTURES_FILE


@pytest.fixture
def write_fixtures(tmp_path):
    """Write a TOML fixture file and return its path."""
    def _write(content: str, name: str = "cases.toml") -> Path:
        path = tmp_path / name
        path.write_text(dedent(content), encoding="utf-8")
        return path
    return _write


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep developer environment variables out of the tests."""
    for name in (ENV_MAX_DEPTH, ENV_RESERVED, LOG_LEVEL_ENV):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_vecset_logger():
    """Undo handler/level changes made by configure_logging."""
    logger = logging.getLogger("vecset")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def pytest_configure(config):
    """Register markers for pytest."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
