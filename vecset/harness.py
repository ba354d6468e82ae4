"""
Fixture runner that checks the parser against literal cases.

A fixture file is TOML with one ``[[case]]`` table per case::

    [[case]]
    name = "nested ordered"
    input = "[[0], 1]"
    expected = '[["0"],"1"]'

    [[case]]
    input = "[}"
    error = "MISMATCHED_CLOSER"

``expected`` is a canonical rendering (see :mod:`vecset.render`) and is
compared by value, so unordered members may be listed in any order.
``error`` names a :class:`~vecset.errors.ParseErrorKind`, or is ``true``
when any parse failure is acceptable.
"""

from __future__ import annotations

import time
import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from .config import ParserConfig
from .errors import ConfigError, ParseError, ParseErrorKind, RenderError
from .observability.logging import get_logger
from .parser import try_parse
from .render import from_rendering, render
from .values import Value

logger = get_logger(__name__)

ANY_ERROR = "ANY"


class CaseResult(str, Enum):
    """Result of running a fixture."""
    PASS = "pass"
    FAIL = "fail"


@dataclass(frozen=True)
class Fixture:
    """One literal input and what parsing it should produce."""
    input: str
    name: str = ""
    expected: Optional[str] = None
    expected_value: Optional[Value] = None
    # A ParseErrorKind name, or ANY_ERROR
    error: Optional[str] = None

    @property
    def expects_failure(self) -> bool:
        return self.error is not None

    @property
    def label(self) -> str:
        return self.name or self.input


@dataclass
class FixtureResult:
    """Outcome of a single fixture."""
    fixture: Fixture
    result: CaseResult
    actual: Optional[str] = None
    error: Optional[ParseError] = None
    message: Optional[str] = None
    duration_ms: float = 0.0

    @property
    def passed(self) -> bool:
        return self.result is CaseResult.PASS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.fixture.label,
            "input": self.fixture.input,
            "result": self.result.value,
            "expected": self.fixture.expected if not self.fixture.expects_failure else self.fixture.error,
            "actual": self.actual if self.error is None else self.error.code,
            "message": self.message,
            "duration_ms": self.duration_ms,
        }


def _fixture_from_table(table: Dict[str, Any], index: int, source: str) -> Fixture:
    where = f"{source} case #{index}"
    if not isinstance(table.get("input"), str):
        raise ConfigError(f"{where}: 'input' must be a string")

    expected = table.get("expected")
    error = table.get("error")
    if (expected is None) == (error is None):
        raise ConfigError(f"{where}: set exactly one of 'expected' and 'error'")

    expected_value = None
    if expected is not None:
        if not isinstance(expected, str):
            raise ConfigError(f"{where}: 'expected' must be a string")
        try:
            expected_value = from_rendering(expected)
        except RenderError as exc:
            raise ConfigError(f"{where}: 'expected' is not a canonical rendering ({exc.message})") from exc

    if error is True:
        error = ANY_ERROR
    elif isinstance(error, str):
        error = error.upper()
        if error != ANY_ERROR and error not in ParseErrorKind.__members__:
            raise ConfigError(f"{where}: unknown error kind {error!r}")
    elif error is not None:
        raise ConfigError(f"{where}: 'error' must be an error kind or true")

    return Fixture(
        input=table["input"],
        name=str(table.get("name", "")),
        expected=expected,
        expected_value=expected_value,
        error=error,
    )


def load_fixtures(path: Union[str, Path]) -> List[Fixture]:
    """Read fixtures from a TOML file."""
    path = Path(path)
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except FileNotFoundError as exc:
        raise ConfigError(f"Fixture file not found: {path}", path=str(path)) from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML: {exc}", path=str(path)) from exc

    cases = data.get("case", [])
    if not isinstance(cases, list):
        raise ConfigError("'case' must be an array of tables", path=str(path))
    return [_fixture_from_table(table, index, str(path)) for index, table in enumerate(cases)]


class FixtureRunner:
    """
    Runs fixtures against :func:`vecset.parse` and records results.
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config
        self.results: List[FixtureResult] = []

    def run_fixture(self, fixture: Fixture) -> FixtureResult:
        """
        Run a single fixture.

        Args:
            fixture: Case to execute

        Returns:
            Result of the case; a mismatch never raises
        """
        start_time = time.perf_counter()
        outcome = try_parse(fixture.input, config=self.config)
        actual = render(outcome.value) if outcome.ok else None

        if fixture.expects_failure:
            if outcome.ok:
                result, message = CaseResult.FAIL, f"Expected {fixture.error} but parsed {actual}"
            elif fixture.error not in (ANY_ERROR, outcome.error.kind.name):
                result, message = CaseResult.FAIL, f"Expected {fixture.error} but failed with {outcome.error.code}"
            else:
                result, message = CaseResult.PASS, None
        elif not outcome.ok:
            result, message = CaseResult.FAIL, f"Expected {fixture.expected} but failed: {outcome.error}"
        elif outcome.value != fixture.expected_value:
            result, message = CaseResult.FAIL, f"Expected {fixture.expected} but got {actual}"
        else:
            result, message = CaseResult.PASS, None

        fixture_result = FixtureResult(
            fixture=fixture,
            result=result,
            actual=actual,
            error=outcome.error,
            message=message,
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )
        if not fixture_result.passed:
            logger.info("Fixture %r failed: %s", fixture.label, message)
        self.results.append(fixture_result)
        return fixture_result

    def run_all(self, fixtures: Iterable[Fixture]) -> List[FixtureResult]:
        return [self.run_fixture(fixture) for fixture in fixtures]

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics of all results."""
        passed = sum(1 for r in self.results if r.passed)
        return {
            "total": len(self.results),
            "passed": passed,
            "failed": len(self.results) - passed,
            "results": [r.to_dict() for r in self.results],
        }


def run_fixture_file(path: Union[str, Path], config: Optional[ParserConfig] = None) -> List[FixtureResult]:
    """Load and run every fixture in ``path``."""
    runner = FixtureRunner(config)
    return runner.run_all(load_fixtures(path))


__all__ = [
    "ANY_ERROR",
    "CaseResult",
    "Fixture",
    "FixtureResult",
    "FixtureRunner",
    "load_fixtures",
    "run_fixture_file",
]
