"""Public parsing entry points.

``parse`` runs the three stages in order (tokenizer, tree builder,
collapser) and raises a :class:`~vecset.errors.ParseError` subclass on
failure. ``try_parse`` returns a :class:`ParseOutcome` instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .builder import TreeBuilder
from .collapse import collapse
from .config import ParserConfig
from .errors import ParseError
from .lexer import Lexer
from .observability.logging import log_parse_event
from .values import Value

_DEFAULT_CONFIG = ParserConfig()


@dataclass(frozen=True)
class ParseOutcome:
    """Result of :func:`try_parse`: exactly one of ``value`` and ``error`` is set."""

    value: Optional[Value] = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Value:
        if self.error is not None:
            raise self.error
        return self.value


def parse(text: str, *, config: Optional[ParserConfig] = None) -> Value:
    """
    Parse collection notation into a value.

    Args:
        text: Source such as ``"[{a, b}, c]"``
        config: Depth limit and reserved characters (defaults apply if None)

    Returns:
        A ``Leaf``, ``OrderedCollection`` or ``UnorderedCollection``

    Raises:
        ParseError: One of its subclasses, describing the first problem found

    Example:
        ```python
        value = parse("[[0], 1]")
        render(value)  # '[["0"],"1"]'
        ```
    """
    if not isinstance(text, str):
        raise TypeError(f"parse() expects str, got {type(text).__name__}")
    config = config or _DEFAULT_CONFIG

    lexer = Lexer(text, config.reserved)
    tokens = lexer.tokenize()
    builder = TreeBuilder(
        tokens,
        max_depth=config.max_depth,
        end_position=(lexer.line, lexer.column),
    )
    try:
        arena = builder.build()
    except ParseError as exc:
        log_parse_event(
            "parse_failed",
            message=f"Parse failed: {exc.code}",
            code=exc.code,
            line=exc.line,
            column=exc.column,
            length=len(text),
        )
        raise

    value = collapse(arena)
    log_parse_event(
        "parse_succeeded",
        message="Parsed collection",
        tokens=len(tokens),
        nodes=len(arena),
        depth=builder.deepest,
    )
    return value


def try_parse(text: str, *, config: Optional[ParserConfig] = None) -> ParseOutcome:
    """Parse ``text`` and capture any parse error in the outcome."""
    try:
        return ParseOutcome(value=parse(text, config=config))
    except ParseError as exc:
        return ParseOutcome(error=exc)


def parse_to_python(text: str, *, config: Optional[ParserConfig] = None) -> Any:
    """Parse ``text`` into plain ``str``/``list``/``frozenset`` objects."""
    return parse(text, config=config).to_python()


__all__ = ["ParseOutcome", "parse", "try_parse", "parse_to_python"]
