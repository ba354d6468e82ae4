"""Unified error model for vecset.

This module provides structured error types with:
- Line numbers and column positions
- Found token information
- Human-readable suggestions
- Error codes for programmatic handling
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, Optional, Type

if TYPE_CHECKING:
    from .lexer import Token


class ParseErrorKind(Enum):
    """Every way a parse can fail."""

    UNBALANCED_BRACKET = "UNBALANCED_BRACKET"
    MISMATCHED_CLOSER = "MISMATCHED_CLOSER"
    UNEXPECTED_COMMA = "UNEXPECTED_COMMA"
    UNEXPECTED_PAYLOAD = "UNEXPECTED_PAYLOAD"
    UNEXPECTED_END_OF_INPUT = "UNEXPECTED_END_OF_INPUT"
    UNKNOWN_CHARACTER = "UNKNOWN_CHARACTER"
    MISSING_SEPARATOR = "MISSING_SEPARATOR"
    NESTING_TOO_DEEP = "NESTING_TOO_DEEP"

    def __str__(self) -> str:
        return self.value


@dataclass
class VecsetError(Exception):
    """Base class for all vecset errors."""

    message: str
    line: Optional[int] = None
    column: Optional[int] = None
    code: str = "VECSET_ERROR"

    def __str__(self) -> str:
        """Format error message with location."""
        parts = []

        if self.line is not None:
            if self.column is not None:
                parts.append(f"Line {self.line}:{self.column}")
            else:
                parts.append(f"Line {self.line}")

        parts.append(f"[{self.code}] {self.message}")

        return " | ".join(parts)


@dataclass
class ParseError(VecsetError):
    """Syntax error raised while turning text into a value."""

    found: Optional[str] = None
    suggestion: Optional[str] = None
    code: str = "PARSE_ERROR"
    kind: Optional[ParseErrorKind] = None

    def __str__(self) -> str:
        """Format parse error with the offending token and a suggestion."""
        base = super().__str__()
        details = []

        if self.found:
            details.append(f"Found: {self.found}")

        if self.suggestion:
            details.append(f"Suggestion: {self.suggestion}")

        if details:
            return base + "\n  " + "\n  ".join(details)

        return base


@dataclass
class UnbalancedBracketError(ParseError):
    """A container was left open, or a closer had nothing to close."""

    code: str = "UNBALANCED_BRACKET"
    kind: ParseErrorKind = ParseErrorKind.UNBALANCED_BRACKET


@dataclass
class MismatchedCloserError(ParseError):
    """A closer does not match the innermost open container."""

    code: str = "MISMATCHED_CLOSER"
    kind: ParseErrorKind = ParseErrorKind.MISMATCHED_CLOSER


@dataclass
class UnexpectedCommaError(ParseError):
    code: str = "UNEXPECTED_COMMA"
    kind: ParseErrorKind = ParseErrorKind.UNEXPECTED_COMMA


@dataclass
class UnexpectedPayloadError(ParseError):
    code: str = "UNEXPECTED_PAYLOAD"
    kind: ParseErrorKind = ParseErrorKind.UNEXPECTED_PAYLOAD


@dataclass
class UnexpectedEndOfInputError(ParseError):
    code: str = "UNEXPECTED_END_OF_INPUT"
    kind: ParseErrorKind = ParseErrorKind.UNEXPECTED_END_OF_INPUT


@dataclass
class UnknownCharacterError(ParseError):
    code: str = "UNKNOWN_CHARACTER"
    kind: ParseErrorKind = ParseErrorKind.UNKNOWN_CHARACTER


@dataclass
class MissingSeparatorError(ParseError):
    """A container opened right after a completed value with no comma between."""

    code: str = "MISSING_SEPARATOR"
    kind: ParseErrorKind = ParseErrorKind.MISSING_SEPARATOR


@dataclass
class NestingTooDeepError(ParseError):
    """Input nests containers deeper than the configured limit."""

    limit: Optional[int] = None
    code: str = "NESTING_TOO_DEEP"
    kind: ParseErrorKind = ParseErrorKind.NESTING_TOO_DEEP


@dataclass
class TreeCompositionError(VecsetError):
    """A node was attached somewhere the tree does not allow."""

    code: str = "TREE_COMPOSITION_ERROR"


@dataclass
class ConfigError(VecsetError):
    """Invalid configuration file or value."""

    path: Optional[str] = None
    code: str = "CONFIG_ERROR"

    def __str__(self) -> str:
        base = super().__str__()
        if self.path:
            return f"File: {self.path} | {base}"
        return base


@dataclass
class RenderError(VecsetError):
    """A canonical rendering could not be read back into a value."""

    code: str = "RENDER_ERROR"


_ERROR_CLASSES: Dict[ParseErrorKind, Type[ParseError]] = {
    ParseErrorKind.UNBALANCED_BRACKET: UnbalancedBracketError,
    ParseErrorKind.MISMATCHED_CLOSER: MismatchedCloserError,
    ParseErrorKind.UNEXPECTED_COMMA: UnexpectedCommaError,
    ParseErrorKind.UNEXPECTED_PAYLOAD: UnexpectedPayloadError,
    ParseErrorKind.UNEXPECTED_END_OF_INPUT: UnexpectedEndOfInputError,
    ParseErrorKind.UNKNOWN_CHARACTER: UnknownCharacterError,
    ParseErrorKind.MISSING_SEPARATOR: MissingSeparatorError,
    ParseErrorKind.NESTING_TOO_DEEP: NestingTooDeepError,
}


def error_class_for(kind: ParseErrorKind) -> Type[ParseError]:
    return _ERROR_CLASSES[kind]


def create_parse_error(
    kind: ParseErrorKind,
    message: str,
    *,
    token: Optional["Token"] = None,
    line: Optional[int] = None,
    column: Optional[int] = None,
    suggestion: Optional[str] = None,
    **extra,
) -> ParseError:
    """Create the parse error subclass for ``kind`` positioned at ``token``."""
    if token is not None:
        line = token.line if line is None else line
        column = token.column if column is None else column
    return _ERROR_CLASSES[kind](
        message=message,
        line=line,
        column=column,
        found=repr(token.value) if token is not None else None,
        suggestion=suggestion,
        **extra,
    )


__all__ = [
    "ParseErrorKind",
    "VecsetError",
    "ParseError",
    "UnbalancedBracketError",
    "MismatchedCloserError",
    "UnexpectedCommaError",
    "UnexpectedPayloadError",
    "UnexpectedEndOfInputError",
    "UnknownCharacterError",
    "MissingSeparatorError",
    "NestingTooDeepError",
    "TreeCompositionError",
    "ConfigError",
    "RenderError",
    "error_class_for",
    "create_parse_error",
]
