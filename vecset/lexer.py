"""Lexical analyzer (tokenizer) for collection notation.

Converts source text into a list of tokens for the tree builder. The lexer
never fails: characters it cannot classify become ``UNKNOWN`` tokens and the
builder decides what to do with them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import FrozenSet, List, Optional


class TokenType(Enum):
    """Token types for collection notation."""

    WHITESPACE = auto()

    # Containers
    OPEN_ORDERED = auto()
    CLOSE_ORDERED = auto()
    OPEN_UNORDERED = auto()
    CLOSE_UNORDERED = auto()

    # Punctuation
    COMMA = auto()

    # Data
    PAYLOAD = auto()

    # Special
    UNKNOWN = auto()


STRUCTURAL_CHARS = {
    '[': TokenType.OPEN_ORDERED,
    ']': TokenType.CLOSE_ORDERED,
    '{': TokenType.OPEN_UNORDERED,
    '}': TokenType.CLOSE_UNORDERED,
    ',': TokenType.COMMA,
}

OPENERS = frozenset({TokenType.OPEN_ORDERED, TokenType.OPEN_UNORDERED})
CLOSERS = frozenset({TokenType.CLOSE_ORDERED, TokenType.CLOSE_UNORDERED})


@dataclass(frozen=True)
class Token:
    """A single token with position information."""

    type: TokenType
    value: str
    line: int
    column: int
    offset: int = 0

    @property
    def is_structural(self) -> bool:
        return self.type not in (TokenType.WHITESPACE, TokenType.UNKNOWN)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


def classify(char: str, reserved: FrozenSet[str] = frozenset()) -> TokenType:
    """Classify a single character.

    Anything that is not exactly one character is ``UNKNOWN``, as is any
    character listed in ``reserved``.
    """
    if len(char) != 1 or char in reserved:
        return TokenType.UNKNOWN
    if char.isspace():
        return TokenType.WHITESPACE
    if char in STRUCTURAL_CHARS:
        return STRUCTURAL_CHARS[char]
    return TokenType.PAYLOAD


class Lexer:
    """Tokenizer for collection notation."""

    def __init__(self, source: str, reserved: str = ""):
        """Initialize lexer with source text."""
        self.source = source
        self.reserved: FrozenSet[str] = frozenset(reserved)
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

        # Pending payload run
        self._payload: List[str] = []
        self._payload_start: Optional[tuple] = None

    def peek(self, offset: int = 0) -> Optional[str]:
        """Peek at character without consuming."""
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return None

    def advance(self) -> Optional[str]:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return None

        char = self.source[self.pos]
        self.pos += 1

        if char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def add_token(self, token_type: TokenType, value: str, line: int, column: int, offset: int) -> None:
        """Add a token to the list."""
        self.tokens.append(Token(
            type=token_type,
            value=value,
            line=line,
            column=column,
            offset=offset,
        ))

    def flush_payload(self) -> None:
        """Emit the pending payload run, if any."""
        if not self._payload:
            return
        line, column, offset = self._payload_start
        self.add_token(TokenType.PAYLOAD, ''.join(self._payload), line, column, offset)
        self._payload = []
        self._payload_start = None

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source."""
        while self.pos < len(self.source):
            char = self.peek()
            line, column, offset = self.line, self.column, self.pos
            token_type = classify(char, self.reserved)

            if token_type is TokenType.PAYLOAD:
                if not self._payload:
                    self._payload_start = (line, column, offset)
                self._payload.append(char)
                self.advance()
                continue

            self.flush_payload()
            self.advance()

            # Whitespace only separates payload runs
            if token_type is TokenType.WHITESPACE:
                continue

            self.add_token(token_type, char, line, column, offset)

        self.flush_payload()
        return self.tokens


def tokenize(source: str, reserved: str = "") -> List[Token]:
    """Tokenize collection notation."""
    lexer = Lexer(source, reserved)
    return lexer.tokenize()


__all__ = ["Token", "TokenType", "Lexer", "classify", "tokenize", "STRUCTURAL_CHARS", "OPENERS", "CLOSERS"]
