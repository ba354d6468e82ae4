"""Tree builder for collection notation.

Consumes the token list produced by :mod:`vecset.lexer` and builds a node
arena. The grammar is parsed as if the whole document sat inside one
implicit ordered container; the collapser later unwraps that level.

Parsing is iterative: a cursor walks the immutable token list and the
current container is tracked by arena index, so deeply nested input never
grows the Python stack. Nesting is still bounded by ``max_depth``.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence, Tuple

from .config import DEFAULT_MAX_DEPTH
from .errors import ParseErrorKind, ParseError, create_parse_error
from .lexer import Token, TokenType
from .nodes import ROOT_INDEX, NodeArena, NodeKind

_CLOSES: Dict[TokenType, NodeKind] = {
    TokenType.CLOSE_ORDERED: NodeKind.ORDERED,
    TokenType.CLOSE_UNORDERED: NodeKind.UNORDERED,
}

_OPENS: Dict[TokenType, NodeKind] = {
    TokenType.OPEN_ORDERED: NodeKind.ORDERED,
    TokenType.OPEN_UNORDERED: NodeKind.UNORDERED,
}

_CLOSER_FOR = {
    NodeKind.ORDERED: ']',
    NodeKind.UNORDERED: '}',
}


class TreeBuilder:
    """Build a node arena from tokens, enforcing grammar and balance rules."""

    def __init__(
        self,
        tokens: Sequence[Token],
        *,
        max_depth: Optional[int] = DEFAULT_MAX_DEPTH,
        end_position: Optional[Tuple[int, int]] = None,
    ):
        self.tokens = tokens
        self.pos = 0
        self.max_depth = max_depth
        self.end_position = end_position

        self.arena = NodeArena()
        self.current = self.arena.add(NodeKind.ORDERED, ROOT_INDEX, implicit=True)

        # Explicit containers only; the implicit wrapper is not counted
        self.ordered_depth = 0
        self.unordered_depth = 0
        self.expecting_value = True
        self.deepest = 0

        self._handlers: Dict[TokenType, Callable[[Token], None]] = {
            TokenType.OPEN_ORDERED: self._open,
            TokenType.OPEN_UNORDERED: self._open,
            TokenType.CLOSE_ORDERED: self._close,
            TokenType.CLOSE_UNORDERED: self._close,
            TokenType.COMMA: self._comma,
            TokenType.PAYLOAD: self._payload,
            TokenType.WHITESPACE: self._whitespace,
            TokenType.UNKNOWN: self._unknown,
        }

    # ====================================================================
    # Token Management
    # ====================================================================

    def peek(self, offset: int = 0) -> Optional[Token]:
        """Peek at token without consuming."""
        pos = self.pos + offset
        if pos < len(self.tokens):
            return self.tokens[pos]
        return None

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    @property
    def depth(self) -> int:
        return self.ordered_depth + self.unordered_depth

    def error(self, kind: ParseErrorKind, message: str, token: Optional[Token] = None, **kwargs) -> ParseError:
        return create_parse_error(kind, message, token=token, **kwargs)

    # ====================================================================
    # Entry point
    # ====================================================================

    def build(self) -> NodeArena:
        """Run the transition table over every token and validate the end state."""
        while self.peek() is not None:
            token = self.advance()
            self._handlers[token.type](token)
        self._finish()
        return self.arena

    # ====================================================================
    # Transitions
    # ====================================================================

    def _open(self, token: Token) -> None:
        if not self.expecting_value:
            raise self.error(
                ParseErrorKind.MISSING_SEPARATOR,
                f"Unexpected {token.value!r} after a complete value",
                token,
                suggestion="Separate values with ','",
            )
        if self.max_depth is not None and self.depth + 1 > self.max_depth:
            raise self.error(
                ParseErrorKind.NESTING_TOO_DEEP,
                f"Nesting exceeds the limit of {self.max_depth} levels",
                token,
                limit=self.max_depth,
                suggestion="Raise max_depth in the parser configuration if this input is trusted",
            )

        kind = _OPENS[token.type]
        self.current = self.arena.add(kind, self.current, token=token)
        if kind is NodeKind.ORDERED:
            self.ordered_depth += 1
        else:
            self.unordered_depth += 1
        self.deepest = max(self.deepest, self.depth)
        self.expecting_value = True

    def _close(self, token: Token) -> None:
        node = self.arena[self.current]
        if node.implicit:
            raise self.error(
                ParseErrorKind.UNBALANCED_BRACKET,
                f"Unmatched {token.value!r} with no open container",
                token,
                suggestion="Remove the closer or add the matching opener",
            )

        kind = _CLOSES[token.type]
        if node.kind is not kind:
            opener = node.token
            raise self.error(
                ParseErrorKind.MISMATCHED_CLOSER,
                f"Unexpected {token.value!r} while {opener.value!r} from {opener.line}:{opener.column} is open",
                token,
                suggestion=f"Close the innermost container with {_CLOSER_FOR[node.kind]!r}",
            )

        self.current = self.arena.parent_of(self.current)
        if kind is NodeKind.ORDERED:
            self.ordered_depth -= 1
        else:
            self.unordered_depth -= 1
        self.expecting_value = False

    def _comma(self, token: Token) -> None:
        if self.depth == 0:
            raise self.error(
                ParseErrorKind.UNEXPECTED_COMMA,
                "Comma outside of any container",
                token,
                suggestion="Wrap multiple values in '[...]' or '{...}'",
            )
        if self.expecting_value:
            raise self.error(
                ParseErrorKind.UNEXPECTED_COMMA,
                "Comma where a value was expected",
                token,
            )
        self.expecting_value = True

    def _payload(self, token: Token) -> None:
        if not self.expecting_value:
            raise self.error(
                ParseErrorKind.UNEXPECTED_PAYLOAD,
                f"Unexpected value {token.value!r}",
                token,
                suggestion="Separate values with ','",
            )
        self.arena.add(NodeKind.LEAF, self.current, payload=token.value, token=token)
        self.expecting_value = False

    def _whitespace(self, token: Token) -> None:
        # The lexer drops whitespace; tolerate hand-built token lists
        return None

    def _unknown(self, token: Token) -> None:
        raise self.error(
            ParseErrorKind.UNKNOWN_CHARACTER,
            f"Unknown character {token.value!r}",
            token,
        )

    def _finish(self) -> None:
        line, column = self.end_position or (None, None)
        if self.ordered_depth != 0 or self.unordered_depth != 0:
            opener = self.arena[self.current].token
            raise self.error(
                ParseErrorKind.UNBALANCED_BRACKET,
                f"Unclosed {opener.value!r} at end of input",
                opener,
                suggestion=f"Add {_CLOSER_FOR[self.arena[self.current].kind]!r}",
            )
        if self.expecting_value:
            raise self.error(
                ParseErrorKind.UNEXPECTED_END_OF_INPUT,
                "Input ended where a value was expected",
                line=line,
                column=column,
            )


def build_tree(
    tokens: Sequence[Token],
    *,
    max_depth: Optional[int] = DEFAULT_MAX_DEPTH,
    end_position: Optional[Tuple[int, int]] = None,
) -> NodeArena:
    """Build a node arena from ``tokens``."""
    return TreeBuilder(tokens, max_depth=max_depth, end_position=end_position).build()


__all__ = ["TreeBuilder", "build_tree"]
