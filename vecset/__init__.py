"""
vecset: a parser for compact collection notation.

The notation describes nested, heterogeneous collections. Square brackets
delimit ordered collections, braces delimit unordered ones, commas separate
elements and every leaf is kept as a string::

    >>> from vecset import parse, render
    >>> render(parse("[{a, b, a}, [1, 2]]"))
    '[{"a","b"},["1","2"]]'

The code is organised into several modules:

* ``lexer`` – turns text into tokens.  It never fails; unknown characters
  become tokens the builder rejects.
* ``builder`` – an iterative recursive-descent tree builder that enforces
  the grammar and produces a node arena.
* ``collapse`` – reduces the arena to ``Leaf``/``OrderedCollection``/
  ``UnorderedCollection`` values (``values``).
* ``render`` – canonical and notation renderings, and reading canonical
  renderings back.
* ``harness`` – runs TOML fixtures of inputs and expected renderings.
* ``cli`` – the ``vecset`` command line interface.
"""

import re
from pathlib import Path
from importlib import metadata as _metadata

from .config import ParserConfig, load_parser_config
from .errors import (
    ParseError,
    ParseErrorKind,
    VecsetError,
    UnbalancedBracketError,
    MismatchedCloserError,
    UnexpectedCommaError,
    UnexpectedPayloadError,
    UnexpectedEndOfInputError,
    UnknownCharacterError,
    MissingSeparatorError,
    NestingTooDeepError,
)
from .parser import ParseOutcome, parse, parse_to_python, try_parse
from .render import from_rendering, render
from .values import Leaf, OrderedCollection, UnorderedCollection, Value


def _local_version() -> str | None:
    pyproject = Path(__file__).resolve().parents[1] / "pyproject.toml"
    try:
        text = pyproject.read_text(encoding="utf-8")
    except OSError:  # pragma: no cover - installed without the source tree
        return None
    match = re.search(r"^version\s*=\s*\"([^\"]+)\"", text, flags=re.MULTILINE)
    return match.group(1) if match else None


try:  # pragma: no cover - metadata fallback for editable installs
    __version__ = _metadata.version("vecset")
except _metadata.PackageNotFoundError:  # pragma: no cover - source tree
    __version__ = _local_version() or "0.1.0"

__all__ = [
    "__version__",
    "parse",
    "try_parse",
    "parse_to_python",
    "ParseOutcome",
    "render",
    "from_rendering",
    "Leaf",
    "OrderedCollection",
    "UnorderedCollection",
    "Value",
    "ParserConfig",
    "load_parser_config",
    "VecsetError",
    "ParseError",
    "ParseErrorKind",
    "UnbalancedBracketError",
    "MismatchedCloserError",
    "UnexpectedCommaError",
    "UnexpectedPayloadError",
    "UnexpectedEndOfInputError",
    "UnknownCharacterError",
    "MissingSeparatorError",
    "NestingTooDeepError",
]
