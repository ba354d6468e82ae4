"""Text renderings of parsed values.

Two forms are produced by :func:`render`:

* canonical (default): leaves are JSON-quoted, no whitespace, unordered
  members sorted by their own rendering. This is the form fixtures compare
  against, e.g. ``[{"1","2"},"3"]``.
* notation (``quote_leaves=False``): the same shape with bare leaves, which
  parses back to an equal value as long as no leaf holds a reserved
  character.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

from .errors import RenderError
from .values import Leaf, OrderedCollection, UnorderedCollection, Value

_DECODER = json.JSONDecoder()

_DELIMITERS = {
    OrderedCollection: ('[', ']'),
    UnorderedCollection: ('{', '}'),
}

_PAIRS = {'[': ']', '{': '}'}


def _render_leaf(leaf: Leaf, quote_leaves: bool) -> str:
    if quote_leaves:
        return json.dumps(leaf.text, ensure_ascii=False)
    return leaf.text


def render(value: Value, *, quote_leaves: bool = True) -> str:
    """Render ``value`` without recursion."""
    stack: List[Tuple[Value, bool]] = [(value, False)]
    out: List[str] = []

    while stack:
        item, expanded = stack.pop()
        if isinstance(item, Leaf):
            out.append(_render_leaf(item, quote_leaves))
            continue

        members = tuple(item.items)
        if not expanded:
            stack.append((item, True))
            stack.extend((child, False) for child in reversed(members))
            continue

        split = len(out) - len(members)
        parts = out[split:]
        del out[split:]
        if isinstance(item, UnorderedCollection):
            parts.sort()
        opener, closer = _DELIMITERS[type(item)]
        out.append(opener + ",".join(parts) + closer)

    return out[0]


def from_rendering(text: str) -> Value:
    """Read a canonical rendering back into a value.

    Leaves must be JSON string literals; whitespace between tokens is
    ignored.
    """
    frames: List[Tuple[str, List[Value]]] = []
    top: Optional[Value] = None
    expecting = True
    pos = 0

    def fail(message: str) -> RenderError:
        return RenderError(message, column=pos + 1)

    while pos < len(text):
        char = text[pos]
        if char.isspace():
            pos += 1
            continue
        if top is not None:
            raise fail(f"Unexpected {char!r} after the rendered value")

        if char in _PAIRS:
            if not expecting:
                raise fail(f"Missing ',' before {char!r}")
            frames.append((char, []))
            pos += 1
            continue

        if char in (']', '}'):
            if not frames or _PAIRS[frames[-1][0]] != char:
                raise fail(f"Unmatched {char!r}")
            if expecting and frames[-1][1]:
                raise fail(f"Trailing ',' before {char!r}")
            opener, items = frames.pop()
            pos += 1
            value: Value = OrderedCollection.of(items) if opener == '[' else UnorderedCollection.of(items)
        elif char == ',':
            if expecting or not frames:
                raise fail("Unexpected ','")
            expecting = True
            pos += 1
            continue
        elif char == '"':
            if not expecting:
                raise fail("Missing ',' before string")
            try:
                decoded, pos = _DECODER.raw_decode(text, pos)
            except json.JSONDecodeError as exc:
                raise RenderError(f"Invalid string literal: {exc.msg}", column=exc.pos + 1) from exc
            value = Leaf(decoded)
        else:
            raise fail(f"Unexpected character {char!r}")

        if frames:
            frames[-1][1].append(value)
        else:
            top = value
        expecting = False

    if frames:
        raise RenderError(f"Unclosed {frames[-1][0]!r} at end of rendering", column=pos + 1)
    if top is None:
        raise RenderError("Empty rendering", column=pos + 1)
    return top


def to_data(value: Value) -> Dict[str, Any]:
    """Describe ``value`` as JSON-compatible data (used by ``vecset parse --format json``)."""
    stack: List[Tuple[Value, bool]] = [(value, False)]
    out: List[Dict[str, Any]] = []

    while stack:
        item, expanded = stack.pop()
        if isinstance(item, Leaf):
            out.append({"type": "leaf", "value": item.text})
            continue

        if not expanded:
            if isinstance(item, OrderedCollection):
                members = item.items
            else:
                members = sorted(item.items, key=render)
            stack.append((item, True))
            stack.extend((child, False) for child in reversed(members))
            continue

        split = len(out) - len(item.items)
        kind = "ordered" if isinstance(item, OrderedCollection) else "unordered"
        out[split:] = [{"type": kind, "items": out[split:]}]

    return out[0]


__all__ = ["render", "from_rendering", "to_data"]
