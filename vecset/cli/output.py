"""
Output formatting for CLI operations.

This module builds the rich renderables used by the ``vecset`` commands:
value trees, fixture result tables and parse error reports.
"""

from typing import Iterable, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from vecset.errors import ParseError
from vecset.harness import FixtureResult
from vecset.render import render
from vecset.values import Leaf, OrderedCollection, Value


def _label(value: Value) -> str:
    if isinstance(value, Leaf):
        return f"[green]{escape(repr(value.text))}[/green]"
    if isinstance(value, OrderedCollection):
        return f"[bold blue]ordered[/bold blue] [dim]({len(value)})[/dim]"
    return f"[bold magenta]unordered[/bold magenta] [dim]({len(value)})[/dim]"


def value_tree(value: Value) -> Tree:
    """
    Build a rich tree mirroring ``value``.

    Unordered members are listed in canonical rendering order so the output
    is stable between runs.

    Examples:
        >>> console.print(value_tree(parse("[a, {b}]")))  # doctest: +SKIP
        ordered (2)
        ├── 'a'
        └── unordered (1)
            └── 'b'
    """
    tree = Tree(_label(value))
    pending: List[Tuple[Value, Tree]] = [(value, tree)]
    while pending:
        item, node = pending.pop()
        if isinstance(item, Leaf):
            continue
        members = item.items if isinstance(item, OrderedCollection) else sorted(item.items, key=render)
        for member in members:
            pending.append((member, node.add(_label(member))))
    return tree


def fixture_table(results: Iterable[FixtureResult], *, show_passed: bool = True) -> Table:
    """Tabulate fixture results."""
    results = list(results)
    failed = sum(1 for result in results if not result.passed)
    table = Table(title=f"Fixtures ({len(results)} run, {failed} failed)")
    table.add_column("Result", justify="center")
    table.add_column("Case", style="bold blue")
    table.add_column("Input", style="cyan")
    table.add_column("Detail")

    for result in results:
        if result.passed and not show_passed:
            continue
        status = "[green]PASS[/green]" if result.passed else "[red]FAIL[/red]"
        table.add_row(
            status,
            escape(result.fixture.label),
            escape(result.fixture.input),
            escape(result.message or ""),
        )
    return table


def caret_line(text: str, exc: ParseError) -> Optional[str]:
    """Return ``text`` with a caret under the error column, for one-line input."""
    if exc.column is None or "\n" in text.rstrip("\n"):
        return None
    source = text.rstrip("\n")
    return f"{source}\n{' ' * (exc.column - 1)}^"


def print_parse_error(console: Console, exc: ParseError, text: str) -> None:
    """Print a parse error with its location marked in the input."""
    console.print(f"[red]Error:[/red] {escape(str(exc))}")
    pointer = caret_line(text, exc)
    if pointer:
        console.print(escape(pointer), highlight=False)
