"""
vecset CLI entry point.

Commands:
    - parse: Parse collection notation and print the result
    - check: Run a TOML fixture file against the parser
"""

import json
import os
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from vecset import __version__
from vecset.config import load_parser_config
from vecset.errors import ConfigError, ParseError
from vecset.harness import FixtureRunner, load_fixtures
from vecset.observability.logging import LOG_LEVEL_ENV, configure_logging
from vecset.parser import parse
from vecset.render import render, to_data

from .output import fixture_table, print_parse_error, value_tree

console = Console()
err_console = Console(stderr=True)

LOG_LEVELS = ["debug", "info", "warning", "error"]


def _fail(ctx: click.Context, message: str, code: int = 2) -> None:
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    ctx.exit(code)


@click.group(name="vecset")
@click.version_option(__version__, prog_name="vecset")
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path), help="Configuration file (vecset.toml, .vecsetrc or pyproject.toml)")
@click.option("--max-depth", type=click.IntRange(min=1), help="Deepest container nesting to accept")
@click.option("--reserved", help="Characters to reject as unknown")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), help="Log level for parser diagnostics")
@click.pass_context
def cli(ctx, config_path, max_depth, reserved, log_level):
    """Parse compact notation for nested ordered and unordered collections."""
    if log_level or os.getenv(LOG_LEVEL_ENV):
        configure_logging(log_level)

    try:
        config = load_parser_config(Path.cwd(), config_path)
        config = config.with_overrides(max_depth=max_depth, reserved=reserved)
    except ConfigError as exc:
        _fail(ctx, str(exc))
        return

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@cli.command("parse")
@click.argument("text")
@click.option(
    "--format", "output_format",
    type=click.Choice(["canonical", "notation", "json", "tree"]),
    default="canonical",
    help="Output format",
)
@click.pass_context
def parse_command(ctx, text, output_format):
    """Parse TEXT (use '-' to read standard input)."""
    if text == "-":
        text = sys.stdin.read()

    try:
        value = parse(text, config=ctx.obj["config"])
    except ParseError as exc:
        print_parse_error(err_console, exc, text)
        ctx.exit(1)
        return

    if output_format == "json":
        click.echo(json.dumps(to_data(value), indent=2, ensure_ascii=False))
    elif output_format == "tree":
        console.print(value_tree(value))
    else:
        click.echo(render(value, quote_leaves=output_format == "canonical"))


@cli.command("check")
@click.argument("fixtures", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json-output", is_flag=True, help="Output results as JSON")
@click.option("--failed-only", is_flag=True, help="Only list failing cases")
@click.pass_context
def check_command(ctx, fixtures, json_output, failed_only):
    """Run every case in the FIXTURES file."""
    try:
        loaded = load_fixtures(fixtures)
    except ConfigError as exc:
        _fail(ctx, str(exc))
        return

    runner = FixtureRunner(ctx.obj["config"])
    runner.run_all(loaded)
    summary = runner.get_summary()

    if json_output:
        click.echo(json.dumps(summary, indent=2, ensure_ascii=False))
    else:
        console.print(fixture_table(runner.results, show_passed=not failed_only))
        click.echo(f"{summary['passed']} passed, {summary['failed']} failed")

    if summary["failed"]:
        ctx.exit(1)


def main(argv: Optional[list] = None) -> None:
    """
    Main CLI entrypoint.

    Args:
        argv: Command-line arguments (None uses sys.argv[1:])

    Examples:
        >>> main(['parse', '[0, {1}]'])  # doctest: +SKIP
        ["0",{"1"}]
    """
    if argv is None:
        argv = sys.argv[1:]
    cli.main(args=argv, prog_name="vecset")


__all__ = ["cli", "main"]
