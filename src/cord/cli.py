"""
cord CLI - Entry point.

Evaluates the expression stored in a file:

    $ cord expr.txt
    Set value [x]: 2
    [Result] 7

Variables are asked for on the terminal once each, unless given with --set.
"""

from __future__ import annotations

import logging
import platform
import sys
from dataclasses import replace
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from cord._version import get_version
from cord.core.config import CordConfig, load_config
from cord.core.errors import CordError
from cord.core.expression_lang.calculator import parse_source
from cord.core.expression_lang.evaluator import evaluate
from cord.core.expression_lang.floats import format_single
from cord.core.ir.expressions import render

logger = logging.getLogger(__name__)

USAGE = "usage: cord [filename]"

app = typer.Typer(
    help="cord – evaluate an arithmetic expression stored in a file",
    add_completion=False,
)

console = Console()


class PromptValueProvider:
    """Asks for variable values on the terminal.

    Answers given up front (``--set x=2``) are returned without prompting.
    """

    def __init__(self, preset: dict[str, str] | None = None) -> None:
        self.preset = dict(preset or {})

    def request(self, identifier: str) -> str:
        if identifier in self.preset:
            return self.preset[identifier]
        try:
            return typer.prompt(f"Set value [{identifier}]")
        except typer.Abort as e:
            raise EOFError("input closed") from e


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"cord version {get_version()}")
        typer.echo(
            f"Python {platform.python_implementation()} {platform.python_version()}"
            f" on {platform.system()} {platform.machine()}"
        )
        raise typer.Exit()


def _parse_assignments(assignments: list[str]) -> dict[str, str]:
    """Turn ``NAME=VALUE`` pairs into a dict."""
    preset: dict[str, str] = {}
    for item in assignments:
        name, sep, value = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise typer.BadParameter(f"expected NAME=VALUE, got {item!r}", param_hint="--set")
        preset[name] = value.strip()
    return preset


def _configure_logging(verbose: bool, config: CordConfig) -> None:
    if not verbose and config.log_level == CordConfig.log_level:
        return
    level = "DEBUG" if verbose else config.log_level
    # Logs go to stderr; stdout carries the prompts and the result
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )


@app.command()
def main(
    file: Path | None = typer.Argument(  # noqa: B008
        None,
        help="File containing the expression",
        show_default=False,
    ),
    assignments: list[str] | None = typer.Option(  # noqa: B008
        None,
        "--set",
        "-s",
        help="Give a variable's value up front, e.g. --set x=2 (repeatable)",
    ),
    tree: bool = typer.Option(
        False,
        "--tree",
        help="Also print the parsed expression tree",
    ),
    strict: bool | None = typer.Option(
        None,
        "--strict/--lenient",
        help="Reject or ignore tokens after a complete expression (default: from config)",
        show_default=False,
    ),
    config_path: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Config file (default: ./cord.toml when present)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log each pipeline stage to stderr",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """Evaluate the expression in FILE and print the result."""
    if file is None:
        console.print(USAGE, markup=False, highlight=False)
        raise typer.Exit(1)
    if not file.exists():
        console.print(f"file does not exist. {USAGE}", markup=False, highlight=False)
        raise typer.Exit(1)

    preset = _parse_assignments(assignments or [])

    try:
        config = load_config(config_path)
    except CordError as e:
        console.print(f"[red]Configuration error:[/red] {escape(e.message)}")
        raise typer.Exit(1)

    _configure_logging(verbose, config)
    if strict is not None:
        config = replace(config, allow_trailing=not strict)

    try:
        source = file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Cannot read {escape(str(file))}:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    logger.debug("Read %d characters from %s", len(source), file)

    try:
        expr = parse_source(source, PromptValueProvider(preset), config)
        if tree:
            console.print(f"[Tree] {render(expr)}", markup=False, highlight=False)
        result = evaluate(expr)
    except CordError as e:
        kind = type(e).__name__
        console.print(f"[red]{kind}:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(f"[Result] {format_single(result)}", markup=False, highlight=False)


if __name__ == "__main__":
    app()
