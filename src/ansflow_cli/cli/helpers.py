"""Shared console, error rendering and logging setup for CLI commands."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from importlib.metadata import PackageNotFoundError, version
from typing import Iterator

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ansflow_cli.core.errors import FlowError, MissingArgumentError, UnknownSubcommandError

console = Console()
err_console = Console(stderr=True)

PACKAGE_NAME = "ansflow"


def get_version() -> str:
    try:
        return version(PACKAGE_NAME)
    except PackageNotFoundError:
        return "0.0.0+unknown"


def configure_logging(debug: bool) -> None:
    """Route ``ansflow_cli`` logs to stderr; DEBUG shows every git call."""
    logger = logging.getLogger("ansflow_cli")
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=err_console, show_path=False, markup=False))
    logger.propagate = False


def print_plain(*lines: str) -> None:
    """Print text verbatim (no markup, no highlighting)."""
    for line in lines:
        console.print(line, markup=False, highlight=False)


def render_flow_error(exc: FlowError, usage: str | None = None) -> None:
    console.print(f"[red]Error:[/red] {escape(exc.message)}")
    if exc.detail:
        console.print(f"[dim]{escape(exc.detail)}[/dim]")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
    if usage and isinstance(exc, (MissingArgumentError, UnknownSubcommandError)):
        print_plain(usage)


@contextmanager
def flow_errors(usage: str | None = None) -> Iterator[None]:
    """Turn a ``FlowError`` into a rendered message and exit status 1."""
    try:
        yield
    except FlowError as exc:
        render_flow_error(exc, usage)
        raise typer.Exit(1)


__all__ = [
    "console",
    "err_console",
    "get_version",
    "configure_logging",
    "print_plain",
    "render_flow_error",
    "flow_errors",
]
