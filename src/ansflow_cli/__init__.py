"""
ansflow - a branching-workflow CLI on top of git.

Usage:
    ansflow init [-f] [-d]
    ansflow feature [list|start|finish] [name] [branch] [-k] [-v]
    ansflow release [list|start|finish] [version] [-k] [-p] [-v]
    ansflow version
"""

from __future__ import annotations

import typer
from rich.markup import escape

from ansflow_cli.cli.commands import register_commands
from ansflow_cli.cli.helpers import configure_logging, console, get_version, print_plain

__version__ = get_version()

USAGE = (
    "Available subcommands are:\n"
    "   init      Initialize a new git repo with support for the branching model.\n"
    "   feature   Manage your feature branches.\n"
    "   release   Manage your release branches.\n"
    "   version   Shows version information.\n"
    "\n"
    "Try `ansflow <subcommand> --help` for details."
)

app = typer.Typer(
    name="ansflow",
    help="Git flow customized for a production / integration branch strategy",
    add_completion=False,
    invoke_without_command=True,
)


def _version_callback(value: bool) -> None:
    if value:
        print_plain(get_version())
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Log every git invocation"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Show usage when no subcommand is provided."""
    configure_logging(debug)
    if ctx.invoked_subcommand is None:
        console.print(f"usage: ansflow <subcommand> {escape('[--debug]')}")
        console.print()
        print_plain(USAGE)
        raise typer.Exit(1)


register_commands(app)


def main():
    app()


if __name__ == "__main__":
    main()
