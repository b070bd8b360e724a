"""CLI command modules for ansflow.

Each module exposes one command function; ``register_commands`` wires them
onto the root Typer app.
"""

from __future__ import annotations

import typer

from .feature import feature
from .init import init
from .release import release
from .version import version


def register_commands(app: typer.Typer) -> None:
    """Attach all ansflow commands to ``app``."""
    app.command()(init)
    app.command()(feature)
    app.command()(release)
    app.command()(version)


__all__ = ["register_commands"]
