"""``ansflow version`` command."""

from __future__ import annotations

from ansflow_cli.cli.helpers import get_version, print_plain


def version() -> None:
    """Show version information."""
    print_plain(get_version())


__all__ = ["version"]
