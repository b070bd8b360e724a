"""``ansflow release`` command."""

from __future__ import annotations

from typing import Optional

import typer

from ansflow_cli.cli.commands.branches import dispatch
from ansflow_cli.cli.helpers import flow_errors
from ansflow_cli.core.git_gateway import GitGateway
from ansflow_cli.flow.release import ReleaseLifecycle

RELEASE_USAGE = (
    "usage: ansflow release [list] [-v]\n"
    "       ansflow release start <version>\n"
    "       ansflow release finish [-pk] <version>"
)


def _ask_tag_message(tag: str) -> str:
    return typer.prompt(f"Enter tag message for '{tag}'", default="", show_default=False)


def release(
    action: str = typer.Argument("list", help="The action to perform (start, finish, list)"),
    name: Optional[str] = typer.Argument(None, help="The release version"),
    keep: bool = typer.Option(False, "--keep", "-k", help="Keep the release branch after finishing"),
    push: bool = typer.Option(
        False, "--push", "-p", help="Push production and tags to the remote, delete the remote release branch"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show how each branch relates to production"),
) -> None:
    """Manage your release branches."""
    with flow_errors(RELEASE_USAGE):
        dispatch(
            ReleaseLifecycle(GitGateway(), ask_tag_message=_ask_tag_message),
            action,
            name,
            keep=keep,
            push=push,
            verbose=verbose,
        )


__all__ = ["release", "RELEASE_USAGE"]
