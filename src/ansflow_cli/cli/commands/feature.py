"""``ansflow feature`` command."""

from __future__ import annotations

from typing import Optional

import typer

from ansflow_cli.cli.commands.branches import dispatch
from ansflow_cli.cli.helpers import flow_errors
from ansflow_cli.core.git_gateway import GitGateway
from ansflow_cli.flow.lifecycle import FeatureLifecycle

FEATURE_USAGE = (
    "usage: ansflow feature [list] [-v]\n"
    "       ansflow feature start <name> [<baseBranch>]\n"
    "       ansflow feature finish [-k] <name|nameprefix> [<targetBranch>]"
)


def feature(
    action: str = typer.Argument("list", help="The action to perform (start, finish, list)"),
    name: Optional[str] = typer.Argument(None, help="The feature branch name"),
    branch: Optional[str] = typer.Argument(
        None, help="Base branch for start, target branch for finish"
    ),
    keep: bool = typer.Option(False, "--keep", "-k", help="Keep branch after performing finish"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show how each branch relates to production"),
) -> None:
    """Manage your feature branches."""
    with flow_errors(FEATURE_USAGE):
        dispatch(
            FeatureLifecycle(GitGateway()),
            action,
            name,
            branch=branch,
            keep=keep,
            verbose=verbose,
        )


__all__ = ["feature", "FEATURE_USAGE"]
