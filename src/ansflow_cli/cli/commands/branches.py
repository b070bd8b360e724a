"""Action dispatch and output shared by ``feature`` and ``release``."""

from __future__ import annotations

from rich.markup import escape

from ansflow_cli.cli.helpers import console, print_plain
from ansflow_cli.cli.ui import branch_table, finish_tracker
from ansflow_cli.core.errors import UnknownSubcommandError
from ansflow_cli.flow.lifecycle import FinishOptions, SupportingBranchLifecycle
from ansflow_cli.flow.models import BranchCategory, FinishAction, FinishResult, StartResult

ACTIONS = ("start", "finish", "list")


def dispatch(
    lifecycle: SupportingBranchLifecycle,
    action: str,
    name: str | None,
    *,
    branch: str | None = None,
    keep: bool = False,
    push: bool = False,
    verbose: bool = False,
) -> None:
    """Run one lifecycle action and print its outcome.

    ``branch`` is the start base or the finish target override.
    """
    lifecycle.inspector.require_flow_initialized()

    if action == "start":
        render_start(lifecycle.start(name, branch))
    elif action == "finish":
        options = FinishOptions(keep=keep, push=push, target=branch)
        render_finish(lifecycle.finish(name, options))
    elif action == "list":
        render_list(lifecycle, verbose)
    else:
        raise UnknownSubcommandError(action)


def render_start(result: StartResult) -> None:
    branch = result.branch
    name = escape(branch.name)
    console.print(f"Switched to a new branch '{name}'")
    console.print()
    console.print("Summary of actions:")
    console.print(f"- A new branch '{name}' was created, based on '{escape(branch.base)}'")
    console.print(f"- You are now on branch '{name}'")
    console.print()
    if branch.category is BranchCategory.RELEASE:
        console.print("Follow-up actions:")
        console.print("- Bump the version number now!")
        console.print("- Start committing last-minute fixes in preparing your release")
        console.print("When done, run:")
    else:
        console.print("Now, start committing on your feature. When done, use:")
    console.print()
    print_plain(f"    ansflow {branch.category} finish {branch.suffix}")
    console.print()


def render_finish(result: FinishResult) -> None:
    branch = result.branch
    console.print(finish_tracker(result).render())
    console.print()
    if result.did(FinishAction.DELETE_LOCAL):
        console.print(f"Deleted branch {escape(branch.name)} (was {escape(branch.commit)}).")
    else:
        console.print(f"Branch '{escape(branch.name)}' is still available (at {escape(branch.commit)}).")
    console.print(f"You are now on branch '{escape(result.target)}'")


def render_list(lifecycle: SupportingBranchLifecycle, verbose: bool) -> None:
    entries = lifecycle.list(verbose=verbose)
    category = lifecycle.category
    if not entries:
        console.print(f"No {category} branches exist.")
        console.print()
        console.print(f"You can start a new {category} branch with:")
        console.print()
        print_plain(f"    ansflow {category} start <name>")
        console.print()
        return
    base = lifecycle.inspector.master_branch() if verbose else None
    console.print(branch_table(entries, base))


__all__ = ["ACTIONS", "dispatch", "render_start", "render_finish", "render_list"]
