"""``ansflow init`` command."""

from __future__ import annotations

import typer
from rich.markup import escape

from ansflow_cli.cli.helpers import console, flow_errors
from ansflow_cli.core.git_gateway import GitGateway
from ansflow_cli.flow.initializer import InitOptions, LifecycleInitializer


def _ask(question: str, default: str, choices: list[str] | None) -> str:
    if choices:
        console.print(f"\n[bold]{escape(question)}[/bold] - existing local branches:")
        for branch in choices:
            console.print(f"   - {escape(branch)}")
    return typer.prompt(question, default=default)


def init(
    force: bool = typer.Option(
        False, "--force", "-f", help="Force setting of ansflow branches, even if already configured"
    ),
    use_defaults: bool = typer.Option(
        False, "--default", "-d", help="Use default branch naming conventions"
    ),
) -> None:
    """Initialize a git repo with support for the ansflow branching model."""
    initializer = LifecycleInitializer(GitGateway(), ask=_ask)

    with flow_errors():
        result = initializer.initialize(InitOptions(force=force, use_defaults=use_defaults))

    if result.created_repository:
        console.print("Initialized empty git repository.")
        console.print("No branches exist yet. Base branches must be created now.")
    if result.already_initialized:
        console.print("Already initialized for ansflow.")
        console.print("To force reinitialization, use: [cyan]ansflow init -f[/cyan]")
        return

    if use_defaults:
        console.print("Using default branch names.")
    if result.initial_commit:
        console.print("Created an empty initial commit.")
    for branch in result.created_branches:
        console.print(f"Created branch '{escape(branch)}'.")
    console.print("[green]ansflow initialized successfully.[/green]")


__all__ = ["init"]
