"""Rich renderables for ansflow command output."""

from __future__ import annotations

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from ansflow_cli.flow.models import BranchCategory, FinishAction, FinishResult, ListEntry

_SYMBOLS = {
    "done": "[green]●[/green]",
    "skipped": "[yellow]○[/yellow]",
    "pending": "[green dim]○[/green dim]",
}


class StepTracker:
    """Ordered steps with a status each, rendered as a Rich tree."""

    def __init__(self, title: str):
        self.title = title
        self.steps: list[dict[str, str]] = []

    def add(self, key: str, label: str) -> None:
        if key not in [s["key"] for s in self.steps]:
            self.steps.append({"key": key, "label": label, "status": "pending", "detail": ""})

    def complete(self, key: str, detail: str = "") -> None:
        self._update(key, "done", detail)

    def skip(self, key: str, detail: str = "") -> None:
        self._update(key, "skipped", detail)

    def status(self, key: str) -> str | None:
        for step in self.steps:
            if step["key"] == key:
                return step["status"]
        return None

    def _update(self, key: str, status: str, detail: str) -> None:
        for step in self.steps:
            if step["key"] == key:
                step["status"] = status
                if detail:
                    step["detail"] = detail
                return
        self.steps.append({"key": key, "label": key, "status": status, "detail": detail})

    def render(self) -> Tree:
        tree = Tree(f"[cyan]{self.title}[/cyan]", guide_style="grey50")
        for step in self.steps:
            symbol = _SYMBOLS.get(step["status"], " ")
            detail = step["detail"].strip()
            if step["status"] == "pending":
                text = f"{step['label']} ({detail})" if detail else step["label"]
                tree.add(f"{symbol} [bright_black]{text}[/bright_black]")
            elif detail:
                tree.add(f"{symbol} [white]{step['label']}[/white] [bright_black]({detail})[/bright_black]")
            else:
                tree.add(f"{symbol} [white]{step['label']}[/white]")
        return tree


def _finish_labels(result: FinishResult) -> list[tuple[FinishAction, str]]:
    branch = escape(result.branch.name)
    target = escape(result.target)
    remote = escape(result.remote or "origin")
    labels = [
        (FinishAction.FETCH, f"Fetch '{target}' from '{remote}'"),
        (FinishAction.MERGE, f"Merge '{branch}' into '{target}'"),
        (FinishAction.TAG, f"Tag release '{escape(result.tag or result.branch.suffix)}'"),
        (FinishAction.PUSH, f"Push '{target}' and tags to '{remote}'"),
        (FinishAction.DELETE_REMOTE, f"Delete '{remote}/{branch}'"),
        (FinishAction.DELETE_LOCAL, f"Delete local branch '{branch}'"),
    ]
    if result.branch.category is BranchCategory.FEATURE:
        feature_steps = {FinishAction.MERGE, FinishAction.DELETE_LOCAL}
        labels = [(action, label) for action, label in labels if action in feature_steps]
    return labels


def finish_tracker(result: FinishResult) -> StepTracker:
    """Summary tree listing which finish steps ran and which were skipped."""
    tracker = StepTracker(f"Finished {result.branch.category} '{escape(result.branch.suffix)}'")
    for action, label in _finish_labels(result):
        tracker.add(action, label)
        if result.did(action):
            tracker.complete(action)
        elif action is FinishAction.DELETE_LOCAL:
            tracker.skip(action, "kept")
        elif action is FinishAction.TAG and result.tag:
            tracker.skip(action, "already exists")
        else:
            tracker.skip(action)
    return tracker


def branch_table(entries: list[ListEntry], base: str | None = None) -> Table:
    """Grid of supporting branches, current branch marked with '*'."""
    table = Table.grid(padding=(0, 2))
    table.add_column(width=1)
    table.add_column()
    if base is not None:
        table.add_column(style="bright_black")
    for entry in entries:
        marker = "[green]*[/green]" if entry.is_current else " "
        name = f"[green]{escape(entry.short_name)}[/green]" if entry.is_current else escape(entry.short_name)
        row = [marker, name]
        if base is not None:
            relation = entry.relationship.describe(base) if entry.relationship else ""
            row.append(f"({escape(relation)})")
        table.add_row(*row)
    return table


__all__ = ["StepTracker", "finish_tracker", "branch_table"]
