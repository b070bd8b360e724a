"""Data types for the supporting-branch lifecycle.

Defines the branch categories, the per-suffix lifecycle states, and the
result records returned by start/finish/list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from ansflow_cli.core.repo_state import BranchRelationship


class BranchCategory(StrEnum):
    """Supporting branch categories."""

    FEATURE = "feature"
    RELEASE = "release"

    @property
    def merges_into_develop(self) -> bool:
        """Features land on the integration branch, releases on production."""
        return self is BranchCategory.FEATURE


class BranchState(StrEnum):
    """Lifecycle of one supporting branch suffix."""

    ABSENT = "absent"
    ACTIVE = "active"
    MERGED = "merged"
    DELETED = "deleted"
    KEPT = "kept"


class FinishAction(StrEnum):
    """Side effects a finish may perform, in execution order."""

    FETCH = "fetch"
    MERGE = "merge"
    TAG = "tag"
    PUSH = "push"
    DELETE_REMOTE = "delete_remote"
    DELETE_LOCAL = "delete_local"


@dataclass(frozen=True)
class SupportingBranch:
    """One in-progress unit of work."""

    category: BranchCategory
    suffix: str
    prefix: str
    base: str
    commit: str | None = None

    @property
    def name(self) -> str:
        return f"{self.prefix}{self.suffix}"


@dataclass(frozen=True)
class StartResult:
    branch: SupportingBranch
    state: BranchState = BranchState.ACTIVE


@dataclass
class FinishResult:
    """What a finish actually did."""

    branch: SupportingBranch
    target: str
    actions: list[FinishAction] = field(default_factory=list)
    tag: str | None = None
    remote: str | None = None
    state: BranchState = BranchState.ACTIVE

    def record(self, action: FinishAction) -> None:
        self.actions.append(action)

    def did(self, action: FinishAction) -> bool:
        return action in self.actions


@dataclass(frozen=True)
class ListEntry:
    short_name: str
    full_name: str
    is_current: bool = False
    relationship: BranchRelationship | None = None


__all__ = [
    "BranchCategory",
    "BranchState",
    "FinishAction",
    "SupportingBranch",
    "StartResult",
    "FinishResult",
    "ListEntry",
]
