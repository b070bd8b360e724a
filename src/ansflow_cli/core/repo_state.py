"""Read-only repository queries built on the git gateway.

Nothing here is cached: the repository is shared mutable state, so every
question is answered by asking git again.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .constants import (
    CONFIG_NAMESPACE,
    DEVELOP_BRANCH_KEY,
    FEATURE_PREFIX_KEY,
    MASTER_BRANCH_KEY,
    RELEASE_PREFIX_KEY,
)
from .errors import CommitLookupError, ConfigReadError, DirtyWorkingTreeError, NotInitializedError
from .git_gateway import GitGateway

__all__ = ["BranchRelationship", "FlowConfig", "RepositoryStateInspector"]


class BranchRelationship(StrEnum):
    """How a branch tip relates to a reference branch tip."""

    IDENTICAL = "identical"
    BEHIND = "behind"
    AHEAD = "ahead"
    DIVERGED = "diverged"

    def describe(self, base: str) -> str:
        return _RELATIONSHIP_TEXT[self].format(base=base)


_RELATIONSHIP_TEXT = {
    BranchRelationship.IDENTICAL: "no commits yet",
    BranchRelationship.BEHIND: "is behind {base}, may ff",
    BranchRelationship.AHEAD: "based on latest {base}",
    BranchRelationship.DIVERGED: "may be rebased",
}


@dataclass(frozen=True)
class FlowConfig:
    """The four persisted ansflow settings."""

    master_branch: str
    develop_branch: str
    feature_prefix: str
    release_prefix: str

    def as_items(self) -> list[tuple[str, str]]:
        return [
            (MASTER_BRANCH_KEY, self.master_branch),
            (DEVELOP_BRANCH_KEY, self.develop_branch),
            (FEATURE_PREFIX_KEY, self.feature_prefix),
            (RELEASE_PREFIX_KEY, self.release_prefix),
        ]


class RepositoryStateInspector:
    """Answer questions about the repository without mutating it."""

    def __init__(self, git: GitGateway):
        self.git = git

    def is_flow_initialized(self) -> bool:
        result = self.git.config_get(MASTER_BRANCH_KEY)
        return result.succeeded and bool(result.output)

    def require_flow_initialized(self) -> None:
        if not self.is_flow_initialized():
            raise NotInitializedError()

    def is_working_tree_clean(self) -> bool:
        """No unstaged and no staged changes to tracked files."""
        return self.git.diff_quiet().succeeded and self.git.diff_cached_quiet().succeeded

    def require_clean_working_tree(self) -> None:
        if not self.is_working_tree_clean():
            raise DirtyWorkingTreeError()

    def branch_exists(self, name: str) -> bool:
        return self.git.verify_branch(name).succeeded

    def tag_exists(self, name: str) -> bool:
        result = self.git.list_tags(name)
        return result.succeeded and bool(result.output)

    def remote_branch_exists(self, remote: str, branch: str) -> bool:
        result = self.git.remote_branch_exists(remote, branch)
        return result.succeeded and bool(result.output)

    def local_branches(self, pattern: str | None = None) -> list[str]:
        return self.git.branch_names(pattern)

    def current_branch(self) -> str | None:
        """Checked-out branch name, or None when HEAD is detached."""
        result = self.git.current_branch()
        if not result.succeeded:
            return None
        return result.output or None

    def short_commit(self, ref: str) -> str | None:
        result = self.git.short_commit(ref)
        return result.output if result.succeeded else None

    def require_short_commit(self, ref: str) -> str:
        result = self.git.short_commit(ref)
        if not result.succeeded or not result.output:
            raise CommitLookupError(ref, result.stderr)
        return result.output

    def _read_key(self, key: str) -> str:
        result = self.git.config_get(key)
        value = result.output
        if not result.succeeded or not value:
            raise ConfigReadError(key, result.stderr)
        return value

    def get_prefix(self, category: str) -> str:
        return self._read_key(f"{CONFIG_NAMESPACE}.prefix.{category}")

    def master_branch(self) -> str:
        return self._read_key(MASTER_BRANCH_KEY)

    def develop_branch(self) -> str:
        return self._read_key(DEVELOP_BRANCH_KEY)

    def read_config(self) -> FlowConfig:
        return FlowConfig(
            master_branch=self.master_branch(),
            develop_branch=self.develop_branch(),
            feature_prefix=self.get_prefix("feature"),
            release_prefix=self.get_prefix("release"),
        )

    def commit_relationship(self, branch: str, base: str) -> BranchRelationship:
        """Classify ``branch`` against ``base`` using their merge-base.

        BEHIND means ``branch`` is an ancestor of ``base`` (fast-forwardable),
        AHEAD means ``base`` is an ancestor of ``branch``.
        """
        branch_commit = self.git.rev_parse(branch).output
        base_commit = self.git.rev_parse(base).output
        merge_base = self.git.merge_base(branch, base).output

        if branch_commit == base_commit:
            return BranchRelationship.IDENTICAL
        if merge_base == branch_commit:
            return BranchRelationship.BEHIND
        if merge_base == base_commit:
            return BranchRelationship.AHEAD
        return BranchRelationship.DIVERGED
