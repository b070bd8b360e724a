"""Start/finish/list state machine for prefixed supporting branches.

Each public operation validates its preconditions against the live
repository before its first mutating git call, and raises a ``FlowError``
subclass on the first failed step. Completed steps are never rolled back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ansflow_cli.core.errors import (
    BranchAlreadyExistsError,
    BranchCreationError,
    BranchDeletionError,
    BranchNotFoundError,
    MergeFailedError,
    MissingArgumentError,
)
from ansflow_cli.core.git_gateway import GitGateway
from ansflow_cli.core.repo_state import RepositoryStateInspector

from .models import (
    BranchCategory,
    BranchState,
    FinishAction,
    FinishResult,
    ListEntry,
    StartResult,
    SupportingBranch,
)
from .transitions import BranchStateMachine

__all__ = ["FinishOptions", "SupportingBranchLifecycle", "FeatureLifecycle"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FinishOptions:
    keep: bool = False
    push: bool = False
    target: str | None = None


class SupportingBranchLifecycle:
    """Lifecycle shared by all supporting branch categories.

    Subclasses set ``category`` and override the ``_check_can_start``,
    ``_before_merge`` and ``_after_merge`` hooks.
    """

    category: BranchCategory

    def __init__(self, git: GitGateway, inspector: RepositoryStateInspector | None = None):
        self.git = git
        self.inspector = inspector or RepositoryStateInspector(git)

    # Naming

    def prefix(self) -> str:
        return self.inspector.get_prefix(self.category)

    def normalize_suffix(self, name: str | None, prefix: str) -> str:
        """Accept both ``demo`` and ``feature/demo``; reject empty names."""
        suffix = (name or "").strip()
        if suffix.startswith(prefix):
            suffix = suffix[len(prefix):]
        if not suffix:
            raise MissingArgumentError("name")
        return suffix

    def base_branch(self, explicit: str | None = None) -> str:
        return explicit or self.inspector.master_branch()

    def target_branch(self, explicit: str | None = None) -> str:
        if explicit:
            return explicit
        if self.category.merges_into_develop:
            return self.inspector.develop_branch()
        return self.inspector.master_branch()

    # start

    def start(self, name: str | None, base: str | None = None) -> StartResult:
        """Create ``<prefix><name>`` from its base branch and check it out."""
        prefix = self.prefix()
        suffix = self.normalize_suffix(name, prefix)
        branch = SupportingBranch(
            category=self.category,
            suffix=suffix,
            prefix=prefix,
            base=self.base_branch(base),
        )

        self._check_can_start(branch)
        if self.inspector.branch_exists(branch.name):
            raise BranchAlreadyExistsError(branch.name)

        result = self.git.create_branch(branch.name, branch.base)
        if not result.succeeded:
            raise BranchCreationError(branch.name, result.stderr)

        machine = BranchStateMachine()
        machine.start()
        logger.info("Started %s branch %s from %s", self.category, branch.name, branch.base)
        return StartResult(branch=branch, state=machine.state)

    def _check_can_start(self, branch: SupportingBranch) -> None:
        """Category-specific start preconditions."""

    # finish

    def finish(self, name: str | None, options: FinishOptions | None = None) -> FinishResult:
        """Merge the supporting branch into its target and clean up."""
        options = options or FinishOptions()
        prefix = self.prefix()
        suffix = self.normalize_suffix(name, prefix)
        full_name = f"{prefix}{suffix}"

        if not self.inspector.branch_exists(full_name):
            raise BranchNotFoundError(full_name, hint=f"ansflow {self.category} list")
        self.inspector.require_clean_working_tree()

        target = self.target_branch(options.target)
        # Capture before deletion makes the tip unreachable by name.
        commit = self.inspector.require_short_commit(full_name)
        branch = SupportingBranch(
            category=self.category,
            suffix=suffix,
            prefix=prefix,
            base=self.base_branch(),
            commit=commit,
        )
        result = FinishResult(branch=branch, target=target)
        machine = BranchStateMachine(BranchState.ACTIVE)

        self._before_merge(branch, result, options)
        self._merge(branch, target)
        result.record(FinishAction.MERGE)
        machine.merge()
        result.state = machine.state
        logger.info("Merged %s into %s", branch.name, target)

        self._after_merge(branch, result, options)

        if options.keep:
            machine.keep()
        else:
            deleted = self.git.delete_local_branch(branch.name)
            if not deleted.succeeded:
                raise BranchDeletionError(branch.name, deleted.stderr)
            result.record(FinishAction.DELETE_LOCAL)
            machine.delete()
            logger.info("Deleted local branch %s (was %s)", branch.name, commit)
        result.state = machine.state

        return result

    def _merge(self, branch: SupportingBranch, target: str) -> None:
        checkout = self.git.checkout(target)
        if not checkout.succeeded:
            raise MergeFailedError(branch.name, target, checkout.stderr)
        merged = self.git.merge_no_ff(branch.name)
        if not merged.succeeded:
            raise MergeFailedError(branch.name, target, merged.stderr or merged.stdout)

    def _before_merge(self, branch: SupportingBranch, result: FinishResult, options: FinishOptions) -> None:
        """Hook run after validation, before the target checkout."""

    def _after_merge(self, branch: SupportingBranch, result: FinishResult, options: FinishOptions) -> None:
        """Hook run after a successful merge, before local deletion."""

    # list

    def list(self, verbose: bool = False) -> list[ListEntry]:
        """Local branches of this category, in git's listing order."""
        prefix = self.prefix()
        names = self.inspector.local_branches(f"{prefix}*")
        if not names:
            return []

        current = self.inspector.current_branch()
        production = self.inspector.master_branch() if verbose else None

        entries: list[ListEntry] = []
        for full_name in names:
            relationship = None
            if production is not None:
                relationship = self.inspector.commit_relationship(full_name, production)
            entries.append(
                ListEntry(
                    short_name=full_name[len(prefix):],
                    full_name=full_name,
                    is_current=full_name == current,
                    relationship=relationship,
                )
            )
        return entries


class FeatureLifecycle(SupportingBranchLifecycle):
    """Feature branches: forked from production, merged into integration."""

    category = BranchCategory.FEATURE
