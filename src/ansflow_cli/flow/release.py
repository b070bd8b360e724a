"""Release branches: one at a time, tagged on finish, optionally pushed.

Release finish runs fetch, tag-message prompt, merge, tag, push and remote
delete, in that order. Tagging and remote cleanup only happen after the
merge succeeded, and each is skipped when already done, so a failed finish
can simply be run again.
"""

from __future__ import annotations

import logging
import os
from typing import Callable

from ansflow_cli.core.constants import DEFAULT_REMOTE, REMOTE_ENV_VAR
from ansflow_cli.core.errors import (
    MissingTagMessageError,
    ReleaseInProgressError,
    RemoteOperationError,
    TagAlreadyExistsError,
    TagCreationError,
)
from ansflow_cli.core.git_gateway import GitGateway
from ansflow_cli.core.repo_state import RepositoryStateInspector

from .lifecycle import FinishOptions, SupportingBranchLifecycle
from .models import BranchCategory, FinishAction, FinishResult, SupportingBranch

__all__ = ["ReleaseLifecycle", "default_remote"]

logger = logging.getLogger(__name__)

TagMessagePrompt = Callable[[str], str | None]


def default_remote() -> str:
    return os.environ.get(REMOTE_ENV_VAR, "").strip() or DEFAULT_REMOTE


class ReleaseLifecycle(SupportingBranchLifecycle):
    """Release branches: forked from and merged back into production."""

    category = BranchCategory.RELEASE

    def __init__(
        self,
        git: GitGateway,
        inspector: RepositoryStateInspector | None = None,
        *,
        ask_tag_message: TagMessagePrompt | None = None,
        remote: str | None = None,
    ):
        super().__init__(git, inspector)
        self.ask_tag_message = ask_tag_message
        self.remote = remote or default_remote()
        self._tag_message: str | None = None

    def base_branch(self, explicit: str | None = None) -> str:
        return self.inspector.master_branch()

    def target_branch(self, explicit: str | None = None) -> str:
        return self.inspector.master_branch()

    def _check_can_start(self, branch: SupportingBranch) -> None:
        existing = self.inspector.local_branches(f"{branch.prefix}*")
        if existing:
            active = existing[0]
            raise ReleaseInProgressError(active, active[len(branch.prefix):])
        if self.inspector.tag_exists(branch.suffix):
            raise TagAlreadyExistsError(branch.suffix)

    def _prompt_tag_message(self, tag: str) -> str:
        message = self.ask_tag_message(tag) if self.ask_tag_message else None
        message = (message or "").strip()
        if not message:
            raise MissingTagMessageError()
        return message

    def _before_merge(self, branch: SupportingBranch, result: FinishResult, options: FinishOptions) -> None:
        self._tag_message = None
        production = result.target

        fetched = self.git.fetch(self.remote, production)
        if not fetched.succeeded:
            raise RemoteOperationError(
                f"Could not fetch branch '{production}' from {self.remote}.",
                fetched.stderr,
            )
        result.record(FinishAction.FETCH)
        result.remote = self.remote

        if not self.inspector.tag_exists(branch.suffix):
            self._tag_message = self._prompt_tag_message(branch.suffix)

    def _after_merge(self, branch: SupportingBranch, result: FinishResult, options: FinishOptions) -> None:
        tag = branch.suffix
        result.tag = tag
        if self.inspector.tag_exists(tag):
            logger.info("Tag %s already exists, not re-tagging", tag)
        else:
            message = self._tag_message or self._prompt_tag_message(tag)
            tagged = self.git.tag_annotated(tag, message)
            if not tagged.succeeded:
                raise TagCreationError(tag, tagged.stderr)
            result.record(FinishAction.TAG)
            logger.info("Tagged release %s", tag)

        if options.push:
            self._push(branch, result)

    def _push(self, branch: SupportingBranch, result: FinishResult) -> None:
        pushed = self.git.push_branch(self.remote, result.target)
        if not pushed.succeeded:
            raise RemoteOperationError(
                f"Could not push '{result.target}' to {self.remote}.",
                pushed.stderr,
            )
        tags = self.git.push_tags(self.remote)
        if not tags.succeeded:
            raise RemoteOperationError(f"Could not push tags to {self.remote}.", tags.stderr)
        result.record(FinishAction.PUSH)

        if not self.inspector.remote_branch_exists(self.remote, branch.name):
            logger.info("Remote branch %s/%s already absent", self.remote, branch.name)
            return
        deleted = self.git.delete_remote_branch(self.remote, branch.name)
        if not deleted.succeeded:
            raise RemoteOperationError(
                f"Could not delete remote branch '{self.remote}/{branch.name}'.",
                deleted.stderr,
            )
        result.record(FinishAction.DELETE_REMOTE)
