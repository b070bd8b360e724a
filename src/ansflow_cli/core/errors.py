"""Exception hierarchy for ansflow branch lifecycle failures.

Every error is terminal for the current invocation. Lifecycle code raises
these; the CLI layer renders them and exits with status 1.
"""

from __future__ import annotations


class FlowError(Exception):
    """Base exception for ansflow errors.

    Attributes:
        detail: Raw diagnostic text from git (usually stderr), if any.
        hint: Next command the user should run to fix the problem, if any.
    """

    def __init__(self, message: str, *, detail: str | None = None, hint: str | None = None):
        self.message = message
        self.detail = (detail or "").strip() or None
        self.hint = hint
        super().__init__(message)


class NotInitializedError(FlowError):
    """Repository has no ansflow configuration yet."""

    def __init__(self) -> None:
        super().__init__(
            "Not an ansflow-enabled repo yet.",
            hint="ansflow init",
        )


class ConfigReadError(FlowError):
    """An ansflow config key could not be read."""

    def __init__(self, key: str, detail: str | None = None):
        self.key = key
        super().__init__(f"Could not read config key '{key}'.", detail=detail, hint="ansflow init -f")


class ConfigWriteError(FlowError):
    """An ansflow config key could not be written."""

    def __init__(self, key: str, detail: str | None = None):
        self.key = key
        super().__init__(f"Could not write config key '{key}'.", detail=detail)


class GitInitError(FlowError):
    """`git init` failed."""

    def __init__(self, detail: str | None = None):
        super().__init__("Failed to initialize git.", detail=detail)


class UnknownBranchError(FlowError):
    """A base branch chosen during forced init does not exist locally."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f"Local branch '{branch}' does not exist.")


class SameBaseBranchError(FlowError):
    """Production and integration were given the same branch name."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(
            f"Production and integration branches should differ (both are '{branch}').",
            hint="ansflow init -f",
        )


class MissingArgumentError(FlowError):
    """A required positional argument was not supplied."""

    def __init__(self, argument: str = "name"):
        self.argument = argument
        super().__init__(f"Missing argument <{argument}>")


class UnknownSubcommandError(FlowError):
    """The requested action is not one of start/finish/list."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Unknown subcommand: '{action}'")


class BranchAlreadyExistsError(FlowError):
    """The supporting branch to start already exists."""

    def __init__(self, branch: str, message: str | None = None):
        self.branch = branch
        super().__init__(message or f"Branch '{branch}' already exists. Pick another name.")


class ReleaseInProgressError(BranchAlreadyExistsError):
    """Another release branch is still active."""

    def __init__(self, branch: str, suffix: str):
        self.suffix = suffix
        super().__init__(
            branch,
            f"There is an existing release branch '{suffix}'. Finish that one first.",
        )
        self.hint = f"ansflow release finish {suffix}"


class TagAlreadyExistsError(FlowError):
    """A release tag with the requested name already exists."""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Tag '{tag}' already exists.")


class BranchNotFoundError(FlowError):
    """The supporting branch to finish does not exist."""

    def __init__(self, branch: str, hint: str | None = None):
        self.branch = branch
        super().__init__(f"Branch '{branch}' does not exist and is required.", hint=hint)


class BranchCreationError(FlowError):
    """git refused to create a branch."""

    def __init__(self, branch: str, detail: str | None = None):
        self.branch = branch
        super().__init__(f"Could not create branch '{branch}'.", detail=detail)


class CheckoutError(FlowError):
    """git refused to check out a branch."""

    def __init__(self, branch: str, detail: str | None = None):
        self.branch = branch
        super().__init__(f"Could not checkout branch '{branch}'.", detail=detail)


class DirtyWorkingTreeError(FlowError):
    """The working tree has uncommitted changes."""

    def __init__(self) -> None:
        super().__init__(
            "Working tree is not clean. Please commit or stash your changes.",
            hint="git stash",
        )


class MissingTagMessageError(FlowError):
    """The user supplied an empty release tag message."""

    def __init__(self) -> None:
        super().__init__(
            "No tag message given. Tagging failed, please run finish again to retry.",
        )


class CommitLookupError(FlowError):
    """The tip commit of a branch could not be resolved."""

    def __init__(self, ref: str, detail: str | None = None):
        self.ref = ref
        super().__init__(f"Could not read the latest commit of '{ref}'.", detail=detail)


class MergeFailedError(FlowError):
    """Checking out the target or merging into it failed."""

    def __init__(self, source: str, target: str, detail: str | None = None):
        self.source = source
        self.target = target
        super().__init__(
            f"Could not merge '{source}' into '{target}'.",
            detail=detail,
            hint="Resolve the conflicts, commit, then run finish again.",
        )


class TagCreationError(FlowError):
    """git refused to create the release tag."""

    def __init__(self, tag: str, detail: str | None = None):
        self.tag = tag
        super().__init__(f"Could not create tag '{tag}'.", detail=detail)


class RemoteOperationError(FlowError):
    """A fetch, push or remote delete failed."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message, detail=detail)


class BranchDeletionError(FlowError):
    """git refused to delete the local supporting branch."""

    def __init__(self, branch: str, detail: str | None = None):
        self.branch = branch
        super().__init__(f"Could not delete local branch '{branch}'.", detail=detail)


__all__ = [
    "FlowError",
    "NotInitializedError",
    "ConfigReadError",
    "ConfigWriteError",
    "GitInitError",
    "UnknownBranchError",
    "SameBaseBranchError",
    "MissingArgumentError",
    "UnknownSubcommandError",
    "BranchAlreadyExistsError",
    "ReleaseInProgressError",
    "TagAlreadyExistsError",
    "BranchNotFoundError",
    "BranchCreationError",
    "CheckoutError",
    "DirtyWorkingTreeError",
    "MissingTagMessageError",
    "CommitLookupError",
    "MergeFailedError",
    "TagCreationError",
    "RemoteOperationError",
    "BranchDeletionError",
]
