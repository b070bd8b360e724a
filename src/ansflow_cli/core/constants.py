"""Shared constants for the ansflow branching model."""

from __future__ import annotations

CONFIG_NAMESPACE = "ansflow"

MASTER_BRANCH_KEY = f"{CONFIG_NAMESPACE}.branch.master"
DEVELOP_BRANCH_KEY = f"{CONFIG_NAMESPACE}.branch.develop"
FEATURE_PREFIX_KEY = f"{CONFIG_NAMESPACE}.prefix.feature"
RELEASE_PREFIX_KEY = f"{CONFIG_NAMESPACE}.prefix.release"

DEFAULT_MASTER_BRANCH = "production"
DEFAULT_DEVELOP_BRANCH = "main"
DEFAULT_FEATURE_PREFIX = "feature/"
DEFAULT_RELEASE_PREFIX = "release/"

DEFAULT_REMOTE = "origin"
REMOTE_ENV_VAR = "ANSFLOW_REMOTE"

INITIAL_COMMIT_MESSAGE = "Initial commit"

__all__ = [
    "CONFIG_NAMESPACE",
    "MASTER_BRANCH_KEY",
    "DEVELOP_BRANCH_KEY",
    "FEATURE_PREFIX_KEY",
    "RELEASE_PREFIX_KEY",
    "DEFAULT_MASTER_BRANCH",
    "DEFAULT_DEVELOP_BRANCH",
    "DEFAULT_FEATURE_PREFIX",
    "DEFAULT_RELEASE_PREFIX",
    "DEFAULT_REMOTE",
    "REMOTE_ENV_VAR",
    "INITIAL_COMMIT_MESSAGE",
]
