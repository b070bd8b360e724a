"""One-time repository setup for the ansflow branching model."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from ansflow_cli.core.constants import (
    DEFAULT_DEVELOP_BRANCH,
    DEFAULT_FEATURE_PREFIX,
    DEFAULT_MASTER_BRANCH,
    DEFAULT_RELEASE_PREFIX,
    INITIAL_COMMIT_MESSAGE,
)
from ansflow_cli.core.errors import (
    BranchCreationError,
    CheckoutError,
    ConfigWriteError,
    GitInitError,
    SameBaseBranchError,
    UnknownBranchError,
)
from ansflow_cli.core.git_gateway import GitGateway
from ansflow_cli.core.repo_state import FlowConfig, RepositoryStateInspector

__all__ = ["InitOptions", "InitResult", "LifecycleInitializer", "AskCallback"]

logger = logging.getLogger(__name__)

# (question, default, existing branch choices or None) -> answer
AskCallback = Callable[[str, str, list[str] | None], str]


@dataclass(frozen=True)
class InitOptions:
    force: bool = False
    use_defaults: bool = False
    master: str | None = None
    develop: str | None = None
    feature_prefix: str | None = None
    release_prefix: str | None = None


@dataclass
class InitResult:
    already_initialized: bool = False
    created_repository: bool = False
    initial_commit: bool = False
    created_branches: list[str] = field(default_factory=list)
    config: FlowConfig | None = None


class LifecycleInitializer:
    """Establish the base branches and persist the naming convention."""

    def __init__(
        self,
        git: GitGateway,
        inspector: RepositoryStateInspector | None = None,
        ask: AskCallback | None = None,
    ):
        self.git = git
        self.inspector = inspector or RepositoryStateInspector(git)
        self.ask = ask

    def initialize(self, options: InitOptions | None = None) -> InitResult:
        options = options or InitOptions()
        result = InitResult()

        if not self.git.is_inside_work_tree().succeeded:
            created = self.git.init_repo()
            if not created.succeeded:
                raise GitInitError(created.stderr)
            result.created_repository = True
            logger.info("Initialized empty git repository in %s", self.git.repo_root)

        if self.inspector.is_flow_initialized() and not options.force:
            result.already_initialized = True
            return result

        config = self.resolve_config(options)

        if not self.inspector.branch_exists(config.master_branch):
            if self.git.commit_count() == 0:
                committed = self.git.commit_empty(INITIAL_COMMIT_MESSAGE)
                if not committed.succeeded:
                    raise BranchCreationError(config.master_branch, committed.stderr)
                result.initial_commit = True
            self._create(config.master_branch, None, result)

        if not self.inspector.branch_exists(config.develop_branch):
            self._create(config.develop_branch, config.master_branch, result)

        checkout = self.git.checkout(config.develop_branch)
        if not checkout.succeeded:
            raise CheckoutError(config.develop_branch, checkout.stderr)

        for key, value in config.as_items():
            written = self.git.config_set(key, value)
            if not written.succeeded:
                raise ConfigWriteError(key, written.stderr)

        result.config = config
        logger.info("ansflow initialized: %s", config)
        return result

    def _create(self, branch: str, start_point: str | None, result: InitResult) -> None:
        created = self.git.create_branch_at(branch, start_point)
        if not created.succeeded:
            raise BranchCreationError(branch, created.stderr)
        result.created_branches.append(branch)

    def resolve_config(self, options: InitOptions) -> FlowConfig:
        """Pick names from defaults, explicit options or the ask callback."""
        if options.use_defaults:
            config = FlowConfig(
                master_branch=options.master or DEFAULT_MASTER_BRANCH,
                develop_branch=options.develop or DEFAULT_DEVELOP_BRANCH,
                feature_prefix=options.feature_prefix or DEFAULT_FEATURE_PREFIX,
                release_prefix=options.release_prefix or DEFAULT_RELEASE_PREFIX,
            )
            self._check_distinct(config)
            return config

        local = self.inspector.local_branches() if options.force else None

        master = options.master or self._ask(
            "Branch name for production releases", DEFAULT_MASTER_BRANCH, local
        )
        if local is not None and master not in local:
            raise UnknownBranchError(master)

        develop_choices = [b for b in local if b != master] if local is not None else None
        develop = options.develop or self._ask(
            'Branch name for "next release" development', DEFAULT_DEVELOP_BRANCH, develop_choices
        )
        if local is not None and develop not in local:
            raise UnknownBranchError(develop)

        feature_prefix = options.feature_prefix or self._ask(
            "Feature branch prefix", DEFAULT_FEATURE_PREFIX, None
        )
        release_prefix = options.release_prefix or self._ask(
            "Release branch prefix", DEFAULT_RELEASE_PREFIX, None
        )
        config = FlowConfig(
            master_branch=master,
            develop_branch=develop,
            feature_prefix=feature_prefix,
            release_prefix=release_prefix,
        )
        self._check_distinct(config)
        return config

    @staticmethod
    def _check_distinct(config: FlowConfig) -> None:
        if config.master_branch == config.develop_branch:
            raise SameBaseBranchError(config.master_branch)

    def _ask(self, question: str, default: str, choices: list[str] | None) -> str:
        if self.ask is None:
            return default
        answer = (self.ask(question, default, choices) or "").strip()
        return answer or default
