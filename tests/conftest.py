from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from ansflow_cli.core.git_gateway import GitGateway
from ansflow_cli.core.repo_state import RepositoryStateInspector
from ansflow_cli.flow.initializer import InitOptions, LifecycleInitializer
from tests.fakes import FakeGit
from tests.utils import git, run


@pytest.fixture()
def temp_repo(tmp_path: Path) -> Iterator[Path]:
    repo_dir = tmp_path / "repo"
    repo_dir.mkdir()
    run(["git", "init"], cwd=repo_dir)
    run(["git", "config", "user.name", "Ans Flow"], cwd=repo_dir)
    run(["git", "config", "user.email", "flow@example.com"], cwd=repo_dir)
    run(["git", "config", "commit.gpgsign", "false"], cwd=repo_dir)
    run(["git", "config", "tag.gpgsign", "false"], cwd=repo_dir)
    yield repo_dir


@pytest.fixture()
def flow_repo(temp_repo: Path) -> Path:
    """Repository initialized with the default naming convention."""
    LifecycleInitializer(GitGateway(temp_repo)).initialize(InitOptions(use_defaults=True))
    return temp_repo


@pytest.fixture()
def remote_repo(flow_repo: Path, tmp_path: Path) -> Path:
    """Bare ``origin`` for ``flow_repo`` with production and main pushed."""
    remote = tmp_path / "origin.git"
    run(["git", "init", "--bare", str(remote)], cwd=tmp_path)
    git(flow_repo, "remote", "add", "origin", str(remote))
    git(flow_repo, "push", "origin", "production", "main")
    return remote


@pytest.fixture()
def gateway(flow_repo: Path) -> GitGateway:
    return GitGateway(flow_repo)


@pytest.fixture()
def inspector(gateway: GitGateway) -> RepositoryStateInspector:
    return RepositoryStateInspector(gateway)


@pytest.fixture()
def fake_git() -> FakeGit:
    return FakeGit.initialized()


@pytest.fixture()
def in_repo(flow_repo: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run CLI commands from inside ``flow_repo``."""
    monkeypatch.chdir(flow_repo)
    return flow_repo
