"""Thin adapter over the git executable.

Every operation runs exactly one git subprocess and returns a ``GitResult``.
Non-zero exits are reported through ``GitResult.succeeded``; nothing here
raises for a failed git command. Parsing of git's text output is confined
to this module.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

__all__ = ["GitResult", "GitGateway"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitResult:
    """Outcome of a single git invocation."""

    succeeded: bool
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0
    args: tuple[str, ...] = field(default_factory=tuple)

    @property
    def output(self) -> str:
        """Stripped stdout."""
        return self.stdout.strip()

    def lines(self) -> list[str]:
        """Non-empty stripped stdout lines, in git's order."""
        return [line.strip() for line in self.stdout.splitlines() if line.strip()]


class GitGateway:
    """Issue git operations for a single repository directory."""

    def __init__(self, repo_root: Path | str | None = None):
        self.repo_root = Path(repo_root) if repo_root is not None else Path.cwd()

    def run(self, args: list[str]) -> GitResult:
        """Run ``git <args>`` and normalize the result shape."""
        argv = ("git", *args)
        try:
            completed = subprocess.run(
                list(argv),
                cwd=str(self.repo_root),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except FileNotFoundError:
            logger.debug("git executable not found while running %s", " ".join(argv))
            return GitResult(
                succeeded=False,
                stderr="git executable not found on PATH",
                returncode=127,
                args=argv,
            )
        logger.debug("%s -> %s", " ".join(argv), completed.returncode)
        return GitResult(
            succeeded=completed.returncode == 0,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            returncode=completed.returncode,
            args=argv,
        )

    # Repository

    def is_inside_work_tree(self) -> GitResult:
        return self.run(["rev-parse", "--is-inside-work-tree"])

    def init_repo(self) -> GitResult:
        return self.run(["init"])

    def diff_quiet(self) -> GitResult:
        return self.run(["diff", "--quiet", "--exit-code"])

    def diff_cached_quiet(self) -> GitResult:
        return self.run(["diff", "--cached", "--quiet", "--exit-code"])

    def commit_count(self) -> int:
        """Number of commits reachable from HEAD; 0 for an unborn branch."""
        result = self.run(["rev-list", "--count", "HEAD"])
        if not result.succeeded:
            return 0
        try:
            return int(result.output)
        except ValueError:
            return 0

    def commit_empty(self, message: str) -> GitResult:
        return self.run(["commit", "--allow-empty", "-m", message])

    # Config

    def config_get(self, key: str) -> GitResult:
        return self.run(["config", "--local", "--get", key])

    def config_set(self, key: str, value: str) -> GitResult:
        return self.run(["config", "--local", key, value])

    # Refs

    def verify_branch(self, name: str) -> GitResult:
        return self.run(["rev-parse", "--verify", "--quiet", f"refs/heads/{name}"])

    def rev_parse(self, ref: str) -> GitResult:
        return self.run(["rev-parse", ref])

    def short_commit(self, ref: str) -> GitResult:
        return self.run(["rev-parse", "--short", ref])

    def merge_base(self, first: str, second: str) -> GitResult:
        return self.run(["merge-base", first, second])

    # Branches

    def list_branches(self, pattern: str | None = None) -> GitResult:
        args = ["branch", "--list", "--format=%(refname:short)"]
        if pattern:
            args.append(pattern)
        return self.run(args)

    def branch_names(self, pattern: str | None = None) -> list[str]:
        """Local branch names matching ``pattern``; empty when listing fails."""
        result = self.list_branches(pattern)
        if not result.succeeded:
            return []
        return result.lines()

    def current_branch(self) -> GitResult:
        return self.run(["branch", "--show-current"])

    def create_branch(self, new_branch: str, base_branch: str) -> GitResult:
        """Create ``new_branch`` from ``base_branch`` and check it out."""
        return self.run(["checkout", "-b", new_branch, base_branch])

    def create_branch_at(self, new_branch: str, start_point: str | None = None) -> GitResult:
        """Create ``new_branch`` without switching to it."""
        args = ["branch", new_branch]
        if start_point:
            args.append(start_point)
        return self.run(args)

    def checkout(self, name: str) -> GitResult:
        return self.run(["checkout", name])

    def merge_no_ff(self, source: str) -> GitResult:
        """Merge ``source`` into the checked-out branch with a merge commit."""
        return self.run(["merge", "--no-ff", "--no-edit", source])

    def delete_local_branch(self, name: str) -> GitResult:
        return self.run(["branch", "-d", name])

    # Tags

    def list_tags(self, pattern: str) -> GitResult:
        return self.run(["tag", "-l", pattern])

    def tag_annotated(self, name: str, message: str) -> GitResult:
        return self.run(["tag", "-a", name, "-m", message])

    # Remotes

    def fetch(self, remote: str, branch: str) -> GitResult:
        return self.run(["fetch", remote, branch])

    def push_branch(self, remote: str, branch: str) -> GitResult:
        return self.run(["push", "-u", remote, branch])

    def push_tags(self, remote: str) -> GitResult:
        return self.run(["push", remote, "--tags"])

    def remote_branch_exists(self, remote: str, branch: str) -> GitResult:
        return self.run(["ls-remote", "--exit-code", "--heads", remote, f"refs/heads/{branch}"])

    def delete_remote_branch(self, remote: str, branch: str) -> GitResult:
        return self.run(["push", remote, "--delete", branch])
