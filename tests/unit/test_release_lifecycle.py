"""Unit tests for release start/finish sequencing (in-memory git)."""

from __future__ import annotations

import pytest

from ansflow_cli.core.errors import (
    BranchAlreadyExistsError,
    BranchNotFoundError,
    MergeFailedError,
    MissingTagMessageError,
    ReleaseInProgressError,
    RemoteOperationError,
    TagAlreadyExistsError,
    TagCreationError,
)
from ansflow_cli.flow.lifecycle import FinishOptions
from ansflow_cli.flow.models import BranchState, FinishAction
from ansflow_cli.flow.release import ReleaseLifecycle, default_remote


class Prompt:
    def __init__(self, answer: str | None = "Release notes"):
        self.answer = answer
        self.asked: list[str] = []

    def __call__(self, tag: str) -> str | None:
        self.asked.append(tag)
        return self.answer


@pytest.fixture()
def prompt():
    return Prompt()


@pytest.fixture()
def release(fake_git, prompt):
    return ReleaseLifecycle(fake_git, ask_tag_message=prompt, remote="origin")


class TestStart:
    def test_start_from_production(self, fake_git, release):
        fake_git.commit_on("main")

        result = release.start("1.0.0")

        assert result.branch.name == "release/1.0.0"
        assert result.branch.base == "production"
        assert fake_git.branches["release/1.0.0"] == fake_git.branches["production"]
        assert fake_git.head == "release/1.0.0"

    def test_explicit_base_ignored(self, fake_git, release):
        fake_git.commit_on("main")

        result = release.start("1.0.0", "main")

        assert result.branch.base == "production"

    def test_second_release_refused(self, fake_git, release):
        release.start("1.0.0")
        fake_git.calls.clear()

        with pytest.raises(ReleaseInProgressError) as exc_info:
            release.start("1.0.1")

        assert "Finish that one first" in str(exc_info.value)
        assert exc_info.value.suffix == "1.0.0"
        assert exc_info.value.hint == "ansflow release finish 1.0.0"
        assert "release/1.0.1" not in fake_git.branches
        assert fake_git.mutating_calls() == []

    def test_in_progress_is_an_already_exists_error(self, fake_git, release):
        release.start("1.0.0")

        with pytest.raises(BranchAlreadyExistsError):
            release.start("1.0.0")

    def test_existing_tag_refused(self, fake_git, release):
        fake_git.tags["1.0.0"] = fake_git.branches["production"]

        with pytest.raises(TagAlreadyExistsError):
            release.start("1.0.0")

        assert fake_git.mutating_calls() == []


class TestFinish:
    def test_full_finish_sequence(self, fake_git, release, prompt):
        release.start("1.0.0")
        tip = fake_git.commit_on("release/1.0.0")
        fake_git.remote_branches["origin"].add("release/1.0.0")

        result = release.finish("1.0.0", FinishOptions(push=True))

        assert result.actions == [
            FinishAction.FETCH,
            FinishAction.MERGE,
            FinishAction.TAG,
            FinishAction.PUSH,
            FinishAction.DELETE_REMOTE,
            FinishAction.DELETE_LOCAL,
        ]
        assert result.target == "production"
        assert result.tag == "1.0.0"
        assert result.state is BranchState.DELETED
        assert prompt.asked == ["1.0.0"]
        assert fake_git.tags["1.0.0"] == fake_git.branches["production"]
        assert tip in fake_git.ancestors(fake_git.branches["production"])
        assert "release/1.0.0" not in fake_git.remote_branches["origin"]
        assert ("tag_annotated", ("1.0.0", "Release notes")) in fake_git.calls

    def test_call_order(self, fake_git, release):
        release.start("1.0.0")
        fake_git.remote_branches["origin"].add("release/1.0.0")
        fake_git.calls.clear()

        release.finish("1.0.0", FinishOptions(push=True))

        assert fake_git.mutating_calls() == [
            "fetch",
            "checkout",
            "merge_no_ff",
            "tag_annotated",
            "push_branch",
            "push_tags",
            "delete_remote_branch",
            "delete_local_branch",
        ]

    def test_without_push_stays_local(self, fake_git, release):
        release.start("1.0.0")

        result = release.finish("1.0.0")

        assert FinishAction.PUSH not in result.actions
        assert not fake_git.called("push_branch")
        assert not fake_git.called("delete_remote_branch")

    def test_keep(self, fake_git, release):
        release.start("1.0.0")

        result = release.finish("1.0.0", FinishOptions(keep=True))

        assert result.state is BranchState.KEPT
        assert "release/1.0.0" in fake_git.branches

    def test_empty_tag_message_aborts_before_merge(self, fake_git, release, prompt):
        release.start("1.0.0")
        prompt.answer = "   "

        with pytest.raises(MissingTagMessageError):
            release.finish("1.0.0")

        assert not fake_git.called("merge_no_ff")
        assert "1.0.0" not in fake_git.tags
        assert "release/1.0.0" in fake_git.branches

    def test_no_prompt_configured(self, fake_git):
        release = ReleaseLifecycle(fake_git)
        release.start("1.0.0")

        with pytest.raises(MissingTagMessageError):
            release.finish("1.0.0")

    def test_existing_tag_not_prompted_or_recreated(self, fake_git, release, prompt):
        release.start("1.0.0")
        fake_git.tags["1.0.0"] = fake_git.branches["production"]

        result = release.finish("1.0.0")

        assert prompt.asked == []
        assert FinishAction.TAG not in result.actions
        assert not fake_git.called("tag_annotated")

    def test_fetch_failure_is_fatal_before_merge(self, fake_git, release):
        release.start("1.0.0")
        fake_git.failures["fetch"] = "fatal: 'origin' does not appear to be a git repository"

        with pytest.raises(RemoteOperationError) as exc_info:
            release.finish("1.0.0")

        assert "origin" in exc_info.value.detail
        assert not fake_git.called("merge_no_ff")

    def test_tag_failure_after_merge(self, fake_git, release):
        release.start("1.0.0")
        fake_git.failures["tag_annotated"] = "fatal: bad tag name"

        with pytest.raises(TagCreationError):
            release.finish("1.0.0")

        assert fake_git.called("merge_no_ff")
        assert "release/1.0.0" in fake_git.branches

    def test_merge_failure_skips_tag(self, fake_git, release):
        release.start("1.0.0")
        fake_git.failures["merge_no_ff"] = "CONFLICT"

        with pytest.raises(MergeFailedError):
            release.finish("1.0.0")

        assert not fake_git.called("tag_annotated")

    def test_push_failure_keeps_merge_and_tag(self, fake_git, release):
        release.start("1.0.0")
        fake_git.failures["push_tags"] = "rejected"

        with pytest.raises(RemoteOperationError):
            release.finish("1.0.0", FinishOptions(push=True))

        assert "1.0.0" in fake_git.tags
        assert "release/1.0.0" in fake_git.branches
        assert not fake_git.called("delete_remote_branch")

    def test_retry_after_partial_failure_is_idempotent(self, fake_git, release, prompt):
        release.start("1.0.0")
        fake_git.failures["push_branch"] = "network down"
        with pytest.raises(RemoteOperationError):
            release.finish("1.0.0", FinishOptions(push=True))
        tag_commit = fake_git.tags["1.0.0"]
        production_tip = fake_git.branches["production"]
        del fake_git.failures["push_branch"]
        fake_git.calls.clear()

        result = release.finish("1.0.0", FinishOptions(push=True))

        assert prompt.asked == ["1.0.0"]
        assert not fake_git.called("tag_annotated")
        assert fake_git.tags["1.0.0"] == tag_commit
        assert fake_git.branches["production"] == production_tip
        assert FinishAction.DELETE_REMOTE not in result.actions
        assert result.state is BranchState.DELETED

    def test_missing_branch(self, fake_git, release):
        with pytest.raises(BranchNotFoundError):
            release.finish("9.9.9")
        assert fake_git.mutating_calls() == []


def test_default_remote_from_environment(monkeypatch):
    monkeypatch.setenv("ANSFLOW_REMOTE", "upstream")
    assert default_remote() == "upstream"


def test_default_remote_fallback(monkeypatch):
    monkeypatch.delenv("ANSFLOW_REMOTE", raising=False)
    assert default_remote() == "origin"
