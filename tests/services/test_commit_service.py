"""Tests for CommitService: the no-changes-in-commit target."""

from __future__ import annotations

from pathlib import Path

from cikit.config.settings import CiSettings
from cikit.infrastructure.workspace import Workspace
from cikit.services.commit import CommitService
from tests.conftest import RecordingRunner


class TestNoChanges:
    def test_clean_tree(self, workspace: Workspace) -> None:
        result = CommitService(workspace).no_changes()
        assert result.ok
        assert result.data == {"message": "no changes", "files": []}

    def test_changes_fail_with_diff(self, workspace: Workspace, runner: RecordingRunner) -> None:
        runner.respond(["git", "status", "--untracked-files=no"], " M gen/api.pb.go\n")
        runner.respond(["git", "--no-pager", "diff"], "diff --git a/gen/api.pb.go ...\n")
        result = CommitService(workspace).no_changes()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNCOMMITTED_CHANGES"
        assert "gen/api.pb.go" in result.error.message
        assert result.error.detail["files"] == ["gen/api.pb.go"]
        assert result.error.detail["diff"].startswith("diff --git")

    def test_git_failure(self, workspace: Workspace, runner: RecordingRunner) -> None:
        runner.fail_on(["git", "status"], returncode=128)
        result = CommitService(workspace).no_changes()
        assert result.error is not None
        assert result.error.code == "COMMAND_FAILED"
        assert result.error.detail["returncode"] == 128


class TestAgainstRealGit:
    def test_generated_file_out_of_sync(self, git_repo: Path) -> None:
        ws = Workspace(CiSettings.from_cli(project_root=git_repo))
        assert CommitService(ws).no_changes().ok

        (git_repo / "README.md").write_text("# regenerated\n")
        result = CommitService(ws).no_changes()
        assert result.error is not None
        assert result.error.detail["files"] == ["README.md"]
        assert "+# regenerated" in result.error.detail["diff"]

    def test_untracked_files_allowed(self, git_repo: Path) -> None:
        (git_repo / "scratch.txt").write_text("notes")
        ws = Workspace(CiSettings.from_cli(project_root=git_repo))
        assert CommitService(ws).no_changes().ok
