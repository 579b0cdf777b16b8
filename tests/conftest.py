"""Shared pytest fixtures and test helpers for cikit tests."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from cikit.config.settings import CiSettings
from cikit.infrastructure.process import CommandError, CommandRunner
from cikit.infrastructure.workspace import Workspace

# Variables a CI machine may export that would leak into settings/build info.
_CI_ENV_VARS = (
    "TRAVIS",
    "GITHUB_ACTIONS",
    "GITLAB_CI",
    "DOCKER_USERNAME",
    "DOCKER_PASSWORD",
    "DOCKER_REGISTRY",
    "DOCKER_ORG",
    "CODECOV_TOKEN",
)

BASE_DESCRIPTOR = """\
[project]
name = "demo"
commands = ["cmd/demo"]
"""


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Strip CI and CIKIT_* variables so tests see only what they set."""
    for var in _CI_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    for var in list(os.environ):
        if var.startswith("CIKIT_"):
            monkeypatch.delenv(var, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


# ---------------------------------------------------------------------------
# Recording command runner
# ---------------------------------------------------------------------------


@dataclass
class Call:
    args: list[str]
    cwd: Path | None
    env: dict[str, str]
    input: str | None


@dataclass
class RecordingRunner(CommandRunner):
    """CommandRunner fake that records calls and emulates tool side effects.

    * ``respond(prefix, stdout)``: captured output for matching commands.
    * ``fail_on(prefix)``: raise CommandError for matching commands.
    * ``go build -o X`` creates X; ``go test -coverprofile=P`` writes the
      profile registered for the package in ``profiles``.
    """

    calls: list[Call] = field(default_factory=list)
    outputs: dict[tuple[str, ...], str] = field(default_factory=dict)
    failures: dict[tuple[str, ...], int] = field(default_factory=dict)
    profiles: dict[str, str] = field(default_factory=dict)

    def respond(self, prefix: Sequence[str], stdout: str) -> None:
        self.outputs[tuple(prefix)] = stdout

    def fail_on(self, prefix: Sequence[str], returncode: int = 1) -> None:
        self.failures[tuple(prefix)] = returncode

    @staticmethod
    def _matches(args: list[str], prefix: tuple[str, ...]) -> bool:
        return tuple(args[: len(prefix)]) == prefix

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Any = None,
        input: str | None = None,  # noqa: A002
        capture: bool = False,
    ) -> subprocess.CompletedProcess[str]:
        args = list(args)
        self.calls.append(Call(args, cwd, dict(env or {}), input))

        for prefix, returncode in self.failures.items():
            if self._matches(args, prefix):
                raise CommandError(args, returncode, "simulated failure")

        self._side_effects(args)

        stdout = ""
        best = -1
        for prefix, output in self.outputs.items():
            if self._matches(args, prefix) and len(prefix) > best:
                stdout, best = output, len(prefix)
        return subprocess.CompletedProcess(args, 0, stdout=stdout, stderr="")

    def _side_effects(self, args: list[str]) -> None:
        if len(args) > 1 and args[1] == "build" and "-o" in args:
            output = Path(args[args.index("-o") + 1])
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(f"binary {output.name}\n", encoding="utf-8")
        if len(args) > 1 and args[1] == "test":
            packages = [a for a in args[2:] if not a.startswith("-")]
            for arg in args:
                if arg.startswith("-coverprofile=") and packages:
                    content = self.profiles.get(packages[0])
                    if content is not None:
                        Path(arg.split("=", 1)[1]).write_text(content, encoding="utf-8")

    def commands(self, first: str | None = None) -> list[list[str]]:
        """Recorded argument lists, optionally only those starting with *first*."""
        return [c.args for c in self.calls if first is None or c.args[0] == first]


@pytest.fixture
def runner() -> RecordingRunner:
    """Runner with a clean feature-branch checkout and a three-package module."""
    rec = RecordingRunner()
    rec.respond(["git", "rev-parse", "--short", "HEAD"], "abc1234\n")
    rec.respond(["git", "rev-parse", "HEAD"], "abc1234def5678\n")
    rec.respond(["git", "rev-parse", "--abbrev-ref", "HEAD"], "feature\n")
    rec.fail_on(["git", "describe"], returncode=128)
    rec.respond(["git", "status"], "")
    rec.respond(
        ["go", "list", "./..."],
        "example.com/demo\nexample.com/demo/pkg\nexample.com/demo/vendor/dep\n",
    )
    return rec


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary project directory containing a minimal cikit.toml."""
    (tmp_path / "cikit.toml").write_text(BASE_DESCRIPTOR, encoding="utf-8")
    return tmp_path


@pytest.fixture
def make_workspace(
    project_root: Path, runner: RecordingRunner
) -> Callable[..., Workspace]:
    """Factory: ``make_workspace(extra_toml, **settings_overrides)``.

    *extra_toml* is appended to the base descriptor before loading.
    """

    def _make(extra_toml: str = "", **overrides: Any) -> Workspace:
        descriptor = project_root / "cikit.toml"
        descriptor.write_text(BASE_DESCRIPTOR + extra_toml, encoding="utf-8")
        settings = CiSettings.from_cli(project_root=project_root, **overrides)
        return Workspace(settings, runner=runner)

    return _make


@pytest.fixture
def workspace(make_workspace: Callable[..., Workspace]) -> Workspace:
    return make_workspace()


# ---------------------------------------------------------------------------
# Real git repositories
# ---------------------------------------------------------------------------


def git(cwd: Path, *args: str) -> str:
    """Run git in *cwd* for test setup."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def init_repo(path: Path) -> Path:
    """Initialize a git repo at *path* with an identity and one commit."""
    path.mkdir(parents=True, exist_ok=True)
    git(path, "init", "--quiet", "--initial-branch=master")
    git(path, "config", "user.email", "test@test.com")
    git(path, "config", "user.name", "Test")
    git(path, "config", "commit.gpgsign", "false")
    (path / "README.md").write_text("# demo\n", encoding="utf-8")
    git(path, "add", ".")
    git(path, "commit", "--quiet", "-m", "init")
    return path


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Temporary git working tree with an initial commit on master."""
    return init_repo(tmp_path / "repo")
