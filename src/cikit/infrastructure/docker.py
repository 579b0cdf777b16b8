"""The Docker CLI: login, build, tag, push."""

from __future__ import annotations

from pathlib import Path

from cikit.config.models import DockerConfig
from cikit.infrastructure.process import CommandRunner


class DockerClient:
    def __init__(self, config: DockerConfig, root: Path, runner: CommandRunner) -> None:
        self._config = config
        self._root = root
        self._runner = runner

    def _docker(self, *args: str, input: str | None = None) -> None:  # noqa: A002
        self._runner.run([self._config.command, *args], cwd=self._root, input=input)

    def login(self, username: str, password: str, registry: str) -> None:
        """Authenticate against *registry*; the password goes through stdin."""
        self._docker(
            "login", "--username", username, "--password-stdin", registry, input=password
        )

    def build(self, image: str, dockerfile: str) -> None:
        self._docker("build", "-t", image, "-f", dockerfile, ".")

    def tag(self, source: str, target: str) -> None:
        self._docker("tag", source, target)

    def push(self, image: str) -> None:
        self._docker("push", image)
