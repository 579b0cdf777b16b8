"""The Go toolchain as used by the dependency, packaging and test targets."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from cikit.config.models import GoConfig
from cikit.infrastructure.process import CommandRunner

# Lock file -> command vendoring its dependencies, checked in order.
VENDOR_COMMANDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Gopkg.lock", ("dep", "ensure", "-v")),
    ("go.sum", ("{go}", "mod", "vendor")),
)


class GoToolchain:
    """Thin wrapper running ``go`` subcommands from the project root."""

    def __init__(self, config: GoConfig, root: Path, runner: CommandRunner) -> None:
        self._config = config
        self._root = root
        self._runner = runner

    def _go(
        self,
        *args: str,
        env: Mapping[str, str] | None = None,
        capture: bool = False,
    ) -> str:
        result = self._runner.run(
            [self._config.command, *args],
            cwd=self._root,
            env=env,
            capture=capture,
        )
        return result.stdout or ""

    def get(self, *packages: str) -> None:
        self._go("get", "-v", "-t", *packages)

    def list_packages(self) -> list[str]:
        """All packages of the module, minus excluded paths (vendor/ by default)."""
        output = self._go("list", "./...", capture=True)
        return [
            pkg
            for pkg in (line.strip() for line in output.splitlines())
            if pkg and not any(fragment in pkg for fragment in self._config.exclude)
        ]

    def build(
        self,
        package: str,
        output: Path,
        *,
        env: Mapping[str, str] | None = None,
        ld_flags: str | None = None,
        tags: list[str] | None = None,
    ) -> None:
        args = ["build"]
        if tags:
            args += ["-tags", " ".join(tags)]
        if ld_flags:
            args += ["-ldflags", ld_flags]
        args += ["-o", str(output), package]
        self._go(*args, env=env)

    def test(
        self,
        packages: list[str],
        *,
        race: bool = False,
        tags: list[str] | None = None,
        cover_mode: str | None = None,
        cover_profile: Path | None = None,
    ) -> None:
        args = ["test", "-v"]
        if race:
            args.append("-race")
        if tags:
            args += ["-tags", " ".join(tags)]
        args += packages
        if cover_mode:
            args.append(f"-covermode={cover_mode}")
        if cover_profile is not None:
            args.append(f"-coverprofile={cover_profile}")
        self._go(*args)

    def clean(self) -> None:
        self._go("clean", ".")

    def vendor_command(self) -> tuple[str, list[str]] | None:
        """The ``(lock file, command)`` that vendors dependencies, if any applies."""
        for lock_file, command in VENDOR_COMMANDS:
            if (self._root / lock_file).is_file():
                return lock_file, [part.format(go=self._config.command) for part in command]
        return None

    def vendor(self, command: list[str]) -> None:
        self._runner.run(command, cwd=self._root)
