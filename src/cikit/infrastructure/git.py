"""Git queries and the clone/pull used by the ruleset cache."""

from __future__ import annotations

import logging
from pathlib import Path

from cikit.infrastructure.process import CommandError, CommandRunner

logger = logging.getLogger(__name__)


class GitRepository:
    """Read-mostly wrapper around the ``git`` binary for one working tree."""

    def __init__(self, root: Path, runner: CommandRunner) -> None:
        self._root = root
        self._runner = runner

    def _git(self, *args: str) -> str:
        """Run a git command in the working tree and return its stdout."""
        return self._runner.run(["git", *args], cwd=self._root, capture=True).stdout

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def short_commit(self) -> str:
        return self._git("rev-parse", "--short", "HEAD").strip()

    def full_commit(self) -> str:
        return self._git("rev-parse", "HEAD").strip()

    def current_branch(self) -> str | None:
        """Checked-out branch, or None on a detached HEAD."""
        branch = self._git("rev-parse", "--abbrev-ref", "HEAD").strip()
        return None if branch == "HEAD" else branch

    def exact_tag(self) -> str | None:
        """Tag pointing at HEAD, or None when HEAD is untagged."""
        try:
            tag = self._git("describe", "--tags", "--exact-match", "HEAD").strip()
        except CommandError as exc:
            logger.debug("HEAD is not tagged: %s", exc)
            return None
        return tag or None

    def is_dirty(self) -> bool:
        """Whether the working tree has any change, untracked files included."""
        return bool(self._git("status", "--porcelain").strip())

    def changed_files(self) -> list[str]:
        """Tracked files with uncommitted changes (untracked files ignored)."""
        output = self._git("status", "--untracked-files=no", "--porcelain")
        files: list[str] = []
        for line in output.splitlines():
            if not line.strip():
                continue
            # Porcelain v1: two status columns, a space, then the path.
            path = line[3:]
            if " -> " in path:
                path = path.split(" -> ", 1)[1]
            files.append(path)
        return files

    def diff(self) -> str:
        return self._git("--no-pager", "diff")

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def pull(self) -> None:
        """Fast-forward the current branch from its upstream."""
        self._git("pull", "--quiet", "--ff-only")

    @classmethod
    def clone(
        cls,
        runner: CommandRunner,
        repository: str,
        dest: Path,
        *,
        ref: str | None = None,
        depth: int = 1,
    ) -> GitRepository:
        """Shallow clone *repository* into *dest*."""
        args = ["git", "clone", "--quiet", "--depth", str(depth)]
        if ref:
            args += ["--branch", ref]
        args += [repository, str(dest)]
        runner.run(args, capture=True)
        return cls(dest, runner)
