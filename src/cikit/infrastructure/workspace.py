"""Workspace: the consuming project as seen by every target.

Bundles the merged settings with the tool wrappers (git, go, docker), the
build metadata of the current checkout and the plugin manager. Services
receive a Workspace at construction time and never spawn processes on
their own.
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

from cikit.domain.buildinfo import BuildInfo, build_stamp, refs_from_environment
from cikit.infrastructure.docker import DockerClient
from cikit.infrastructure.git import GitRepository
from cikit.infrastructure.go import GoToolchain
from cikit.infrastructure.process import CommandError, CommandRunner

if TYPE_CHECKING:
    from cikit.config.settings import CiSettings
    from cikit.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class Workspace:
    """One consuming project: its root directory, settings and tools."""

    def __init__(self, settings: CiSettings, *, runner: CommandRunner | None = None) -> None:
        self.settings = settings
        self.root = settings.project_root
        self.runner = runner or CommandRunner()
        self.git = GitRepository(self.root, self.runner)
        self.go = GoToolchain(settings.go, self.root, self.runner)
        self.docker = DockerClient(settings.docker, self.root, self.runner)
        self._plugins: PluginManager | None = None

    @property
    def project(self) -> str:
        return self.settings.project.name

    def path(self, relative: str) -> Path:
        """Resolve a configured path against the project root."""
        return self.root / relative

    @property
    def build_path(self) -> Path:
        return self.path(self.settings.build.build_path)

    @property
    def bin_path(self) -> Path:
        return self.path(self.settings.build.bin_path)

    # ------------------------------------------------------------------
    # Build metadata
    # ------------------------------------------------------------------

    @functools.cached_property
    def build_info(self) -> BuildInfo:
        """Commit, branch, tag and version of the checkout being built.

        Explicit settings win, then CI variables, then git itself.
        """
        s = self.settings
        refs = refs_from_environment(os.environ)
        commit = s.commit or refs.get("commit") or self._from_git(self.git.short_commit)
        branch = s.branch or refs.get("branch") or self._from_git(self.git.current_branch)
        tag = s.tag or refs.get("tag") or self._from_git(self.git.exact_tag)
        dirty = self._from_git(self.git.is_dirty) or False
        info = BuildInfo(
            commit=commit or "unknown",
            branch=branch,
            tag=tag,
            dirty=dirty,
            build=build_stamp(),
        )
        logger.debug("Build info: %s", info.to_dict())
        return info

    @staticmethod
    def _from_git(query: Callable[[], _T]) -> _T | None:
        try:
            return query()
        except CommandError as exc:
            logger.debug("git query failed: %s", exc)
            return None

    # ------------------------------------------------------------------
    # Plugins
    # ------------------------------------------------------------------

    @property
    def plugins(self) -> PluginManager:
        """The plugin manager (discovered lazily on first access)."""
        if self._plugins is None:
            from cikit.plugins.builtins.checksums import ChecksumPlugin
            from cikit.plugins.manager import PluginManager

            pm = PluginManager()
            pm.discover_and_load()
            if self.settings.build.checksums:
                pm.register_plugin(ChecksumPlugin(), name="cikit-checksums")
            self._plugins = pm
        return self._plugins
