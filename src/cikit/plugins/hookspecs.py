"""Pluggy hook specifications for cikit target events.

Hooks run synchronously after a target's work succeeded. A failing hook
implementation becomes a warning on the target's result.
"""

from __future__ import annotations

import pluggy

hookspec = pluggy.HookspecMarker("cikit")


class CikitHookSpec:
    """Hook specifications for the cikit plugin system."""

    @hookspec
    def post_dependencies(self, project_root: str, commands: list[list[str]]) -> None:
        """Called after dependencies were fetched and vendored."""

    @hookspec
    def post_packages(
        self,
        project: str,
        version: str,
        build_path: str,
        archives: list[str],
    ) -> None:
        """Called once every platform archive has been written."""

    @hookspec
    def post_docker_push(self, version: str, images: list[str]) -> None:
        """Called after all images were pushed."""

    @hookspec
    def post_test(
        self,
        packages: list[str],
        race: bool,
        coverage_report: str | None,
    ) -> None:
        """Called after the test suite passed."""

    @hookspec
    def post_clean(self, removed: list[str]) -> None:
        """Called after build outputs were removed."""
