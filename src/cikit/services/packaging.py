"""PackagingService: cross-compile commands and archive them per platform.

Pipeline (packages): DEPENDENCIES → RESET build/ → for each OS/arch:
COMPILE → COPY CONTENT → ARCHIVE → COPY linux/amd64 to bin/ → NOTIFY
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Any

from cikit.domain.buildinfo import BuildInfo
from cikit.domain.platforms import (
    HOST_ARCH,
    HOST_OS,
    Platform,
    binary_name,
    go_package,
    platform_matrix,
)
from cikit.infrastructure.archive import copy_content, create_tarball, reset_directory
from cikit.infrastructure.process import CommandError
from cikit.services.base import BaseService
from cikit.services.result import ServiceResult

logger = logging.getLogger(__name__)

DEFAULT_LD_FLAGS = "-X main.version={version} -X main.build={build}"


class PackagingService(BaseService):
    """Builds the project's commands for every configured platform."""

    def _ld_flags(self, op: str, info: BuildInfo) -> str | ServiceResult:
        """Fill the ``{version}``, ``{build}``, ``{commit}`` and ``{branch}`` placeholders."""
        template = self._ws.settings.build.ld_flags or DEFAULT_LD_FLAGS
        try:
            return template.format_map(
                {
                    "version": info.version,
                    "build": info.build,
                    "commit": info.commit,
                    "branch": info.branch or "",
                }
            )
        except (KeyError, IndexError, ValueError, AttributeError) as exc:
            return ServiceResult.failure(
                op,
                "INVALID_LD_FLAGS",
                f"Invalid build.ld_flags {template!r}: unsupported placeholder {exc}; "
                "use {version}, {build}, {commit} or {branch} and double literal braces",
                detail={"ld_flags": template},
            )

    def _compile(self, platform: Platform, dest: Path, ld_flags: str) -> list[Path]:
        """Compile every declared command for *platform* into *dest*."""
        build = self._ws.settings.build
        env = {**build.env, **platform.env()}
        binaries: list[Path] = []
        for command in self._ws.settings.project.commands:
            output = dest / binary_name(command, platform)
            self._ws.go.build(
                go_package(command),
                output,
                env=env,
                ld_flags=ld_flags,
                tags=build.tags,
            )
            binaries.append(output)
        return binaries

    def build(self) -> ServiceResult:
        """Compile the commands for linux/amd64 straight into bin/."""
        op = "build"
        missing = self._require(op, "project.name", "project.commands")
        if missing is not None:
            return missing

        info = self._ws.build_info
        ld_flags = self._ld_flags(op, info)
        if isinstance(ld_flags, ServiceResult):
            return ld_flags
        self._ws.bin_path.mkdir(parents=True, exist_ok=True)
        try:
            binaries = self._compile(Platform(HOST_OS, HOST_ARCH), self._ws.bin_path, ld_flags)
        except CommandError as exc:
            return self._command_failed(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "version": info.version,
                "platform": f"{HOST_OS}/{HOST_ARCH}",
                "binaries": [str(b) for b in binaries],
            },
        )

    def packages(self, *, fetch_dependencies: bool = True) -> ServiceResult:
        """Build, archive and publish to bin/ for the whole OS/arch matrix."""
        op = "packages"
        missing = self._require(op, "project.name", "project.commands")
        if missing is not None:
            return missing

        ws = self._ws
        build = ws.settings.build
        warnings: list[str] = []

        matrix = platform_matrix(build.os, build.arch)
        if not matrix:
            return ServiceResult.failure(
                op, "EMPTY_MATRIX", "No platforms to package: build.os or build.arch is empty"
            )

        content_sources = [ws.path(c) for c in build.content]
        absent = [str(p) for p in content_sources if not p.exists()]
        if absent:
            return ServiceResult.failure(
                op,
                "MISSING_CONTENT",
                f"Package content not found: {', '.join(absent)}",
                detail={"missing": absent},
            )

        info = ws.build_info
        ld_flags = self._ld_flags(op, info)
        if isinstance(ld_flags, ServiceResult):
            return ld_flags

        if fetch_dependencies:
            from cikit.services.dependencies import DependencyService

            deps = DependencyService(ws).fetch()
            if not deps.ok:
                return deps
            warnings.extend(deps.warnings)

        version = info.version
        reset_directory(ws.build_path)

        packaged: list[dict[str, Any]] = []
        host_binaries: list[Path] = []
        for platform in matrix:
            pkg_dir = ws.build_path / platform.package_dir(ws.project)
            pkg_dir.mkdir(parents=True)
            logger.debug("Packaging %s into %s", platform, pkg_dir)
            try:
                binaries = self._compile(platform, pkg_dir, ld_flags)
            except CommandError as exc:
                return self._command_failed(
                    op,
                    exc,
                    warnings=warnings,
                    platform=str(platform),
                    archives=[p["archive"] for p in packaged],
                )
            for source in content_sources:
                copy_content(source, pkg_dir)
            archive_path = ws.build_path / platform.archive_name(ws.project, version)
            archive = create_tarball(pkg_dir, archive_path)
            if platform.is_host:
                host_binaries = binaries
            packaged.append(
                {
                    "platform": str(platform),
                    "archive": str(archive),
                    "binaries": [b.name for b in binaries],
                }
            )

        copied = self._publish_host_binaries(host_binaries, warnings)
        archives = [p["archive"] for p in packaged]
        self._dispatch_event(
            "post_packages",
            {
                "project": ws.project,
                "version": version,
                "build_path": str(ws.build_path),
                "archives": archives,
            },
            warnings,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "version": version,
                "build_path": str(ws.build_path),
                "count": len(packaged),
                "packages": packaged,
                "bin": copied,
            },
            warnings=warnings,
            meta={"build": info.to_dict()},
        )

    def _publish_host_binaries(self, binaries: list[Path], warnings: list[str]) -> list[str]:
        """Copy the linux/amd64 binaries to bin/ for Dockerfiles to pick up."""
        if not binaries:
            warnings.append(f"{HOST_OS}/{HOST_ARCH} is not in the platform matrix; bin/ unchanged")
            return []
        self._ws.bin_path.mkdir(parents=True, exist_ok=True)
        copied: list[str] = []
        for binary in binaries:
            target = self._ws.bin_path / binary.name
            shutil.copy2(binary, target)
            copied.append(str(target))
        return copied
