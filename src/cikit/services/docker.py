"""DockerService: build and push the project's images.

Pipeline (push): BRANCH GUARD → VALIDATE credentials → LOGIN → BUILD →
PUSH → PUSH latest (release tags only) → NOTIFY
"""

from __future__ import annotations

import logging

from cikit.domain.images import LATEST_TAG, DockerfileSpec, parse_dockerfiles
from cikit.infrastructure.process import CommandError
from cikit.services.base import BaseService
from cikit.services.result import ServiceResult

logger = logging.getLogger(__name__)

REQUIRED_PUSH_SETTINGS = ("project.name", "docker.registry", "docker.username", "docker.password")


class DockerService(BaseService):
    """Builds Docker images and publishes them to the configured registry."""

    def _specs(self) -> list[DockerfileSpec]:
        return parse_dockerfiles(self._ws.settings.docker.dockerfiles, self._ws.project)

    def _build_images(self, specs: list[DockerfileSpec], tag: str) -> list[str]:
        docker = self._ws.settings.docker
        images: list[str] = []
        for spec in specs:
            image = spec.image(docker.registry, docker.org, tag)
            logger.debug("Building %s from %s", image, spec.dockerfile)
            self._ws.docker.build(image, spec.dockerfile)
            images.append(image)
        return images

    def build(self, *, compile_first: bool = True) -> ServiceResult:
        """Build every mapped Dockerfile, tagged with the current version."""
        op = "docker_build"
        missing = self._require(op, "project.name")
        if missing is not None:
            return missing
        try:
            specs = self._specs()
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_DOCKERFILES", str(exc))

        if compile_first:
            from cikit.services.packaging import PackagingService

            compiled = PackagingService(self._ws).build()
            if not compiled.ok:
                return compiled

        version = self._ws.build_info.version
        try:
            images = self._build_images(specs, version)
        except CommandError as exc:
            return self._command_failed(op, exc)
        return ServiceResult(ok=True, op=op, data={"version": version, "images": images})

    def push(self, *, compile_first: bool = True) -> ServiceResult:
        """Build and push the images unless building the default branch."""
        op = "docker_push"
        ws = self._ws
        docker = ws.settings.docker
        info = ws.build_info

        if info.branch == docker.default_branch and not docker.push_default_branch:
            msg = f"docker-push is disabled on branch {info.branch!r}; skipping"
            logger.info(msg)
            return ServiceResult(
                ok=True,
                op=op,
                data={"skipped": True, "branch": info.branch, "images": []},
                warnings=[msg],
            )

        missing = self._require(op, *REQUIRED_PUSH_SETTINGS)
        if missing is not None:
            return missing
        try:
            specs = self._specs()
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_DOCKERFILES", str(exc))

        assert docker.username is not None and docker.password is not None
        try:
            ws.docker.login(docker.username, docker.password.get_secret_value(), docker.registry)
        except CommandError as exc:
            return self._command_failed(op, exc)

        if compile_first:
            from cikit.services.packaging import PackagingService

            compiled = PackagingService(ws).build()
            if not compiled.ok:
                return compiled

        version = info.version
        pushed: list[str] = []
        try:
            images = self._build_images(specs, version)
            for image in images:
                ws.docker.push(image)
                pushed.append(image)

            if docker.push_latest_release and info.is_release:
                for spec in specs:
                    source = spec.image(docker.registry, docker.org, version)
                    latest = spec.image(docker.registry, docker.org, LATEST_TAG)
                    ws.docker.tag(source, latest)
                    ws.docker.push(latest)
                    pushed.append(latest)
        except CommandError as exc:
            return self._command_failed(op, exc, pushed=pushed)

        warnings: list[str] = []
        self._dispatch_event("post_docker_push", {"version": version, "images": pushed}, warnings)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "skipped": False,
                "branch": info.branch,
                "version": version,
                "images": pushed,
                "latest": info.is_release and docker.push_latest_release,
            },
            warnings=warnings,
        )
