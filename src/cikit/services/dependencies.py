"""DependencyService: fetch Go dependencies and vendor them when locked.

Pipeline: GET ./... → GET extra dependencies → VENDOR (if a lock file exists)
"""

from __future__ import annotations

import logging

from cikit.infrastructure.process import CommandError
from cikit.services.base import BaseService
from cikit.services.result import ServiceResult

logger = logging.getLogger(__name__)


class DependencyService(BaseService):
    """Installs declared dependencies for the project."""

    def fetch(self) -> ServiceResult:
        op = "dependencies"
        ws = self._ws
        go_cmd = ws.settings.go.command
        commands: list[list[str]] = []
        warnings: list[str] = []

        try:
            ws.go.get("./...")
            commands.append([go_cmd, "get", "-v", "-t", "./..."])

            for dependency in ws.settings.go.dependencies:
                ws.go.get(dependency)
                commands.append([go_cmd, "get", "-v", "-t", dependency])

            lock_file: str | None = None
            vendor = ws.go.vendor_command()
            if vendor is not None:
                lock_file, command = vendor
                logger.debug("Vendoring dependencies locked by %s", lock_file)
                ws.go.vendor(command)
                commands.append(command)
        except CommandError as exc:
            return self._command_failed(op, exc, completed=commands)

        self._dispatch_event(
            "post_dependencies",
            {"project_root": str(ws.root), "commands": commands},
            warnings,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "commands": commands,
                "lock_file": lock_file,
                "vendored": lock_file is not None,
            },
            warnings=warnings,
        )
