"""HookService: run the externally supplied pre-run / post-run scripts."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

from cikit.infrastructure.process import CommandError
from cikit.services.base import BaseService
from cikit.services.result import ServiceResult

logger = logging.getLogger(__name__)

Stage = Literal["pre_run", "post_run"]


class HookService(BaseService):
    """Executes hook scripts in declaration order, stopping at the first failure."""

    def _command(self, script: Path) -> list[str]:
        if os.access(script, os.X_OK):
            return [str(script)]
        return [self._ws.settings.hooks.shell, str(script)]

    def run(self, stage: Stage) -> ServiceResult:
        op = stage
        scripts: list[str] = getattr(self._ws.settings.hooks, stage)
        executed: list[str] = []

        for entry in scripts:
            script = self._ws.path(entry)
            if not script.is_file():
                return ServiceResult.failure(
                    op,
                    "SCRIPT_NOT_FOUND",
                    f"Hook script not found: {entry}",
                    detail={"script": str(script), "executed": executed},
                )
            logger.debug("Running %s hook %s", stage, entry)
            try:
                self._ws.runner.run(self._command(script), cwd=self._ws.root)
            except CommandError as exc:
                return self._command_failed(op, exc, script=entry, executed=executed)
            executed.append(entry)

        return ServiceResult(
            ok=True,
            op=op,
            data={"count": len(executed), "scripts": executed},
        )
