"""CleanService: remove everything the other targets produce."""

from __future__ import annotations

import shutil

from cikit.infrastructure.process import CommandError
from cikit.services.base import BaseService
from cikit.services.result import ServiceResult


class CleanService(BaseService):
    def clean(self) -> ServiceResult:
        """Delete build/, bin/, vendor/ and the coverage report, then ``go clean``."""
        op = "clean"
        ws = self._ws
        targets = [
            ws.build_path,
            ws.bin_path,
            ws.path(ws.settings.go.vendor_path),
            ws.path(ws.settings.coverage.report),
        ]

        removed: list[str] = []
        for target in targets:
            if target.is_dir():
                shutil.rmtree(target)
            elif target.exists():
                target.unlink()
            else:
                continue
            removed.append(str(target))

        warnings: list[str] = []
        try:
            ws.go.clean()
        except CommandError as exc:
            return self._command_failed(op, exc, removed=removed)

        self._dispatch_event("post_clean", {"removed": removed}, warnings)
        return ServiceResult(
            ok=True,
            op=op,
            data={"count": len(removed), "removed": removed},
            warnings=warnings,
        )
