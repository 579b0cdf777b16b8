"""CommitService: guard against generated files drifting from the commit."""

from __future__ import annotations

import logging

from cikit.infrastructure.process import CommandError
from cikit.services.base import BaseService
from cikit.services.result import ServiceResult

logger = logging.getLogger(__name__)


class CommitService(BaseService):
    def no_changes(self) -> ServiceResult:
        """Fail when tracked files changed since the last commit.

        Run after code generation: any difference means the generated code
        committed to the repository is out of sync.
        """
        op = "no_changes_in_commit"
        try:
            changed = self._ws.git.changed_files()
            diff = self._ws.git.diff() if changed else ""
        except CommandError as exc:
            return self._command_failed(op, exc)

        if changed:
            logger.warning("Uncommitted changes in %d file(s)", len(changed))
            return ServiceResult.failure(
                op,
                "UNCOMMITTED_CHANGES",
                "Generated code out of sync: uncommitted changes found "
                f"in {', '.join(changed)}",
                detail={"files": changed, "diff": diff},
            )
        return ServiceResult(ok=True, op=op, data={"message": "no changes", "files": []})
