"""BaseService: shared foundation for all cikit services.

Every service receives a :class:`Workspace` at construction time and
reaches git, go, docker and the filesystem only through it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from cikit.services.result import ServiceResult

if TYPE_CHECKING:
    from cikit.infrastructure.process import CommandError
    from cikit.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class CleanService(BaseService):
            def clean(self) -> ServiceResult:
                ...
                self._dispatch_event("post_clean", {"removed": removed}, warnings)
    """

    def __init__(self, workspace: Workspace) -> None:
        self._ws = workspace

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Call every plugin implementing *hook_name*.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        try:
            getattr(self._ws.plugins.hook, hook_name)(**payload)
        except Exception:
            logger.debug("Plugin hook %s failed", hook_name, exc_info=True)
            warnings.append(f"Plugin hook {hook_name} failed")

    def _require(self, op: str, *names: str) -> ServiceResult | None:
        """Fail *op* up front when any of the dotted settings *names* is empty."""
        absent = self._ws.settings.missing(*names)
        if not absent:
            return None
        return ServiceResult.failure(
            op,
            "MISSING_VARIABLE",
            f"Required setting(s) cannot be empty: {', '.join(absent)}",
            detail={"missing": absent},
        )

    @staticmethod
    def _command_failed(
        op: str,
        exc: CommandError,
        *,
        warnings: list[str] | None = None,
        **detail: Any,
    ) -> ServiceResult:
        return ServiceResult.failure(
            op,
            "COMMAND_FAILED",
            exc.describe(),
            detail={"command": exc.cmd, "returncode": exc.returncode, **detail},
            warnings=warnings,
        )
