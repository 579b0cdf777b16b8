"""RulesetService: explicit fetch and refresh of the shared ruleset cache."""

from __future__ import annotations

from cikit.infrastructure.ruleset import RulesetCache, RulesetError
from cikit.services.base import BaseService
from cikit.services.result import ServiceResult


class RulesetService(BaseService):
    def _cache(self) -> RulesetCache:
        settings = self._ws.settings
        return RulesetCache(settings.ruleset, settings.project_root, self._ws.runner)

    def fetch(self) -> ServiceResult:
        """Clone the shared ruleset unless it is already cached."""
        op = "ruleset_fetch"
        cache = self._cache()
        try:
            cloned = cache.ensure()
        except RulesetError as exc:
            return ServiceResult.failure(op, "RULESET_UNAVAILABLE", str(exc))
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "repository": self._ws.settings.ruleset.repository,
                "path": str(cache.directory),
                "file": str(cache.file),
                "cloned": cloned,
            },
        )

    def update(self) -> ServiceResult:
        """Pull newer rules into the cache."""
        op = "ruleset_update"
        cache = self._cache()
        try:
            cache.update()
        except RulesetError as exc:
            return ServiceResult.failure(op, "RULESET_UNAVAILABLE", str(exc))
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "repository": self._ws.settings.ruleset.repository,
                "path": str(cache.directory),
                "file": str(cache.file),
            },
        )
