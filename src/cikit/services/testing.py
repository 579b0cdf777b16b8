"""TestService: run the Go test suite, optionally collecting coverage.

Pipeline (coverage): DEPENDENCIES → LIST packages → HEADER → for each
package: TEST with -coverprofile → APPEND blocks → DROP profile → NOTIFY
"""

from __future__ import annotations

import logging

from cikit.domain.coverage import profile_blocks, profile_header
from cikit.infrastructure.process import CommandError
from cikit.services.base import BaseService
from cikit.services.result import ServiceResult

logger = logging.getLogger(__name__)


class TestService(BaseService):
    """Runs ``go test`` across every package of the project."""

    __test__ = False  # not a pytest test class

    def _prepare(self, op: str, fetch_dependencies: bool) -> ServiceResult | list[str]:
        """Check settings, fetch dependencies and discover packages."""
        missing = self._require(op, "project.name")
        if missing is not None:
            return missing
        if fetch_dependencies:
            from cikit.services.dependencies import DependencyService

            deps = DependencyService(self._ws).fetch()
            if not deps.ok:
                return deps
        try:
            return self._ws.go.list_packages()
        except CommandError as exc:
            return self._command_failed(op, exc)

    def test(self, *, race: bool = False, fetch_dependencies: bool = True) -> ServiceResult:
        """Run every package's tests in one ``go test`` invocation."""
        op = "test_race" if race else "test"
        prepared = self._prepare(op, fetch_dependencies)
        if isinstance(prepared, ServiceResult):
            return prepared
        packages = prepared
        if not packages:
            return ServiceResult.failure(op, "NO_PACKAGES", "go list found no packages to test")

        try:
            self._ws.go.test(packages, race=race, tags=self._ws.settings.build.tags)
        except CommandError as exc:
            return self._command_failed(op, exc)

        warnings: list[str] = []
        self._dispatch_event(
            "post_test",
            {"packages": packages, "race": race, "coverage_report": None},
            warnings,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={"count": len(packages), "packages": packages, "race": race},
            warnings=warnings,
        )

    def coverage(
        self,
        *,
        race: bool | None = None,
        fetch_dependencies: bool = True,
    ) -> ServiceResult:
        """Test package by package, merging coverage profiles into one report.

        Stops at the first failing package; the report then holds the
        blocks of the packages that passed.
        """
        op = "test_coverage"
        cov = self._ws.settings.coverage
        race = cov.race if race is None else race

        prepared = self._prepare(op, fetch_dependencies)
        if isinstance(prepared, ServiceResult):
            return prepared
        packages = prepared

        report = self._ws.path(cov.report)
        profile = self._ws.path(cov.profile)
        report.parent.mkdir(parents=True, exist_ok=True)
        profile.parent.mkdir(parents=True, exist_ok=True)
        report.write_text(profile_header(cov.mode), encoding="utf-8")

        blocks = 0
        for package in packages:
            profile.unlink(missing_ok=True)
            try:
                self._ws.go.test(
                    [package],
                    race=race,
                    tags=self._ws.settings.build.tags,
                    cover_mode=cov.mode,
                    cover_profile=profile,
                )
            except CommandError as exc:
                profile.unlink(missing_ok=True)
                return self._command_failed(op, exc, package=package, report=str(report))

            if profile.is_file():
                lines = profile_blocks(profile.read_text(encoding="utf-8"))
                with report.open("a", encoding="utf-8") as fh:
                    fh.writelines(f"{line}\n" for line in lines)
                blocks += len(lines)
                profile.unlink()
            else:
                logger.debug("No coverage profile written for %s", package)

        warnings: list[str] = []
        self._dispatch_event(
            "post_test",
            {"packages": packages, "race": race, "coverage_report": str(report)},
            warnings,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "count": len(packages),
                "packages": packages,
                "race": race,
                "mode": cov.mode,
                "report": str(report),
                "blocks": blocks,
            },
            warnings=warnings,
        )
