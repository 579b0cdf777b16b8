"""CodecovService: upload the merged coverage report."""

from __future__ import annotations

from cikit.infrastructure.codecov import CodecovClient, CodecovError
from cikit.infrastructure.process import CommandError
from cikit.services.base import BaseService
from cikit.services.result import ServiceResult


class CodecovService(BaseService):
    def upload(self) -> ServiceResult:
        """Send the ``test-coverage`` report to the coverage service."""
        op = "codecov"
        cov = self._ws.settings.coverage
        report = self._ws.path(cov.report)

        if not report.is_file():
            return ServiceResult.failure(
                op,
                "REPORT_NOT_FOUND",
                f"Unable to find {cov.report!r}, did you run 'cikit test-coverage'?",
                detail={"report": str(report)},
            )
        missing = self._require(op, "coverage.codecov_token")
        if missing is not None:
            return missing

        assert cov.codecov_token is not None
        info = self._ws.build_info
        try:
            commit = self._ws.git.full_commit()
        except CommandError:
            commit = info.commit

        client = CodecovClient(cov.codecov_token.get_secret_value(), cov.codecov_url)
        try:
            url = client.upload(
                report,
                commit=commit,
                branch=info.branch,
                tag=info.tag,
                build=info.build,
            )
        except CodecovError as exc:
            return ServiceResult.failure(op, "UPLOAD_FAILED", str(exc))

        return ServiceResult(
            ok=True,
            op=op,
            data={"report": str(report), "commit": commit, "url": url},
        )
