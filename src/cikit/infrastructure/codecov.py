"""Coverage report upload to Codecov (v4 two-step upload protocol).

1. ``POST {url}/upload/v4`` with the token and commit metadata; the body
   answers with the report URL on the first line and a pre-signed storage
   URL on the second.
2. ``PUT`` the report to the storage URL.
"""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from cikit import __version__

logger = logging.getLogger(__name__)

UPLOAD_TIMEOUT = 60


class CodecovError(Exception):
    """The coverage service refused or failed the upload."""


class CodecovClient:
    """Minimal uploader for merged Go coverage reports."""

    def __init__(
        self,
        token: str,
        base_url: str = "https://codecov.io",
        session: requests.Session | None = None,
    ) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    def upload(
        self,
        report: Path,
        *,
        commit: str,
        branch: str | None = None,
        tag: str | None = None,
        build: str | None = None,
    ) -> str:
        """Upload *report* and return the URL where the results will appear.

        Raises:
            CodecovError: on any HTTP failure or unexpected response.
        """
        params = {
            "token": self._token,
            "commit": commit,
            "package": f"cikit-{__version__}",
        }
        for key, value in (("branch", branch), ("tag", tag), ("build", build)):
            if value:
                params[key] = value

        try:
            response = self.session.post(
                f"{self._base_url}/upload/v4",
                params=params,
                headers={"Accept": "text/plain"},
                timeout=UPLOAD_TIMEOUT,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            msg = f"Codecov rejected the upload request: {exc}"
            raise CodecovError(msg) from exc

        lines = [line.strip() for line in response.text.strip().splitlines()]
        if len(lines) < 2:
            msg = f"Unexpected response from {self._base_url}: {response.text[:200]!r}"
            raise CodecovError(msg)
        report_url, storage_url = lines[0], lines[1]
        logger.debug("Uploading %s for report %s", report, report_url)

        try:
            stored = self.session.put(
                storage_url,
                data=report.read_bytes(),
                headers={"Content-Type": "text/plain", "x-amz-acl": "public-read"},
                timeout=UPLOAD_TIMEOUT,
            )
            stored.raise_for_status()
        except requests.RequestException as exc:
            msg = f"Uploading the coverage report failed: {exc}"
            raise CodecovError(msg) from exc

        return report_url
