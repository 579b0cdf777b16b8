"""Built-in checksum plugin.

Writes a ``SHA256SUMS`` file next to the package archives so releases can
be verified with ``sha256sum -c``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pluggy

from cikit.infrastructure.archive import CHECKSUMS_FILENAME, write_checksums

hookimpl = pluggy.HookimplMarker("cikit")

logger = logging.getLogger(__name__)


class ChecksumPlugin:
    @hookimpl
    def post_packages(
        self,
        project: str,
        version: str,
        build_path: str,
        archives: list[str],
    ) -> None:
        """Checksum every archive of this packaging run."""
        if not archives:
            return
        dest = Path(build_path) / CHECKSUMS_FILENAME
        write_checksums([Path(a) for a in archives], dest)
        logger.debug("Wrote %s for %s %s", dest, project, version)
