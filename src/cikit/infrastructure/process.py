"""Subprocess execution for every external tool cikit drives.

Tool output is forwarded to stderr unless captured, so stdout stays
reserved for the rendered result (and stays valid JSON under ``--json``).
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

logger = logging.getLogger(__name__)

# File descriptor receiving tool output that is not captured.
_STDERR_FD = 2
# Exit status shells use for "command not found".
MISSING_BINARY_STATUS = 127


class CommandError(Exception):
    """An external command exited nonzero or could not be started."""

    def __init__(self, args: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.cmd = list(args)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(self.describe())

    def describe(self) -> str:
        msg = f"`{shlex.join(self.cmd)}` exited with status {self.returncode}"
        tail = self.stderr.strip().splitlines()[-5:]
        if tail:
            msg += ": " + " ".join(tail)
        return msg


class CommandRunner:
    """Run commands synchronously, raising :class:`CommandError` on failure."""

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        input: str | None = None,  # noqa: A002
        capture: bool = False,
    ) -> subprocess.CompletedProcess[str]:
        """Run *args* and return the completed process.

        Args:
            cwd: Working directory.
            env: Variables added on top of the current environment.
            input: Text written to the command's stdin.
            capture: Collect stdout/stderr instead of forwarding them.
        """
        logger.debug("exec %s (cwd=%s)", shlex.join(args), cwd or ".")
        full_env = {**os.environ, **env} if env else None
        try:
            result = subprocess.run(
                list(args),
                cwd=cwd,
                env=full_env,
                input=input,
                text=True,
                stdout=subprocess.PIPE if capture else _STDERR_FD,
                stderr=subprocess.PIPE if capture else None,
                check=False,
            )
        except OSError as exc:
            raise CommandError(args, MISSING_BINARY_STATUS, str(exc)) from exc
        if result.returncode != 0:
            raise CommandError(args, result.returncode, result.stderr or "")
        return result
