"""Local cache of the shared ruleset repository.

The cache is a shallow clone made the first time a target runs. It is never
refreshed behind the user's back: ``cikit ruleset update`` is the only way
to pull newer rules.
"""

from __future__ import annotations

import logging
from pathlib import Path

from cikit.config.models import RulesetConfig
from cikit.infrastructure.git import GitRepository
from cikit.infrastructure.process import CommandError, CommandRunner

logger = logging.getLogger(__name__)


class RulesetError(Exception):
    """The shared ruleset could not be fetched or found."""


class RulesetCache:
    def __init__(self, config: RulesetConfig, project_root: Path, runner: CommandRunner) -> None:
        self._config = config
        self._runner = runner
        self.directory = project_root / config.path

    @property
    def file(self) -> Path:
        return self.directory / self._config.filename

    @property
    def is_cached(self) -> bool:
        return self.directory.exists()

    def _repository(self) -> str:
        if not self._config.repository:
            msg = "No shared ruleset repository configured ([ruleset] repository)"
            raise RulesetError(msg)
        return self._config.repository

    def ensure(self) -> bool:
        """Clone the ruleset unless already cached. Returns True if it cloned.

        Raises:
            RulesetError: no repository configured, the clone failed, or the
                clone does not contain the ruleset file.
        """
        repository = self._repository()
        cloned = False
        if not self.is_cached:
            logger.info("Fetching shared ruleset %s into %s", repository, self.directory)
            try:
                GitRepository.clone(
                    self._runner, repository, self.directory, ref=self._config.ref
                )
            except CommandError as exc:
                msg = f"Unable to fetch shared ruleset from {repository}: {exc}"
                raise RulesetError(msg) from exc
            cloned = True
        self._check_file()
        return cloned

    def update(self) -> None:
        """Pull newer rules into the cache, cloning it first if needed."""
        if not self.is_cached:
            self.ensure()
            return
        try:
            GitRepository(self.directory, self._runner).pull()
        except CommandError as exc:
            msg = f"Unable to update shared ruleset in {self.directory}: {exc}"
            raise RulesetError(msg) from exc
        self._check_file()

    def _check_file(self) -> None:
        if not self.file.is_file():
            msg = f"Shared ruleset {self._config.filename} not found in {self.directory}"
            raise RulesetError(msg)
