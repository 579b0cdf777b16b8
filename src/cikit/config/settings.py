"""Unified settings: CLI flags, env vars, descriptor and shared ruleset in one object.

Priority chain (highest to lowest):
  1. Init kwargs    CLI flags passed by Click
  2. Env vars       ``CIKIT_*`` prefix
  3. CI env vars    ``DOCKER_USERNAME``, ``CODECOV_TOKEN`` and friends
  4. Descriptor     ``cikit.toml`` discovered via walk-up
  5. Shared ruleset ``<ruleset.path>/<ruleset.filename>`` when cached
  6. Code defaults  baked into the section models

Uses Pydantic Settings v2 with custom sources for the TOML layers and the
unprefixed variables CI services already export.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Any

import click
from pydantic import Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from cikit.config.discovery import deep_merge, find_config, read_toml
from cikit.config.models import (
    PROJECT_ONLY_SECTIONS,
    BuildConfig,
    CoverageConfig,
    DockerConfig,
    GoConfig,
    HooksConfig,
    ProjectConfig,
    RulesetConfig,
)

# Unprefixed variables set by CI services, mapped to (section, key).
WELL_KNOWN_ENV: dict[str, tuple[str, str]] = {
    "DOCKER_USERNAME": ("docker", "username"),
    "DOCKER_PASSWORD": ("docker", "password"),
    "DOCKER_REGISTRY": ("docker", "registry"),
    "DOCKER_ORG": ("docker", "org"),
    "CODECOV_TOKEN": ("coverage", "codecov_token"),
}


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Serve the merged descriptor + ruleset tables to Pydantic."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any] | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = data or {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


class CiEnvironmentSource(PydanticBaseSettingsSource):
    """Read the unprefixed credentials CI services export (see WELL_KNOWN_ENV)."""

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        for var, (section, key) in WELL_KNOWN_ENV.items():
            value = os.environ.get(var)
            if value:
                self._data.setdefault(section, {})[key] = value

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


def load_ruleset(path: Path) -> dict[str, Any]:
    """Read a shared ruleset file, dropping tables only a project may set."""
    data = read_toml(path)
    return {k: v for k, v in data.items() if k not in PROJECT_ONLY_SECTIONS}


# Thread-local storage for the merged TOML tables during construction.
_tls = threading.local()


class CiSettings(BaseSettings):
    """Unified settings for the entire cikit CLI.

    Attributes:
        project_root: Resolved project directory (parent of ``cikit.toml``,
            or CWD if no descriptor found).
        config_path: The descriptor in use, or None.
        ruleset_file: The shared ruleset file merged into these settings,
            or None when no ruleset is cached.
        branch/tag/commit: Explicit overrides for the values normally
            derived from CI variables or git.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CIKIT_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None
    ruleset_file: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- Build info overrides ---
    branch: str | None = None
    tag: str | None = None
    commit: str | None = None

    # --- TOML sections ---
    project: ProjectConfig = Field(default_factory=ProjectConfig)
    ruleset: RulesetConfig = Field(default_factory=RulesetConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    go: GoConfig = Field(default_factory=GoConfig)
    docker: DockerConfig = Field(default_factory=DockerConfig)
    coverage: CoverageConfig = Field(default_factory=CoverageConfig)
    hooks: HooksConfig = Field(default_factory=HooksConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the CI variables and TOML tables between env vars and defaults."""
        return (
            init_settings,
            env_settings,
            CiEnvironmentSource(settings_cls),
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_data", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> CiSettings:
        """Construct settings from CLI invocation.

        Discovers ``cikit.toml`` via walk-up (or explicit *config_path*),
        resolves *project_root* from the descriptor's parent directory,
        merges the cached shared ruleset underneath it and applies CLI
        flags as highest-priority overrides. Never fetches the ruleset:
        that is :class:`~cikit.infrastructure.ruleset.RulesetCache`'s job.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(project_root)

        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent.resolve() if toml_path else Path.cwd()

        project_data = read_toml(toml_path) if toml_path else {}
        try:
            ruleset = RulesetConfig.model_validate(project_data.get("ruleset", {}))
        except ValidationError as exc:
            msg = f"Invalid [ruleset] section in {toml_path}: {exc}"
            raise click.ClickException(msg) from exc

        candidate = resolved_root / ruleset.path / ruleset.filename
        ruleset_file = candidate if candidate.is_file() else None
        data = project_data
        if ruleset_file is not None:
            data = deep_merge(load_ruleset(ruleset_file), project_data)

        _tls.toml_data = data
        try:
            return cls(
                project_root=resolved_root,
                config_path=toml_path,
                ruleset_file=ruleset_file,
                **cli_flags,
            )
        except ValidationError as exc:
            msg = f"Invalid configuration: {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _tls.toml_data = None

    def missing(self, *names: str) -> list[str]:
        """Return the dotted setting names (e.g. ``docker.username``) left empty."""
        absent: list[str] = []
        for name in names:
            value: Any = self
            for part in name.split("."):
                value = getattr(value, part)
            if isinstance(value, SecretStr):
                value = value.get_secret_value()
            if not value:
                absent.append(name)
        return absent

    @property
    def ruleset_dir(self) -> Path:
        """Cache directory holding the cloned shared ruleset."""
        return self.project_root / self.ruleset.path
