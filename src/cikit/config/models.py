"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ``cikit.toml`` and the shared
ruleset only contain overrides. A consuming project needs only
``[project] name`` and ``commands``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr

# --- cikit.toml sections ---


class ProjectConfig(BaseModel):
    """[project] section."""

    model_config = {"frozen": True}

    name: str = ""
    commands: list[str] = Field(default_factory=list)


class RulesetConfig(BaseModel):
    """[ruleset] section: where the shared ruleset lives."""

    model_config = {"frozen": True}

    repository: str | None = None
    path: str = ".ci"
    filename: str = "cikit.main.toml"
    ref: str | None = None


class BuildConfig(BaseModel):
    """[build] section."""

    model_config = {"frozen": True}

    os: list[str] = Field(default_factory=lambda: ["darwin", "linux"])
    arch: list[str] = Field(default_factory=lambda: ["amd64"])
    build_path: str = "build"
    bin_path: str = "bin"
    content: list[str] = Field(default_factory=list)
    ld_flags: str | None = None
    tags: list[str] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict)
    checksums: bool = True


class GoConfig(BaseModel):
    """[go] section."""

    model_config = {"frozen": True}

    command: str = "go"
    dependencies: list[str] = Field(default_factory=list)
    vendor_path: str = "vendor"
    exclude: list[str] = Field(default_factory=lambda: ["/vendor/"])


class DockerConfig(BaseModel):
    """[docker] section."""

    model_config = {"frozen": True}

    command: str = "docker"
    registry: str = "quay.io"
    org: str = ""
    dockerfiles: list[str] = Field(default_factory=list)
    username: str | None = None
    password: SecretStr | None = None
    default_branch: str = "master"
    push_default_branch: bool = False
    push_latest_release: bool = True


class CoverageConfig(BaseModel):
    """[coverage] section."""

    model_config = {"frozen": True}

    mode: str = "atomic"
    report: str = "coverage.txt"
    profile: str = "profile.out"
    race: bool = False
    codecov_token: SecretStr | None = None
    codecov_url: str = "https://codecov.io"


class HooksConfig(BaseModel):
    """[hooks] section."""

    model_config = {"frozen": True}

    pre_run: list[str] = Field(default_factory=list)
    post_run: list[str] = Field(default_factory=list)
    shell: str = "sh"


# Sections a shared ruleset may not set; they belong to the consuming project.
PROJECT_ONLY_SECTIONS = frozenset({"project", "ruleset"})
