"""Dockerfile mappings and image references."""

from __future__ import annotations

import re
from dataclasses import dataclass

LATEST_TAG = "latest"
_MAX_TAG_LENGTH = 128
_INVALID_TAG_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


@dataclass(frozen=True)
class DockerfileSpec:
    """A ``Dockerfile:repository`` mapping."""

    dockerfile: str
    repository: str

    def image(self, registry: str, org: str, tag: str) -> str:
        return image_reference(registry, org, self.repository, tag)


def parse_dockerfiles(entries: list[str], project: str) -> list[DockerfileSpec]:
    """Parse ``file:repository`` entries; a bare ``file`` maps to *project*.

    No entries means a single ``Dockerfile`` for the project.

    Raises:
        ValueError: an entry has an empty file or repository part.
    """
    if not entries:
        return [DockerfileSpec("Dockerfile", project)]

    specs: list[DockerfileSpec] = []
    for entry in entries:
        dockerfile, sep, repository = entry.partition(":")
        if not sep:
            repository = project
        if not dockerfile or not repository:
            msg = f"Invalid Dockerfile mapping {entry!r}, expected 'file:repository'"
            raise ValueError(msg)
        specs.append(DockerfileSpec(dockerfile, repository))
    return specs


def sanitize_tag(tag: str) -> str:
    """Map a version onto Docker's tag charset (``v1.0+meta`` -> ``v1.0_meta``).

    Examples:
        >>> sanitize_tag("dev-abc1234-dirty")
        'dev-abc1234-dirty'
        >>> sanitize_tag("feature/x+1")
        'feature_x_1'
    """
    cleaned = _INVALID_TAG_CHARS.sub("_", tag)
    # Tags may not start with a period or dash.
    cleaned = cleaned.lstrip(".-") or "_"
    return cleaned[:_MAX_TAG_LENGTH]


def image_reference(registry: str, org: str, repository: str, tag: str) -> str:
    """``registry/org/repository:tag``; empty segments are left out."""
    path = "/".join(part.strip("/") for part in (registry, org, repository) if part)
    return f"{path}:{sanitize_tag(tag)}"
