"""Build metadata: commit, branch, tag, version and build stamp.

CI services describe the checkout through their own environment variables;
:func:`refs_from_environment` normalizes the ones we know about so the
services layer can fall back to git only for what is still unknown.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime

DEV_PREFIX = "dev"
BUILD_STAMP_FORMAT = "%m-%d-%Y_%H_%M_%S"

_RELEASE_RE = re.compile(r"^v?\d+\.\d+\.\d+$")


@dataclass(frozen=True)
class BuildInfo:
    """Everything a target needs to know about the commit being built."""

    commit: str
    branch: str | None
    tag: str | None
    dirty: bool
    build: str

    @property
    def version(self) -> str:
        return resolve_version(self.tag, self.commit, dirty=self.dirty)

    @property
    def is_release(self) -> bool:
        return self.tag is not None and is_release_tag(self.tag)

    def to_dict(self) -> dict[str, str | bool | None]:
        return {
            "commit": self.commit,
            "branch": self.branch,
            "tag": self.tag,
            "dirty": self.dirty,
            "build": self.build,
            "version": self.version,
        }


def resolve_version(tag: str | None, commit: str, *, dirty: bool = False) -> str:
    """The tag when building one, else ``dev-<commit>`` (``-dirty`` if modified).

    Examples:
        >>> resolve_version("v1.2.0", "abc1234")
        'v1.2.0'
        >>> resolve_version(None, "abc1234", dirty=True)
        'dev-abc1234-dirty'
    """
    if tag:
        return tag
    suffix = "-dirty" if dirty else ""
    return f"{DEV_PREFIX}-{commit}{suffix}"


def is_release_tag(tag: str) -> bool:
    """Whether *tag* names a final release (``v1.2.3``), not a pre-release."""
    return bool(_RELEASE_RE.match(tag))


def build_stamp(now: datetime | None = None) -> str:
    """Timestamp identifying this build."""
    return (now or datetime.now(UTC)).strftime(BUILD_STAMP_FORMAT)


def refs_from_environment(environ: Mapping[str, str]) -> dict[str, str]:
    """Extract ``branch``/``tag``/``commit`` from CI-provided variables.

    Recognizes Travis CI, GitHub Actions and GitLab CI. Keys whose value
    cannot be determined are omitted.
    """
    refs: dict[str, str] = {}

    if environ.get("TRAVIS"):
        _put(refs, "tag", environ.get("TRAVIS_TAG"))
        # On pull requests TRAVIS_BRANCH is the target; the source is this one.
        _put(
            refs,
            "branch",
            environ.get("TRAVIS_PULL_REQUEST_BRANCH") or environ.get("TRAVIS_BRANCH"),
        )
        _put(refs, "commit", environ.get("TRAVIS_COMMIT"))
    elif environ.get("GITHUB_ACTIONS"):
        ref = environ.get("GITHUB_REF", "")
        if ref.startswith("refs/tags/"):
            _put(refs, "tag", ref.removeprefix("refs/tags/"))
        elif ref.startswith("refs/heads/"):
            _put(refs, "branch", ref.removeprefix("refs/heads/"))
        _put(refs, "branch", environ.get("GITHUB_HEAD_REF"))
        _put(refs, "commit", environ.get("GITHUB_SHA"))
    elif environ.get("GITLAB_CI"):
        _put(refs, "tag", environ.get("CI_COMMIT_TAG"))
        _put(refs, "branch", environ.get("CI_COMMIT_BRANCH"))
        _put(refs, "commit", environ.get("CI_COMMIT_SHORT_SHA"))

    if "commit" in refs:
        refs["commit"] = refs["commit"][:7]
    return refs


def _put(refs: dict[str, str], key: str, value: str | None) -> None:
    if value:
        refs[key] = value
