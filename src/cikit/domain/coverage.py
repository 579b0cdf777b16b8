"""Go coverage profile handling.

A profile is a ``mode: <mode>`` header line followed by one block line per
covered statement range.
A merged report keeps one header followed by the block lines of every
per-package profile, in test order.
"""

from __future__ import annotations

MODE_PREFIX = "mode: "


def profile_header(mode: str) -> str:
    return f"{MODE_PREFIX}{mode}\n"


def profile_blocks(profile: str) -> list[str]:
    """Block lines of *profile*, i.e. every non-empty line after the header."""
    lines = profile.splitlines()
    if lines and lines[0].startswith(MODE_PREFIX):
        lines = lines[1:]
    return [line for line in lines if line.strip()]
