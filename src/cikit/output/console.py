"""Rich Console factory and theme for cikit output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes, CI logs) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CIKIT_THEME = Theme(
    {
        "ci.ok": "bold green",
        "ci.error": "bold red",
        "ci.warning": "bold yellow",
        "ci.op": "bold cyan",
        "ci.key": "dim",
        "ci.path": "dim",
        "ci.image": "bold blue",
        "ci.platform": "magenta",
        "ci.skipped": "yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=CIKIT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
