"""Command: remove build outputs."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cikit.commands._base import CiCommand

if TYPE_CHECKING:
    from cikit.commands._context import AppContext


@click.command(
    cls=CiCommand,
    examples="""\
  cikit clean
  cikit clean && cikit packages""",
)
@click.pass_obj
def clean(app: AppContext) -> None:
    """Remove build/, bin/, vendor/ and the coverage report."""
    from cikit.services.clean import CleanService

    app.emit(CleanService(app.workspace).clean())
