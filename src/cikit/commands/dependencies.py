"""Command: fetch and vendor Go dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cikit.commands._base import CiCommand

if TYPE_CHECKING:
    from cikit.commands._context import AppContext


@click.command(
    cls=CiCommand,
    examples="""\
  cikit dependencies
  cikit -v dependencies""",
)
@click.pass_obj
def dependencies(app: AppContext) -> None:
    """Install declared dependencies, vendoring them when a lock file exists."""
    from cikit.services.dependencies import DependencyService

    app.emit(DependencyService(app.workspace).fetch())
