"""Command: fail when generated files are not committed."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cikit.commands._base import CiCommand

if TYPE_CHECKING:
    from cikit.commands._context import AppContext


@click.command(
    "no-changes-in-commit",
    cls=CiCommand,
    examples="""\
  go generate ./... && cikit no-changes-in-commit""",
)
@click.pass_obj
def no_changes_in_commit(app: AppContext) -> None:
    """Fail if tracked files changed, e.g. after code generation."""
    from cikit.services.commit import CommitService

    app.emit(CommitService(app.workspace).no_changes())
