"""Commands: pre-run and post-run hook scripts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cikit.commands._base import CiCommand

if TYPE_CHECKING:
    from cikit.commands._context import AppContext


@click.command(
    "pre-run",
    cls=CiCommand,
    examples="""\
  cikit pre-run""",
)
@click.pass_obj
def pre_run(app: AppContext) -> None:
    """Run the [hooks] pre_run scripts in order."""
    from cikit.services.hooks import HookService

    app.emit(HookService(app.workspace).run("pre_run"))


@click.command(
    "post-run",
    cls=CiCommand,
    examples="""\
  cikit post-run""",
)
@click.pass_obj
def post_run(app: AppContext) -> None:
    """Run the [hooks] post_run scripts in order."""
    from cikit.services.hooks import HookService

    app.emit(HookService(app.workspace).run("post_run"))
