"""Commands: compile for the host image and package every platform."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cikit.commands._base import CiCommand, skip_deps_option

if TYPE_CHECKING:
    from cikit.commands._context import AppContext


@click.command(
    cls=CiCommand,
    examples="""\
  cikit build
  CIKIT_TAG=v1.2.0 cikit build""",
)
@click.pass_obj
def build(app: AppContext) -> None:
    """Compile every command for linux/amd64 into bin/."""
    from cikit.services.packaging import PackagingService

    app.emit(PackagingService(app.workspace).build())


@click.command(
    cls=CiCommand,
    examples="""\
  cikit packages
  cikit packages --skip-deps
  cikit -q packages | xargs -n1 tar -tzf""",
)
@skip_deps_option
@click.pass_obj
def packages(app: AppContext, skip_deps: bool) -> None:
    """Cross-compile and archive the commands for each OS/arch pair."""
    from cikit.services.packaging import PackagingService

    app.emit(PackagingService(app.workspace).packages(fetch_dependencies=not skip_deps))
