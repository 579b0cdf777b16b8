"""Command: show the merged configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cikit.commands._base import CiCommand

if TYPE_CHECKING:
    from cikit.commands._context import AppContext


@click.command(
    "config",
    cls=CiCommand,
    examples="""\
  cikit config
  cikit --json config
  cikit -c ci/cikit.toml config""",
)
@click.pass_obj
def config_cmd(app: AppContext) -> None:
    """Print the settings after merging every layer (secrets masked)."""
    from cikit.services.result import ServiceResult

    settings = app.settings
    data = settings.model_dump(
        mode="json",
        exclude={"json_output", "quiet", "verbose", "log_json"},
    )
    app.emit(ServiceResult(ok=True, op="config", data=data))
