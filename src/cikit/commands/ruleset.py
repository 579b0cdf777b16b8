"""Command group: manage the shared ruleset cache."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cikit.commands._base import CiGroup

if TYPE_CHECKING:
    from cikit.commands._context import AppContext


@click.group(
    cls=CiGroup,
    examples="""\
  cikit ruleset fetch
  cikit ruleset update""",
)
def ruleset() -> None:
    """Fetch or refresh the shared ruleset."""


@ruleset.command(
    examples="""\
  cikit ruleset fetch
  cikit --json ruleset fetch""",
)
@click.pass_obj
def fetch(app: AppContext) -> None:
    """Clone the shared ruleset unless it is already cached."""
    from cikit.services.ruleset import RulesetService

    ws = app.open_workspace(require_project=False, fetch_ruleset=False)
    app.emit(RulesetService(ws).fetch())


@ruleset.command(
    examples="""\
  cikit ruleset update
  cikit ruleset update && cikit config""",
)
@click.pass_obj
def update(app: AppContext) -> None:
    """Pull the latest shared ruleset into the cache."""
    from cikit.services.ruleset import RulesetService

    ws = app.open_workspace(require_project=False, fetch_ruleset=False)
    app.emit(RulesetService(ws).update())
