"""Commands: run tests, collect coverage, upload coverage."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cikit.commands._base import CiCommand, skip_deps_option

if TYPE_CHECKING:
    from cikit.commands._context import AppContext


@click.command(
    cls=CiCommand,
    examples="""\
  cikit test
  cikit test --skip-deps""",
)
@skip_deps_option
@click.pass_obj
def test(app: AppContext, skip_deps: bool) -> None:
    """Run the test suite across all packages."""
    from cikit.services.testing import TestService

    app.emit(TestService(app.workspace).test(fetch_dependencies=not skip_deps))


@click.command(
    "test-race",
    cls=CiCommand,
    examples="""\
  cikit test-race""",
)
@skip_deps_option
@click.pass_obj
def test_race(app: AppContext, skip_deps: bool) -> None:
    """Run the test suite with the data race detector."""
    from cikit.services.testing import TestService

    app.emit(TestService(app.workspace).test(race=True, fetch_dependencies=not skip_deps))


@click.command(
    "test-coverage",
    cls=CiCommand,
    examples="""\
  cikit test-coverage
  cikit test-coverage --race
  cikit test-coverage && cikit codecov""",
)
@click.option(
    "--race/--no-race",
    default=None,
    help="Enable the race detector (default: coverage.race).",
)
@skip_deps_option
@click.pass_obj
def test_coverage(app: AppContext, race: bool | None, skip_deps: bool) -> None:
    """Run tests package by package and merge their coverage profiles."""
    from cikit.services.testing import TestService

    svc = TestService(app.workspace)
    app.emit(svc.coverage(race=race, fetch_dependencies=not skip_deps))


@click.command(
    cls=CiCommand,
    examples="""\
  CODECOV_TOKEN=... cikit codecov""",
)
@click.pass_obj
def codecov(app: AppContext) -> None:
    """Upload the merged coverage report to Codecov."""
    from cikit.services.codecov import CodecovService

    app.emit(CodecovService(app.workspace).upload())
