"""Commands: build and push Docker images."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cikit.commands._base import CiCommand

if TYPE_CHECKING:
    from cikit.commands._context import AppContext

_no_compile_option = click.option(
    "--no-compile",
    is_flag=True,
    help="Use the binaries already in bin/ instead of running the build target.",
)


@click.command(
    "docker-build",
    cls=CiCommand,
    examples="""\
  cikit docker-build
  cikit docker-build --no-compile""",
)
@_no_compile_option
@click.pass_obj
def docker_build(app: AppContext, no_compile: bool) -> None:
    """Build every mapped Dockerfile, tagged with the version."""
    from cikit.services.docker import DockerService

    app.emit(DockerService(app.workspace).build(compile_first=not no_compile))


@click.command(
    "docker-push",
    cls=CiCommand,
    examples="""\
  DOCKER_USERNAME=bot DOCKER_PASSWORD=secret cikit docker-push
  CIKIT_DOCKER__PUSH_DEFAULT_BRANCH=true cikit docker-push""",
)
@_no_compile_option
@click.pass_obj
def docker_push(app: AppContext, no_compile: bool) -> None:
    """Build and push images (skipped on the default branch)."""
    from cikit.services.docker import DockerService

    app.emit(DockerService(app.workspace).push(compile_first=not no_compile))
