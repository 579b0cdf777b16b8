"""Subcommand modules for cikit: one command per CI target.

Provides register_commands() which uses deferred imports to keep
``cikit --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every target on the root CLI group.

    1 group (``ruleset``) + 14 standalone targets.
    """
    # --- Groups ---
    from cikit.commands.ruleset import ruleset

    cli.add_command(ruleset)

    # --- Targets ---
    from cikit.commands.build import build, packages
    from cikit.commands.clean import clean
    from cikit.commands.commit import no_changes_in_commit
    from cikit.commands.config_cmd import config_cmd
    from cikit.commands.dependencies import dependencies
    from cikit.commands.docker import docker_build, docker_push
    from cikit.commands.hooks import post_run, pre_run
    from cikit.commands.test import codecov, test, test_coverage, test_race

    cli.add_command(dependencies)
    cli.add_command(build)
    cli.add_command(packages)
    cli.add_command(docker_build)
    cli.add_command(docker_push)
    cli.add_command(test)
    cli.add_command(test_race)
    cli.add_command(test_coverage)
    cli.add_command(codecov)
    cli.add_command(no_changes_in_commit)
    cli.add_command(pre_run)
    cli.add_command(post_run)
    cli.add_command(clean)
    cli.add_command(config_cmd)
