"""Click classes and options shared by every cikit target.

Each target declares a few shell lines showing how it is chained in a CI
script (``cikit test-coverage && cikit codecov``); ``--examples`` prints them
and exits before the target runs any tool.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Add ``--examples``, handled before any other option is validated."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class CiCommand(click.Command):
    """A target command carrying its CI usage snippets."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class CiGroup(click.Group):
    """A command group (``ruleset``) whose subcommands are :class:`CiCommand`."""

    command_class = CiCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


skip_deps_option = click.option(
    "--skip-deps",
    is_flag=True,
    help="Do not run the dependencies target first.",
)
