"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Workspace initialization (fetching the
shared ruleset on first use) and centralized result emission.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from cikit.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from cikit.config.settings import CiSettings
    from cikit.infrastructure.workspace import Workspace
    from cikit.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The workspace is created on first use so ``--help``, ``--examples`` and
    ``config`` never clone anything or call git.
    """

    def __init__(self, settings: CiSettings, cli_options: dict[str, Any] | None = None) -> None:
        self.settings = settings
        self._cli_options = cli_options or {}
        self._workspace: Workspace | None = None

        from cikit.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def workspace(self) -> Workspace:
        """Workspace for a target that needs a named project."""
        return self.open_workspace()

    def open_workspace(
        self,
        *,
        require_project: bool = True,
        fetch_ruleset: bool = True,
    ) -> Workspace:
        """Create (once) and return the workspace.

        Args:
            require_project: Abort unless ``project.name`` is set.
            fetch_ruleset: Clone the shared ruleset first when one is
                configured but not cached yet, then reload the settings.
        """
        if self._workspace is None:
            if fetch_ruleset:
                self._fetch_ruleset()
            from cikit.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings)

        if require_project and not self.settings.project.name:
            msg = (
                "ERROR! The project name cannot be empty: set [project] name "
                "in cikit.toml or CIKIT_PROJECT__NAME"
            )
            raise click.ClickException(msg)
        return self._workspace

    def _fetch_ruleset(self) -> None:
        ruleset = self.settings.ruleset
        if not ruleset.repository or self.settings.ruleset_file is not None:
            return

        from cikit.config.settings import CiSettings
        from cikit.infrastructure.process import CommandRunner
        from cikit.infrastructure.ruleset import RulesetCache, RulesetError

        cache = RulesetCache(ruleset, self.settings.project_root, CommandRunner())
        try:
            cache.ensure()
        except RulesetError as exc:
            raise click.ClickException(str(exc)) from exc
        self.settings = CiSettings.from_cli(**self._cli_options)

    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = self.output_settings()
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
