"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy plugin loading and centralized result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from importmap_resolve.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from importmap_resolve.config.settings import ImportMapSettings
    from importmap_resolve.plugins.manager import PluginManager
    from importmap_resolve.services.resolve import ResolveService
    from importmap_resolve.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``. Plugins are discovered
    on first use so ``--help`` and ``--version`` never load them.
    """

    def __init__(self, settings: ImportMapSettings) -> None:
        self.settings = settings
        self._plugins: PluginManager | None = None

        from importmap_resolve.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def plugins(self) -> PluginManager:
        """The plugin manager (entry points discovered lazily on first access)."""
        if self._plugins is None:
            from importmap_resolve.plugins.manager import PluginManager

            self._plugins = PluginManager()
            self._plugins.discover_and_load()
        return self._plugins

    def service(self) -> ResolveService:
        """A ResolveService bound to these settings and plugins."""
        from importmap_resolve.services.resolve import ResolveService

        return ResolveService(self.settings, plugins=self.plugins)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            rich=self.settings.output.rich,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
