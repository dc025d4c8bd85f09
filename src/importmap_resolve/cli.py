"""Root CLI group for importmap with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from importmap_resolve import __version__
from importmap_resolve.commands import register_commands
from importmap_resolve.commands._context import AppContext
from importmap_resolve.config.settings import ImportMapSettings
from importmap_resolve.domain.urls import normalize_base_url


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="importmap")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-m",
    "--map",
    "map_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Import map JSON file (overrides [map] path).",
)
@click.option(
    "-b",
    "--base-url",
    default=None,
    help="URL or directory relative addresses resolve against (overrides [map] base_url).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    map_path: Path | None,
    base_url: str | None,
) -> None:
    """importmap: resolve module specifiers through an import map."""
    ctx.ensure_object(dict)
    settings = ImportMapSettings.from_cli(
        config_path=config_path,
        # Paths given on the command line are relative to the cwd, not the project root.
        map_path=map_path.absolute() if map_path is not None else None,
        base_url=normalize_base_url(base_url) if base_url else None,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
