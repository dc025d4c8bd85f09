"""Subcommand modules for the importmap CLI.

Provides register_commands() which uses deferred imports to keep
``importmap --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from importmap_resolve.commands.check import check
    from importmap_resolve.commands.resolve import resolve
    from importmap_resolve.commands.show import show

    cli.add_command(resolve)
    cli.add_command(check)
    cli.add_command(show)
