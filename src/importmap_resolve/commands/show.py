"""Command: print the normalized import map."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from importmap_resolve.commands._base import MapCommand

if TYPE_CHECKING:
    from importmap_resolve.commands._context import AppContext


@click.command(
    cls=MapCommand,
    examples=["importmap show", "importmap --json show"],
)
@click.pass_obj
def show(app: AppContext) -> None:
    """Show the import map with every address resolved to a URL."""
    app.emit(app.service().show())
