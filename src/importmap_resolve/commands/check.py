"""Command: validate the import map."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from importmap_resolve.commands._base import MapCommand

if TYPE_CHECKING:
    from importmap_resolve.commands._context import AppContext


@click.command(
    cls=MapCommand,
    examples=[
        "importmap check",
        "importmap --map importmap.json --base-url https://example.com/ check",
    ],
)
@click.pass_obj
def check(app: AppContext) -> None:
    """Validate the import map and summarize its entries."""
    app.emit(app.service().check())
