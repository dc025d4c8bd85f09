"""Command: resolve specifiers through the import map."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from importmap_resolve.commands._base import MapCommand

if TYPE_CHECKING:
    from importmap_resolve.commands._context import AppContext


@click.command(
    cls=MapCommand,
    examples=[
        "importmap resolve react",
        "importmap resolve lodash/fp ./local.js --referrer src/app.js",
        "importmap --map web/importmap.json resolve vue",
        "importmap --json resolve react react-dom",
        "importmap resolve --strict react lodash",
    ],
)
@click.argument("specifiers", nargs=-1, required=True)
@click.option(
    "-r",
    "--referrer",
    default=None,
    help="Path or URL of the importing module (default: the map's base URL).",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Also fail when a bare specifier has no import map entry.",
)
@click.pass_obj
def resolve(
    app: AppContext, specifiers: tuple[str, ...], referrer: str | None, strict: bool
) -> None:
    """Resolve SPECIFIERS as imported from --referrer.

    Exits with status 1 if any specifier is blocked by the import map,
    or with --strict, if a bare specifier is left unmatched.
    """
    app.emit(app.service().resolve(list(specifiers), referrer=referrer, strict=strict))
