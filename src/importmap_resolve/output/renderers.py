"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from importmap_resolve.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from importmap_resolve.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    ``resolve`` prints one resolved URL (or status) per specifier.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} - {msg}"

    items = result.data.get("results")
    if items and isinstance(items, list):
        return "\n".join(item.get("resolved") or item.get("status", "") for item in items)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="im.ok")
    op = Text(f"  {result.op}", style="im.op")
    console.print(label, op, sep="")


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="im.key")
    if key.endswith("url") or key == "referrer":
        v = Text(str(value), style="im.url")
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _resolution_table(items: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Specifier", style="im.specifier", no_wrap=True)
    table.add_column("Status")
    table.add_column("Resolved", style="im.url")
    for item in items:
        status = str(item.get("status", ""))
        table.add_row(
            str(item.get("specifier", "")),
            Text(status, style=style_for_status(status)),
            item.get("resolved") or "",
        )
    return table


def _mapping_table(title: str, mapping: dict[str, str | None]) -> Table:
    table = Table(title=title, show_header=True, pad_edge=False, expand=False, title_justify="left")
    table.add_column("Specifier", style="im.specifier", no_wrap=True)
    table.add_column("Address", style="im.url")
    for key, address in mapping.items():
        if address is None:
            table.add_row(key, Text("blocked", style="im.status.blocked"))
        else:
            table.add_row(key, address)
    return table


# ── Operation renderers ───────────────────────────────────────────────


def _render_resolve(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    if verbose:
        _field(console, "referrer", result.data.get("referrer", ""))
    console.print(_resolution_table(result.data.get("results", [])))


def _render_show(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "base_url", result.data.get("base_url", ""))
    console.print(_mapping_table("imports", result.data.get("imports", {})))
    for prefix, mapping in result.data.get("scopes", {}).items():
        console.print(_mapping_table(f"scope {prefix}", mapping))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="im.error")
    op = Text(f"  {result.op}", style="im.op")
    console.print(label, op, Text(" - "), Text(msg), sep="")
    if verbose and err and err.detail:
        for key, value in err.detail.items():
            _field(console, key, value)
    items = result.data.get("results")
    if items:
        console.print(_resolution_table(items))


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "resolve": _render_resolve,
    "show": _render_show,
}
