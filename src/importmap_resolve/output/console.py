"""Rich Console factory and theme for importmap output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

IMPORTMAP_THEME = Theme(
    {
        "im.ok": "bold green",
        "im.error": "bold red",
        "im.warning": "bold yellow",
        "im.op": "bold cyan",
        "im.key": "dim",
        "im.specifier": "bold",
        "im.url": "blue",
        "im.status.resolved": "green",
        "im.status.blocked": "bold red",
        "im.status.passthrough": "cyan",
        "im.status.unmatched": "yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=IMPORTMAP_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for a resolution status."""
    return f"im.status.{status}"
