"""Click command class with an ``--examples`` flag.

``--help`` stays short; ``importmap <command> --examples`` prints a few
ready-to-paste invocations and exits before any import map is loaded.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click


class MapCommand(click.Command):
    """Click Command that takes ``examples=[...]`` (one invocation per item)."""

    def __init__(self, *args: Any, examples: Sequence[str] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        # Eager, so this runs before required SPECIFIERS are checked.
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        for line in self.examples:
            click.echo(f"  {line}")
        ctx.exit(0)
