"""Pluggy hook specifications for build-tool integration.

``resolve_id`` is the module-resolution hook a host build tool calls for
every import it encounters. ``post_resolve`` is a notification fired by
the service layer after each resolution.
"""

from __future__ import annotations

import pluggy

hookspec = pluggy.HookspecMarker("importmap_resolve")


class ImportMapHookSpec:
    """Hook specifications for the importmap-resolve plugin system."""

    @hookspec(firstresult=True)
    def resolve_id(self, source: str, importer: str | None) -> str | None:
        """Return the resolved module id for *source*, or None to defer.

        *importer* is the path or URL of the importing module, or None
        when *source* is an entry point. The first non-None result wins.
        """

    @hookspec
    def post_resolve(
        self,
        specifier: str,
        referrer: str,
        status: str,
        resolved: str | None,
    ) -> None:
        """Called after the service layer resolves a specifier."""
