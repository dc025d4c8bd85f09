"""Built-in import-map resolution plugin for host build tools.

Implements ``resolve_id`` on top of one :class:`ImportMapSession`:

* remapped by the import map -> the resolved URL is the module id
* blocked (mapped to null)   -> :class:`ImportBlockedError`
* anything else              -> None, so the host resolves it itself

Specifiers that are already URLs but match no entry also return None;
only the import map's own decisions override the host.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pluggy

from importmap_resolve.domain.errors import ImportBlockedError
from importmap_resolve.domain.resolver import resolve
from importmap_resolve.services.session import ImportMapSession

hookimpl = pluggy.HookimplMarker("importmap_resolve")

logger = logging.getLogger(__name__)

PLUGIN_NAME = "import-map-resolve"


class ImportMapResolvePlugin:
    """Resolve imports through an import map."""

    name = PLUGIN_NAME

    def __init__(self, session: ImportMapSession) -> None:
        self._session = session

    @classmethod
    def from_options(
        cls,
        import_map: dict[str, Any] | None = None,
        base_url: str | None = None,
        *,
        cwd: Path | None = None,
    ) -> ImportMapResolvePlugin:
        """Build the plugin from an inline map and an optional base URL or path.

        *base_url* defaults to the working directory.
        """
        return cls(ImportMapSession.from_raw(import_map or {}, base_url, cwd=cwd))

    @property
    def session(self) -> ImportMapSession:
        return self._session

    @hookimpl
    def resolve_id(self, source: str, importer: str | None) -> str | None:
        referrer = self._session.referrer_url(importer)
        result = resolve(source, self._session.import_map, referrer)
        if result.blocked:
            raise ImportBlockedError(source, referrer)
        if not result.matched:
            return None
        logger.debug("Remapped %r -> %s (referrer %s)", source, result.resolved, referrer)
        return result.resolved
