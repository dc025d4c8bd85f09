"""ImportMapSession: one parsed import map bound to its base URL.

A session is an explicit immutable value. Independent sessions (for
example two concurrent builds) never share state, and a session can be
handed to any number of threads.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from importmap_resolve.config.discovery import find_import_map
from importmap_resolve.domain.importmap import ResolvedImportMap, parse_import_map
from importmap_resolve.domain.resolver import Resolution, resolve
from importmap_resolve.domain.urls import normalize_base_url, to_url
from importmap_resolve.infrastructure.loader import load_import_map

if TYPE_CHECKING:
    from importmap_resolve.config.settings import ImportMapSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportMapSession:
    """A parsed import map plus the directory relative importers resolve from."""

    import_map: ResolvedImportMap
    cwd: str | None = None

    @property
    def base_url(self) -> str:
        return self.import_map.base_url

    @classmethod
    def from_raw(
        cls,
        raw: Any,
        base_url: str | None = None,
        *,
        cwd: Path | None = None,
    ) -> ImportMapSession:
        """Parse *raw* against *base_url* (a URL or path; default: *cwd*).

        Raises:
            InvalidMapError: If *raw* is not a valid import map.
        """
        root = str(cwd) if cwd is not None else None
        base = normalize_base_url(base_url or root or os.getcwd(), cwd=root)
        return cls(import_map=parse_import_map(raw, base), cwd=root)

    @classmethod
    def from_file(
        cls,
        path: Path,
        base_url: str | None = None,
        *,
        cwd: Path | None = None,
    ) -> ImportMapSession:
        """Load the JSON import map at *path* and parse it."""
        logger.debug("Loading import map from %s", path)
        return cls.from_raw(load_import_map(path), base_url, cwd=cwd)

    @classmethod
    def from_settings(cls, settings: ImportMapSettings) -> ImportMapSession:
        """Build a session from ``[map]`` settings relative to the project root.

        Precedence: ``path``, then ``inline``, then an ``importmap.json``
        beside the config, then an empty map.
        """
        root = settings.project_root
        base_url = settings.map.base_url or None
        if settings.map.path is not None:
            path = settings.map.path if settings.map.path.is_absolute() else root / settings.map.path
            return cls.from_file(path, base_url, cwd=root)
        if settings.map.inline is not None:
            return cls.from_raw(settings.map.inline, base_url, cwd=root)
        default = find_import_map(root)
        if default is not None:
            return cls.from_file(default, base_url, cwd=root)
        return cls.from_raw({}, base_url, cwd=root)

    def referrer_url(self, importer: str | None) -> str:
        """URL of the importing module; entry points use the base URL."""
        if not importer:
            return self.base_url
        return to_url(importer, cwd=self.cwd)

    def resolve(self, specifier: str, importer: str | None = None) -> Resolution:
        """Resolve *specifier* imported by *importer* (a path or URL)."""
        return resolve(specifier, self.import_map, self.referrer_url(importer))
