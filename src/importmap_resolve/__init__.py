"""importmap-resolve: import-map specifier resolution for build tools."""

from importmap_resolve.domain.errors import ImportBlockedError, InvalidMapError
from importmap_resolve.domain.importmap import (
    ResolvedImportMap,
    ScopeEntry,
    SpecifierMap,
    parse_import_map,
)
from importmap_resolve.domain.resolver import Resolution, ResolutionStatus, resolve

__version__ = "0.3.0"

__all__ = [
    "ImportBlockedError",
    "InvalidMapError",
    "Resolution",
    "ResolutionStatus",
    "ResolvedImportMap",
    "ScopeEntry",
    "SpecifierMap",
    "__version__",
    "parse_import_map",
    "resolve",
]
