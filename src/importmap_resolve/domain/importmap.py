"""Import-map parsing into an immutable, query-ready structure.

``parse_import_map`` validates a raw JSON-shaped import map and resolves
every address and scope prefix to an absolute URL. Any violation raises
:class:`InvalidMapError`; a partially valid map is never returned.

INVARIANT: A ResolvedImportMap is never mutated after parsing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, TypeAlias

from importmap_resolve.domain.errors import InvalidMapError
from importmap_resolve.domain.urls import parse_url, parse_url_like, resolve_address

logger = logging.getLogger(__name__)

# Serialized absolute URL, or None for a blocked specifier.
Address: TypeAlias = str | None

TOP_LEVEL_KEYS = frozenset({"imports", "scopes"})


class SpecifierMap(Mapping[str, Address]):
    """Read-only mapping of specifier key to address.

    Iteration follows declaration order. Prefix keys (ending in ``/``) are
    also kept longest-first for prefix matching.
    """

    __slots__ = ("_entries", "_prefix_keys")

    def __init__(self, entries: Iterable[tuple[str, Address]] = ()) -> None:
        data = dict(entries)
        self._entries: Mapping[str, Address] = MappingProxyType(data)
        # sorted() is stable, so equal lengths keep declaration order.
        self._prefix_keys: tuple[str, ...] = tuple(
            sorted((key for key in data if key.endswith("/")), key=len, reverse=True)
        )

    def __getitem__(self, key: str) -> Address:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SpecifierMap({dict(self._entries)!r})"

    @property
    def prefix_keys(self) -> tuple[str, ...]:
        """Keys ending in ``/``, longest first."""
        return self._prefix_keys


@dataclass(frozen=True)
class ScopeEntry:
    """Specifier overrides for importers whose URL starts with ``prefix``."""

    prefix: str
    imports: SpecifierMap


@dataclass(frozen=True)
class ResolvedImportMap:
    """A validated import map.

    Attributes:
        imports: Top-level specifier mappings.
        scopes: Scope entries, longest prefix first; equal lengths keep
            declaration order.
        base_url: The URL relative addresses were resolved against.
    """

    imports: SpecifierMap
    scopes: tuple[ScopeEntry, ...] = ()
    base_url: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the normalized map in import-map JSON shape."""
        return {
            "imports": dict(self.imports),
            "scopes": {entry.prefix: dict(entry.imports) for entry in self.scopes},
        }


def parse_import_map(raw: Any, base_url: str) -> ResolvedImportMap:
    """Validate *raw* and resolve it against *base_url*.

    Args:
        raw: A mapping with optional ``imports`` (specifier -> address or
            null) and ``scopes`` (prefix -> such a mapping) members.
        base_url: Absolute URL that relative addresses, relative scope
            prefixes, and URL-like keys are resolved against.

    Raises:
        InvalidMapError: If the structure is malformed, an address or
            scope prefix is not a valid URL, a prefix key maps to an
            address without a trailing ``/``, or two keys collide after
            normalization.
    """
    base = parse_url(base_url) if isinstance(base_url, str) else None
    if base is None:
        raise InvalidMapError(f"Base URL {base_url!r} is not an absolute URL")
    if not isinstance(raw, Mapping):
        raise InvalidMapError(f"Import map must be an object, got {type(raw).__name__}")

    unknown = sorted(str(key) for key in raw if key not in TOP_LEVEL_KEYS)
    if unknown:
        logger.warning("Ignoring unknown import map members: %s", ", ".join(unknown))

    imports = _parse_specifier_map(raw.get("imports", {}), base, scope=None)
    scopes = _parse_scopes(raw.get("scopes", {}), base)

    logger.debug(
        "Parsed import map: %d imports, %d scopes (base %s)",
        len(imports),
        len(scopes),
        base,
    )
    return ResolvedImportMap(imports=imports, scopes=scopes, base_url=base)


def _normalize_key(key: str, base: str) -> str:
    """URL-like keys compare by serialized URL; bare keys compare verbatim."""
    url = parse_url_like(key, base)
    return url if url is not None else key


def _parse_address(key: str, value: Any, base: str, scope: str | None) -> Address:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidMapError(
            f"Address must be a string or null, got {type(value).__name__}",
            key=key,
            scope=scope,
        )
    address = resolve_address(value, base) if value else None
    if address is None:
        raise InvalidMapError(f"Address {value!r} is not a valid URL", key=key, scope=scope)
    if key.endswith("/") and not address.endswith("/"):
        raise InvalidMapError(
            f"Address {value!r} for a trailing-slash key must also end with '/'",
            key=key,
            scope=scope,
        )
    return address


def _parse_specifier_map(raw: Any, base: str, *, scope: str | None) -> SpecifierMap:
    if not isinstance(raw, Mapping):
        what = "Scope mapping" if scope is not None else '"imports"'
        raise InvalidMapError(f"{what} must be an object", scope=scope)

    entries: dict[str, Address] = {}
    for key, value in raw.items():
        if not isinstance(key, str) or not key:
            raise InvalidMapError("Specifier keys must be non-empty strings", key=repr(key), scope=scope)
        normalized = _normalize_key(key, base)
        if normalized in entries:
            raise InvalidMapError(
                f"Duplicate specifier key (normalizes to {normalized!r})",
                key=key,
                scope=scope,
            )
        entries[normalized] = _parse_address(normalized, value, base, scope)
    return SpecifierMap(entries.items())


def _parse_scopes(raw: Any, base: str) -> tuple[ScopeEntry, ...]:
    if not isinstance(raw, Mapping):
        raise InvalidMapError('"scopes" must be an object')

    entries: list[ScopeEntry] = []
    seen: set[str] = set()
    for prefix_key, scope_map in raw.items():
        if not isinstance(prefix_key, str) or not prefix_key:
            raise InvalidMapError("Scope prefixes must be non-empty strings", scope=repr(prefix_key))
        prefix = resolve_address(prefix_key, base)
        if prefix is None:
            raise InvalidMapError(f"Scope prefix {prefix_key!r} is not a valid URL", scope=prefix_key)
        if prefix in seen:
            raise InvalidMapError(
                f"Duplicate scope prefix (normalizes to {prefix!r})",
                scope=prefix_key,
            )
        seen.add(prefix)
        entries.append(
            ScopeEntry(prefix=prefix, imports=_parse_specifier_map(scope_map, base, scope=prefix_key))
        )

    entries.sort(key=lambda entry: len(entry.prefix), reverse=True)
    return tuple(entries)
