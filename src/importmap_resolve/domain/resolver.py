"""Specifier resolution against a parsed import map.

Pure functions over an immutable :class:`ResolvedImportMap`. Safe to call
concurrently from any number of threads or tasks.

Order of precedence for one request:

1. The most specific scope whose prefix is a literal string prefix of the
   referrer URL.
2. The top-level ``imports``.
3. The specifier itself, if it is URL-like (``matched=False``).

Within one specifier map an exact key beats any prefix key, and longer
prefix keys beat shorter ones.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from importmap_resolve.domain.importmap import ResolvedImportMap, ScopeEntry, SpecifierMap
from importmap_resolve.domain.urls import parse_url, parse_url_like

logger = logging.getLogger(__name__)


class ResolutionStatus(StrEnum):
    """Outcome classes a host must tell apart."""

    RESOLVED = "resolved"  # remapped by the import map
    BLOCKED = "blocked"  # mapped to null
    PASSTHROUGH = "passthrough"  # not mapped, but already a valid URL
    UNMATCHED = "unmatched"  # not mapped, host applies its default resolution


@dataclass(frozen=True)
class Resolution:
    """Result of resolving one specifier.

    Attributes:
        resolved: Serialized URL, or ``None`` when blocked or unmatched.
        matched: Whether an import-map entry decided the outcome.
    """

    resolved: str | None
    matched: bool

    @property
    def status(self) -> ResolutionStatus:
        if self.matched:
            return ResolutionStatus.RESOLVED if self.resolved is not None else ResolutionStatus.BLOCKED
        if self.resolved is not None:
            return ResolutionStatus.PASSTHROUGH
        return ResolutionStatus.UNMATCHED

    @property
    def blocked(self) -> bool:
        return self.matched and self.resolved is None


BLOCKED = Resolution(resolved=None, matched=True)
UNMATCHED = Resolution(resolved=None, matched=False)


def select_scope(import_map: ResolvedImportMap, referrer_url: str) -> ScopeEntry | None:
    """Return the most specific scope containing *referrer_url*, if any.

    Containment is a literal string-prefix test on serialized URLs, so
    ``https://e.com/a`` lies inside both ``https://e.com/a`` and
    ``https://e.com/``.
    """
    for entry in import_map.scopes:
        if referrer_url.startswith(entry.prefix):
            return entry
    return None


def match_specifier(specifier: str, imports: SpecifierMap) -> Resolution | None:
    """Match *specifier* against one specifier map.

    Returns ``None`` when no entry applies, so the caller can fall back to
    the next map.
    """
    if specifier in imports:
        address = imports[specifier]
        return BLOCKED if address is None else Resolution(resolved=address, matched=True)

    for key in imports.prefix_keys:
        if not specifier.startswith(key):
            continue
        address = imports[key]
        if address is None:
            return BLOCKED
        candidate = parse_url(address + specifier[len(key) :])
        # The remainder may not escape the mapped prefix via dot segments.
        if candidate is None or not candidate.startswith(address):
            logger.debug("Rejected prefix match %r -> %r for %r", key, address, specifier)
            continue
        return Resolution(resolved=candidate, matched=True)
    return None


def resolve(specifier: str, import_map: ResolvedImportMap, referrer_url: str) -> Resolution:
    """Resolve *specifier* imported from the module at *referrer_url*.

    Args:
        specifier: The module specifier as written in source.
        import_map: A map produced by :func:`parse_import_map`.
        referrer_url: Absolute URL of the importing module, or the map's
            base URL for entry points.

    Raises:
        ValueError: If *referrer_url* is not an absolute URL.
    """
    referrer = parse_url(referrer_url)
    if referrer is None:
        msg = f"Referrer {referrer_url!r} is not an absolute URL"
        raise ValueError(msg)

    as_url = parse_url_like(specifier, referrer)
    normalized = as_url if as_url is not None else specifier

    scope = select_scope(import_map, referrer)
    if scope is not None:
        result = match_specifier(normalized, scope.imports)
        if result is not None:
            return result

    result = match_specifier(normalized, import_map.imports)
    if result is not None:
        return result

    if as_url is not None:
        return Resolution(resolved=as_url, matched=False)
    return UNMATCHED
