"""Error taxonomy for import-map parsing and host integration.

Only two conditions are exceptions. Blocked and unmatched specifiers are
ordinary resolution outcomes (see :class:`~importmap_resolve.domain.resolver.Resolution`);
:class:`ImportBlockedError` exists for hosts that must abort on a blocked import.
"""

from __future__ import annotations


class InvalidMapError(ValueError):
    """The raw import map violates a structural or addressing invariant.

    Raised at parse time only. No partially-parsed map is ever returned.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        scope: str | None = None,
    ) -> None:
        self.message = message
        self.key = key
        self.scope = scope
        super().__init__(self._describe())

    def _describe(self) -> str:
        where: list[str] = []
        if self.scope is not None:
            where.append(f"scope {self.scope!r}")
        if self.key is not None:
            where.append(f"key {self.key!r}")
        if not where:
            return self.message
        return f"{self.message} ({', '.join(where)})"


class ImportBlockedError(Exception):
    """A specifier is mapped to null and must not be resolved."""

    def __init__(self, specifier: str, referrer: str) -> None:
        self.specifier = specifier
        self.referrer = referrer
        super().__init__(
            f"Import of {specifier!r} from {referrer!r} is blocked by the import map"
        )
