"""ResolveService: resolve, validate, and inspect the configured import map."""

from __future__ import annotations

from typing import Any

import structlog

from importmap_resolve.domain.resolver import ResolutionStatus, resolve
from importmap_resolve.services.base import BaseService
from importmap_resolve.services.result import ServiceError, ServiceResult

log = structlog.get_logger(__name__)

_FAILURE_REASONS = {
    ResolutionStatus.BLOCKED: "Blocked by the import map",
    ResolutionStatus.UNMATCHED: "No import map entry for bare specifier",
}


class ResolveService(BaseService):
    """Operations over the session's import map."""

    def resolve(
        self,
        specifiers: list[str],
        *,
        referrer: str | None = None,
        strict: bool = False,
    ) -> ServiceResult:
        """Resolve each specifier as imported from *referrer*.

        Fails with ``BLOCKED`` if any specifier is mapped to null, and with
        ``UNMATCHED`` under *strict* if a bare specifier has no entry. The
        per-specifier outcomes stay in ``data`` either way.
        """
        opened = self._open_session("resolve")
        if isinstance(opened, ServiceResult):
            return opened
        session = opened

        referrer_url = session.referrer_url(referrer)
        warnings: list[str] = []
        results: list[dict[str, Any]] = []
        with structlog.contextvars.bound_contextvars(referrer=referrer_url):
            for specifier in specifiers:
                outcome = resolve(specifier, session.import_map, referrer_url)
                log.debug("resolved", specifier=specifier, status=outcome.status.value)
                results.append(
                    {
                        "specifier": specifier,
                        "status": outcome.status.value,
                        "resolved": outcome.resolved,
                        "matched": outcome.matched,
                    }
                )
                self._dispatch_event(
                    "post_resolve",
                    {
                        "specifier": specifier,
                        "referrer": referrer_url,
                        "status": outcome.status.value,
                        "resolved": outcome.resolved,
                    },
                    warnings,
                )

        data: dict[str, Any] = {
            "referrer": referrer_url,
            "count": len(results),
            "results": results,
        }
        failing = ResolutionStatus.BLOCKED
        offenders = [r["specifier"] for r in results if r["status"] == failing]
        if not offenders and strict:
            failing = ResolutionStatus.UNMATCHED
            offenders = [r["specifier"] for r in results if r["status"] == failing]
        if offenders:
            names = ", ".join(repr(s) for s in offenders)
            reason = _FAILURE_REASONS[failing]
            return ServiceResult(
                ok=False,
                op="resolve",
                data=data,
                warnings=warnings,
                error=ServiceError(
                    code=failing.name,
                    message=f"{reason}: {names} (referrer {referrer_url})",
                    detail={"specifiers": offenders, "referrer": referrer_url},
                ),
            )
        return ServiceResult.success("resolve", data, warnings=warnings)

    def check(self) -> ServiceResult:
        """Validate the import map and summarize it."""
        opened = self._open_session("check")
        if isinstance(opened, ServiceResult):
            return opened
        import_map = opened.import_map

        maps = [import_map.imports, *(entry.imports for entry in import_map.scopes)]
        return ServiceResult.success(
            "check",
            {
                "base_url": import_map.base_url,
                "imports": len(import_map.imports),
                "scopes": len(import_map.scopes),
                "prefix_keys": sum(len(m.prefix_keys) for m in maps),
                "blocked": sum(1 for m in maps for address in m.values() if address is None),
            },
        )

    def show(self) -> ServiceResult:
        """Return the normalized import map."""
        opened = self._open_session("show")
        if isinstance(opened, ServiceResult):
            return opened
        data = {"base_url": opened.base_url, **opened.import_map.to_dict()}
        return ServiceResult.success("show", data)
