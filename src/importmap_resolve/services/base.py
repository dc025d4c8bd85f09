"""BaseService: abstract foundation for importmap-resolve services.

Every service receives the unified settings at construction time, and
optionally a prepared session and a plugin manager for notifications.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from importmap_resolve.domain.errors import InvalidMapError
from importmap_resolve.services.result import ServiceResult
from importmap_resolve.services.session import ImportMapSession

if TYPE_CHECKING:
    from importmap_resolve.config.settings import ImportMapSettings
    from importmap_resolve.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for service-layer classes.

    Usage::

        class ResolveService(BaseService):
            def resolve(self, specifiers: list[str]) -> ServiceResult:
                opened = self._open_session("resolve")
                if isinstance(opened, ServiceResult):
                    return opened
                ...
    """

    def __init__(
        self,
        settings: ImportMapSettings,
        *,
        session: ImportMapSession | None = None,
        plugins: PluginManager | None = None,
    ) -> None:
        self._settings = settings
        self._session = session
        self._plugins = plugins

    def _open_session(self, op: str) -> ImportMapSession | ServiceResult:
        """Return the session, loading it from settings on first use.

        Load failures come back as a failed ServiceResult for *op*.
        """
        if self._session is not None:
            return self._session
        try:
            self._session = ImportMapSession.from_settings(self._settings)
        except FileNotFoundError as exc:
            return ServiceResult.failure(
                op,
                "MAP_NOT_FOUND",
                f"Import map not found: {exc.filename}",
                path=str(exc.filename),
            )
        except json.JSONDecodeError as exc:
            return ServiceResult.failure(op, "INVALID_JSON", f"Import map is not valid JSON: {exc}")
        except InvalidMapError as exc:
            return ServiceResult.failure(
                op,
                "INVALID_MAP",
                str(exc),
                key=exc.key,
                scope=exc.scope,
            )
        return self._session

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Fire a notification hook. No-op without a plugin manager.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        if self._plugins is None:
            return
        try:
            getattr(self._plugins.hook, hook_name)(**payload)
        except Exception:
            logger.debug("Event dispatch failed for %s", hook_name, exc_info=True)
            warnings.append(f"Event dispatch failed for {hook_name}")
