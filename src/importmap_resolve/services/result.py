"""ServiceResult and ServiceError: what every service operation returns.

INVARIANT: Service methods report load failures and blocked imports
through ServiceResult instead of raising. The CLI and host adapters
decide how to surface them (exit status, stderr, build errors).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Machine-readable failure: a stable ``code`` plus a human message.

    Codes: ``MAP_NOT_FOUND``, ``INVALID_JSON``, ``INVALID_MAP``,
    ``BLOCKED``, ``UNMATCHED``.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"resolve"``, ``"check"``, ``"show"``).
        data: Operation payload. A failed ``resolve`` still carries the
            per-specifier outcomes here.
        warnings: Non-fatal issues, such as a plugin that failed on
            ``post_resolve``.
        error: Set exactly when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def success(
        cls, op: str, data: dict[str, Any], *, warnings: list[str] | None = None
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data, warnings=warnings or [])

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        """Build a failed result carrying a single structured error."""
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
