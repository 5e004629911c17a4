"""Result envelope returned by every ConfigService operation.

Failures carry an :class:`~pimctl.config.errors.ErrorCode` plus the
error's own ``details()``, so a caller can branch on the code without
parsing the message.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from pimctl.config.errors import ConfigError, ErrorCode


class ServiceError(BaseModel):
    """Failure payload: stable code, readable message, flat string details."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: ConfigError) -> ServiceError:
        return cls(code=exc.code, message=str(exc), detail=exc.details())


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    ``op`` names the operation (``config_show``, ``check_access``, ...) and
    selects the renderer.  ``warnings`` hold non-fatal notices such as
    running on the built-in defaults; ``meta`` records where the config
    directory and profile were resolved from.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: ConfigError) -> ServiceResult:
        """Wrap a configuration error as a failed result for *op*."""
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))

    @property
    def error_code(self) -> ErrorCode | None:
        return self.error.code if self.error else None
