"""Results returned by every ShellService operation.

The REPL decides stdout versus stderr from ``ok`` and hands the result
to the output layer; nothing below the service raises past it.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Why a shell operation failed."""

    NO_STORE = "NO_STORE"
    OPEN_FAILED = "OPEN_FAILED"
    NO_ENGINE = "NO_ENGINE"
    ENGINE_ERROR = "ENGINE_ERROR"


class ServiceError(BaseModel):
    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of executing one command.

    Attributes:
        ok: Whether the command succeeded.
        op: The command that ran: ``help``, ``open``, ``close``,
            ``query`` or ``transact``.
        data: Command payload on success. For engine commands this is
            whatever the engine plugin returned.
        warnings: Non-fatal notes, e.g. unknown names passed to ``.help``.
        error: Set when ``ok`` is False.
        meta: Extra engine-supplied information shown in verbose mode.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def success(
        cls, op: str, data: dict[str, Any] | None = None, *, warnings: list[str] | None = None
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data or {}, warnings=warnings or [])

    @classmethod
    def failure(cls, op: str, code: ErrorCode, message: str, **detail: Any) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )

    @property
    def error_message(self) -> str:
        return self.error.message if self.error else "Unknown error"
