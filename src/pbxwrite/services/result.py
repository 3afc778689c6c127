"""Service return types: integrity issues, render errors, and the result envelope.

Services hand back a ServiceResult instead of raising when a value cannot
be encoded. Integrity findings ride along as typed ``Issue`` records so a
render can report them without failing.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Literal

from pydantic import BaseModel, Field

# Error codes carried by ServiceError.code
ENCODE_FAILED = "ENCODE_FAILED"

Severity = Literal["error", "warning"]


class Issue(BaseModel):
    """One integrity finding about a project's object table.

    ``object_id`` is the object the finding is about (``None`` when no root
    is set). Reference findings also name the offending ``field`` and the
    missing ``target_id``.
    """

    model_config = {"frozen": True}

    category: str
    severity: Severity
    message: str
    object_id: int | None = None
    field: str | None = None
    target_id: int | None = None


class ServiceError(BaseModel):
    """Why a render produced no text."""

    model_config = {"frozen": True}

    code: str
    message: str
    value_type: str | None = None


class ServiceResult(BaseModel):
    """Outcome of a check or render.

    Attributes:
        ok: False only when no output could be produced.
        op: ``"check"`` or ``"render"``.
        data: ``{"text", "length"}`` for renders, counts for checks.
        issues: Integrity findings, in the order they were found.
        error: Set when ``ok`` is False.
        meta: Telemetry, when enabled.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    issues: list[Issue] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def success(
        cls,
        op: str,
        data: dict[str, Any] | None = None,
        issues: Iterable[Issue] = (),
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data or {}, issues=list(issues))

    @classmethod
    def failure(
        cls,
        op: str,
        error: ServiceError,
        issues: Iterable[Issue] = (),
    ) -> ServiceResult:
        return cls(ok=False, op=op, error=error, issues=list(issues))

    @property
    def warnings(self) -> list[str]:
        """Messages of every issue, errors included; none of them block output."""
        return [issue.message for issue in self.issues]
