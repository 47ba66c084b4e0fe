"""
PMS HTTP API - Contracts
========================
Framework-agnostic response envelope for the JSON endpoints.

Every response is ``{"ok", "data", "error", "meta"}``; exactly one
of ``data``/``error`` is meaningful depending on ``ok``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")
        if not isinstance(self.message, str):
            raise ValueError("message must be a string.")

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None
    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        meta = dict(self.meta or {})
        if self.ok:
            return {"ok": True, "data": self.data, "error": None, "meta": meta}
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "data": None, "error": self.error.to_dict(), "meta": meta}
