"""
PMS HTTP API - Error Mapping
============================
Stable transport mapping for rejections, persistence failures and
malformed requests.
"""

from __future__ import annotations

from typing import Any, Optional

from core.commands.outcomes import ServiceOutcome
from core.commands.rejection import RejectionReason
from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse

OPERATION_FAILED = "OPERATION_FAILED"
BAD_REQUEST = "BAD_REQUEST"


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
    meta: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
        meta=meta,
    ).to_dict()


def success_response(
    data: Any,
    *,
    meta: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data, meta=meta).to_dict()


def map_rejection_reason(reason: RejectionReason) -> HttpApiErrorBody:
    return HttpApiErrorBody(
        code=reason.code,
        message=reason.message,
        details={
            "policy_name": reason.policy_name,
            "message_key": f"rejection.{reason.code.lower()}",
        },
    )


def rejection_response(
    reason: RejectionReason,
    *,
    meta: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    mapped = map_rejection_reason(reason)
    return error_response(
        code=mapped.code,
        message=mapped.message,
        details=mapped.details,
        meta=meta,
    )


def outcome_response(
    outcome: ServiceOutcome,
    *,
    meta: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Envelope for a service outcome; NOOP counts as success with no data."""
    if outcome.is_rejected:
        return rejection_response(outcome.reason, meta=meta)
    if outcome.is_failed:
        return error_response(code=OPERATION_FAILED, message=outcome.message, meta=meta)
    return success_response(outcome.data, meta=meta)
