from __future__ import annotations

import pytest

from core.commands.outcomes import ServiceOutcome
from core.commands.rejection import ReasonCode, RejectionReason
from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse
from core.http_api.errors import (
    OPERATION_FAILED,
    error_response,
    map_rejection_reason,
    outcome_response,
    rejection_response,
    success_response,
)


REASON = RejectionReason(
    code=ReasonCode.ROOM_NOT_FREE,
    message="Room 101 is already booked for the selected dates.",
    policy_name="room_must_be_free_policy",
)


def test_success_envelope_has_all_keys() -> None:
    payload = success_response({"id": "r-1"})
    assert payload == {"ok": True, "data": {"id": "r-1"}, "error": None, "meta": {}}


def test_error_envelope_has_all_keys() -> None:
    payload = error_response(code="BAD_REQUEST", message="guests must be >= 1.")
    assert payload["ok"] is False
    assert payload["data"] is None
    assert payload["error"] == {
        "code": "BAD_REQUEST",
        "message": "guests must be >= 1.",
        "details": {},
    }
    assert payload["meta"] == {}


def test_error_response_requires_error_body() -> None:
    with pytest.raises(ValueError, match="error must be set"):
        HttpApiResponse(ok=False).to_dict()


def test_error_body_requires_code() -> None:
    with pytest.raises(ValueError, match="code"):
        HttpApiErrorBody(code="", message="x")


def test_rejection_mapping_is_stable() -> None:
    mapped = map_rejection_reason(REASON)
    assert mapped.code == "ROOM_NOT_FREE"
    assert mapped.details == {
        "policy_name": "room_must_be_free_policy",
        "message_key": "rejection.room_not_free",
    }

    payload = rejection_response(REASON, meta={"notifications": []})
    assert payload["error"]["message"] == REASON.message
    assert payload["meta"] == {"notifications": []}


def test_outcome_response_maps_each_status() -> None:
    ok = outcome_response(ServiceOutcome.succeeded("Saved.", data=[1, 2]))
    assert ok["ok"] is True and ok["data"] == [1, 2]

    rejected = outcome_response(ServiceOutcome.rejected(REASON))
    assert rejected["error"]["code"] == "ROOM_NOT_FREE"

    failed = outcome_response(ServiceOutcome.failed("Failed to save."))
    assert failed["error"]["code"] == OPERATION_FAILED
    assert failed["error"]["message"] == "Failed to save."

    noop = outcome_response(ServiceOutcome.noop())
    assert noop["ok"] is True and noop["data"] is None
