"""
PMS Command Layer - Service Outcome Contract
===============================================
Every service entry point produces exactly one Outcome and never
lets a rejection or a persistence failure escape to its caller.

SUCCEEDED → the operation was persisted.
REJECTED  → validation/policy denied it before any write; reason is mandatory.
FAILED    → the persistence collaborator failed; message is generic.

Rules:
- Outcome is immutable (frozen dataclass)
- REJECTED must contain reason (RejectionReason)
- SUCCEEDED and FAILED must NOT contain reason
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from core.commands.rejection import RejectionReason


# ══════════════════════════════════════════════════════════════
# OUTCOME STATUS
# ══════════════════════════════════════════════════════════════

class OutcomeStatus(Enum):
    SUCCEEDED = "SUCCEEDED"
    REJECTED = "REJECTED"
    FAILED = "FAILED"
    NOOP = "NOOP"


# ══════════════════════════════════════════════════════════════
# SERVICE OUTCOME
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ServiceOutcome:
    """
    Result of one service operation.

    Fields:
        status:  SUCCEEDED, REJECTED, FAILED or NOOP.
        message: The text that was sent to the notifier.
        reason:  RejectionReason (mandatory if REJECTED, None otherwise).
        data:    The record(s) produced, when SUCCEEDED.
    """

    status: OutcomeStatus
    message: str = ""
    reason: Optional[RejectionReason] = None
    data: Any = None

    def __post_init__(self):
        if not isinstance(self.status, OutcomeStatus):
            raise ValueError(
                f"status must be OutcomeStatus, got {type(self.status).__name__}."
            )

        if self.status == OutcomeStatus.REJECTED and self.reason is None:
            raise ValueError(
                "REJECTED outcome must include a RejectionReason."
            )

        if self.status != OutcomeStatus.REJECTED and self.reason is not None:
            raise ValueError(
                "Only REJECTED outcomes carry a RejectionReason."
            )

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.SUCCEEDED

    @property
    def is_rejected(self) -> bool:
        return self.status == OutcomeStatus.REJECTED

    @property
    def is_failed(self) -> bool:
        return self.status == OutcomeStatus.FAILED

    @classmethod
    def succeeded(cls, message: str, data: Any = None) -> "ServiceOutcome":
        return cls(status=OutcomeStatus.SUCCEEDED, message=message, data=data)

    @classmethod
    def rejected(cls, reason: RejectionReason) -> "ServiceOutcome":
        return cls(status=OutcomeStatus.REJECTED, message=reason.message,
                   reason=reason)

    @classmethod
    def failed(cls, message: str) -> "ServiceOutcome":
        return cls(status=OutcomeStatus.FAILED, message=message)

    @classmethod
    def noop(cls) -> "ServiceOutcome":
        return cls(status=OutcomeStatus.NOOP)
