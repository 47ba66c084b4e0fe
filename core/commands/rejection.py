"""
PMS Command Layer - Rejection Model
======================================
Structured rejection reasons for denied operations.

A rejection is decided before any persistence call is made, so a
rejected operation never leaves partial state behind.

Every rejection must be:
- Deterministic (same input → same rejection)
- Machine-readable (code)
- Human-readable (message, shown to the operator as-is)
"""

from __future__ import annotations

from dataclasses import dataclass


# ══════════════════════════════════════════════════════════════
# REJECTION REASON (frozen explanation structure)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for an operation rejection.

    Fields:
        code:        Machine-readable rejection code (e.g. 'ROOM_NOT_FREE').
        message:     Human-readable explanation.
        policy_name: Name of the policy that caused rejection.
    """

    code: str
    message: str
    policy_name: str

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
        }


class CommandRejected(Exception):
    """Raised inside a service when a policy denies the operation."""

    def __init__(self, reason: RejectionReason):
        super().__init__(reason.message)
        self.reason = reason


def raise_if_rejected(*reasons) -> None:
    """Raise CommandRejected for the first non-None reason."""
    for reason in reasons:
        if reason is not None:
            raise CommandRejected(reason)


# ══════════════════════════════════════════════════════════════
# STANDARD REJECTION CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """
    Known rejection codes. Extensible by engines.

    Convention: SCREAMING_SNAKE_CASE.
    """

    # ── Request structure ─────────────────────────────────────
    INVALID_REQUEST = "INVALID_REQUEST"

    # ── Reservations ──────────────────────────────────────────
    GUEST_DETAILS_MISSING = "GUEST_DETAILS_MISSING"
    INVALID_STAY_DATES = "INVALID_STAY_DATES"
    ROOM_REQUIRED = "ROOM_REQUIRED"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    ROOM_NOT_BOOKABLE = "ROOM_NOT_BOOKABLE"
    ROOM_CAPACITY_EXCEEDED = "ROOM_CAPACITY_EXCEEDED"
    ROOM_NOT_FREE = "ROOM_NOT_FREE"
    ROOM_NUMBER_TAKEN = "ROOM_NUMBER_TAKEN"
    INVALID_ROOM_STATUS = "INVALID_ROOM_STATUS"
    ROOM_OCCUPIED = "ROOM_OCCUPIED"
    RESERVATION_NOT_FOUND = "RESERVATION_NOT_FOUND"
    RESERVATION_TERMINAL = "RESERVATION_TERMINAL"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"

    # ── Inventory / procurement ───────────────────────────────
    QUANTITY_RECEIPT_ONLY = "QUANTITY_RECEIPT_ONLY"
    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"
    SUPPLIER_NOT_FOUND = "SUPPLIER_NOT_FOUND"
    INVALID_RATING = "INVALID_RATING"
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    ORDER_TERMINAL = "ORDER_TERMINAL"
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"

    # ── General ───────────────────────────────────────────────
    POLICY_VIOLATION = "POLICY_VIOLATION"
