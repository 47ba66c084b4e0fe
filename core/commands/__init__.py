"""
PMS Command Layer - Public API
================================
Rejections, outcomes and the handler boundary services run behind.
"""

from core.commands.dispatcher import DEFAULT_FAILURE_MESSAGE, OperationDispatcher
from core.commands.outcomes import OutcomeStatus, ServiceOutcome
from core.commands.rejection import (
    CommandRejected,
    ReasonCode,
    RejectionReason,
    raise_if_rejected,
)

__all__ = [
    "DEFAULT_FAILURE_MESSAGE",
    "OperationDispatcher",
    "OutcomeStatus",
    "ServiceOutcome",
    "CommandRejected",
    "ReasonCode",
    "RejectionReason",
    "raise_if_rejected",
]
