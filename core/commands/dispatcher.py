"""
PMS Command Layer - Operation Dispatcher
==========================================
Run Operation → Produce Outcome → Notify.

The Dispatcher is the HANDLER BOUNDARY every service entry point
runs behind. It is the only place rejections and persistence
failures are recovered.

The Dispatcher DOES NOT:
- Decide business rules (policies do)
- Touch the record store
- Retry anything

Flow:
1. Run the operation callable
2. CommandRejected → REJECTED outcome, reason message notified as error
3. StoreError      → FAILED outcome, generic message notified as error
4. Otherwise       → the operation's own outcome; SUCCEEDED is notified
                     as success, NOOP is silent

Any other exception is a programming error and propagates.
"""

from __future__ import annotations

import logging
from typing import Callable

from core.commands.outcomes import ServiceOutcome
from core.commands.rejection import CommandRejected
from core.notifications import ERROR, SUCCESS, Notifier
from core.store.base import StoreError

logger = logging.getLogger("pms.commands")

DEFAULT_FAILURE_MESSAGE = "Something went wrong. Please try again."

Operation = Callable[[], ServiceOutcome]


class OperationDispatcher:
    """
    Usage:
        dispatcher = OperationDispatcher(notifier=notifier)
        outcome = dispatcher.dispatch(
            "create_reservation",
            lambda: self._create(request),
            failure_message="Failed to create reservation.",
        )
    """

    def __init__(self, *, notifier: Notifier):
        self._notifier = notifier

    @property
    def notifier(self) -> Notifier:
        return self._notifier

    def dispatch(
        self,
        operation_name: str,
        operation: Operation,
        *,
        failure_message: str = DEFAULT_FAILURE_MESSAGE,
    ) -> ServiceOutcome:
        try:
            outcome = operation()
        except CommandRejected as exc:
            reason = exc.reason
            logger.info(
                "%s rejected by '%s': [%s] %s",
                operation_name, reason.policy_name, reason.code, reason.message,
            )
            self._notifier.notify(ERROR, reason.message)
            return ServiceOutcome.rejected(reason)
        except StoreError as exc:
            logger.error("%s failed: %s", operation_name, exc)
            self._notifier.notify(ERROR, failure_message)
            return ServiceOutcome.failed(failure_message)

        if not isinstance(outcome, ServiceOutcome):
            raise TypeError(
                f"Operation must return ServiceOutcome, "
                f"got {type(outcome).__name__}."
            )
        if outcome.ok and outcome.message:
            self._notifier.notify(SUCCESS, outcome.message)
        logger.debug("%s → %s", operation_name, outcome.status.value)
        return outcome
