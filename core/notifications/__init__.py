"""
PMS Notifications - Operator Feedback Surface
===============================================
Fire-and-forget ``notify(kind, message)``. Nothing downstream of a
notification is ever awaited or consumed by the caller.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Tuple

SUCCESS = "success"
ERROR = "error"
INFO = "info"

KINDS = frozenset({SUCCESS, ERROR, INFO})

logger = logging.getLogger("pms.notifications")


class Notifier(Protocol):
    def notify(self, kind: str, message: str) -> None:
        ...  # pragma: no cover


def _check_kind(kind: str) -> None:
    if kind not in KINDS:
        raise ValueError(f"kind must be one of {sorted(KINDS)}, got '{kind}'.")


class RecordingNotifier:
    """
    Keeps every notification in order; the HTTP adapter echoes them back.
    A ``downstream`` notifier receives each one as well.
    """

    def __init__(self, downstream: Optional[Notifier] = None) -> None:
        self.messages: List[Tuple[str, str]] = []
        self._downstream = downstream

    def notify(self, kind: str, message: str) -> None:
        _check_kind(kind)
        self.messages.append((kind, message))
        if self._downstream is not None:
            self._downstream.notify(kind, message)

    def last(self) -> Tuple[str, str]:
        return self.messages[-1]

    def of_kind(self, kind: str) -> List[str]:
        return [m for k, m in self.messages if k == kind]

    def clear(self) -> None:
        self.messages.clear()


class LoggingNotifier:
    _LEVELS = {SUCCESS: logging.INFO, INFO: logging.INFO, ERROR: logging.WARNING}

    def notify(self, kind: str, message: str) -> None:
        _check_kind(kind)
        logger.log(self._LEVELS[kind], "[%s] %s", kind, message)


__all__ = [
    "SUCCESS",
    "ERROR",
    "INFO",
    "KINDS",
    "Notifier",
    "RecordingNotifier",
    "LoggingNotifier",
]
