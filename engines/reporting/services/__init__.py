"""
PMS Reporting Engine - Application Service
============================================
Read-side financial summary over reservations, purchase orders and
invoices. Nothing here writes to the store.

Period filtering:
- reservations by check-in day
- purchase orders by creation day in the hotel timezone
- invoice balances are point-in-time and ignore the period
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from core.commands import OperationDispatcher, ServiceOutcome, raise_if_rejected
from core.notifications import Notifier
from core.store import base as entities
from core.store.base import RecordStore
from core.time.clock import Clock, SystemClock, local_date, local_today
from core.time.temporal import coerce_date
from engines.hotel_reservation.commands import (
    CANCELLED as RESERVATION_CANCELLED,
    CHECKED_IN,
    CHECKED_OUT,
    CONFIRMED,
)
from engines.procurement.commands import (
    COMMITTED_ORDER_STATUSES,
    INVOICE_OVERDUE,
    INVOICE_PAYABLE,
    INVOICE_PENDING,
    INVOICE_RECEIVABLE,
)
from engines.reporting.commands import ReportPeriod
from engines.reporting.policies import report_period_must_be_valid_policy

logger = logging.getLogger("pms.reporting")

ZERO = Decimal("0")

# Stays that have earned (or are committed to earn) their total.
REVENUE_STATUSES = frozenset({CONFIRMED, CHECKED_IN, CHECKED_OUT})


def _sum(rows: Iterable[Mapping[str, Any]], field: str) -> Decimal:
    return sum((Decimal(str(r.get(field) or 0)) for r in rows), ZERO)


def is_overdue_payable(invoice: Mapping[str, Any], today: date) -> bool:
    if invoice.get("invoice_type") != INVOICE_PAYABLE:
        return False
    if invoice.get("status") == INVOICE_OVERDUE:
        return True
    due = invoice.get("due_date")
    return (invoice.get("status") == INVOICE_PENDING
            and due is not None and coerce_date(due) < today)


class ReportingService:
    def __init__(self, *, store: RecordStore, notifier: Notifier,
                 clock: Optional[Clock] = None, hotel_timezone: str = "UTC"):
        self._store = store
        self._clock = clock or SystemClock()
        self._tz = hotel_timezone
        self._dispatcher = OperationDispatcher(notifier=notifier)

    def financial_summary(self, date_from: Optional[date] = None,
                          date_to: Optional[date] = None, *,
                          today: Optional[date] = None) -> ServiceOutcome:
        def run():
            period = ReportPeriod(date_from=date_from, date_to=date_to)
            raise_if_rejected(report_period_must_be_valid_policy(period))
            day = today or local_today(self._clock, self._tz)

            reservations = [r for r in self._store.query(entities.RESERVATIONS)
                            if period.contains(r.get("check_in"))]
            earned = [r for r in reservations if r["status"] in REVENUE_STATUSES]
            lost = [r for r in reservations if r["status"] == RESERVATION_CANCELLED]

            orders = [o for o in self._store.query(
                          entities.PURCHASE_ORDERS,
                          {"status__in": sorted(COMMITTED_ORDER_STATUSES)})
                      if period.contains(local_date(o.get("created_at"), self._tz))]

            invoices = self._store.query(entities.INVOICES)
            receivables = [i for i in invoices
                           if i["invoice_type"] == INVOICE_RECEIVABLE
                           and i["status"] == INVOICE_PENDING]
            overdue = [i for i in invoices if is_overdue_payable(i, day)]

            room_revenue = _sum(earned, "total_amount")
            expenses = _sum(orders, "total_amount")
            summary = {
                "date_from":           period.date_from,
                "date_to":             period.date_to,
                "room_revenue":        room_revenue,
                "lost_revenue":        _sum(lost, "total_amount"),
                "purchase_expenses":   expenses,
                "pending_receivables": _sum(receivables, "amount"),
                "overdue_payables":    _sum(overdue, "amount"),
                "net":                 room_revenue - expenses,
                "reservation_count":   len(earned),
                "cancelled_count":     len(lost),
                "order_count":         len(orders),
            }
            logger.debug("financial summary %s..%s net=%s",
                         period.date_from, period.date_to, summary["net"])
            return ServiceOutcome.succeeded("", data=summary)

        return self._dispatcher.dispatch(
            "financial_summary", run, failure_message="Failed to load report.",
        )
