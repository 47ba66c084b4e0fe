"""
PMS Reporting Engine Tests
===========================
Tests cover:
- Report period bounds and validation
- Overdue payable detection
- Financial summary over reservations, orders and invoices
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from core.commands import ReasonCode
from core.notifications import ERROR, RecordingNotifier
from core.store import base as entities
from core.store.memory import InMemoryRecordStore
from core.time.clock import FixedClock
from engines.reporting.commands import ReportPeriod
from engines.reporting.policies import report_period_must_be_valid_policy
from engines.reporting.services import ReportingService, is_overdue_payable

NOW = datetime(2025, 3, 15, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def env():
    store = InMemoryRecordStore(clock=FixedClock(NOW))
    notifier = RecordingNotifier()
    svc = ReportingService(store=store, notifier=notifier, clock=FixedClock(NOW))
    return svc, store, notifier


def _stay(store, check_in, status, amount):
    store.insert(entities.RESERVATIONS, {
        "confirmation_code": f"CNF-{check_in.isoformat()}-{status}",
        "guest_name": "Ana",
        "check_in": check_in,
        "check_out": date(check_in.year, check_in.month, check_in.day + 1),
        "status": status,
        "total_amount": Decimal(amount),
    })


def _order(store, created, status, amount):
    store.insert(entities.PURCHASE_ORDERS, {
        "order_number": f"PO-{created.isoformat()}-{status}",
        "status": status,
        "total_amount": Decimal(amount),
        "created_at": datetime(created.year, created.month, created.day, 12,
                               tzinfo=timezone.utc),
    })


def _invoice(store, kind, status, amount, due):
    store.insert(entities.INVOICES, {
        "invoice_number": f"INV-{kind}-{status}-{amount}",
        "invoice_type": kind,
        "status": status,
        "amount": Decimal(amount),
        "due_date": due,
    })


# ══════════════════════════════════════════════════════════════
# PERIOD
# ══════════════════════════════════════════════════════════════

class TestReportPeriod:
    def test_open_period_contains_everything(self):
        period = ReportPeriod()
        assert period.is_open
        assert period.contains(date(1999, 1, 1))
        assert period.contains(None)

    def test_bounds_are_inclusive(self):
        period = ReportPeriod("2025-03-01", "2025-03-31")
        assert period.date_from == date(2025, 3, 1)
        assert period.contains(date(2025, 3, 1))
        assert period.contains(date(2025, 3, 31))
        assert not period.contains(date(2025, 4, 1))
        assert not period.contains(date(2025, 2, 28))

    def test_half_open(self):
        period = ReportPeriod(date_from=date(2025, 3, 10))
        assert not period.is_open
        assert period.contains(date(2030, 1, 1))
        assert not period.contains(None)

    def test_datetime_uses_its_day(self):
        period = ReportPeriod(date(2025, 3, 1), date(2025, 3, 1))
        assert period.contains(datetime(2025, 3, 1, 23, 59, tzinfo=timezone.utc))

    def test_reversed_period_rejected(self):
        reason = report_period_must_be_valid_policy(
            ReportPeriod(date(2025, 3, 31), date(2025, 3, 1)))
        assert reason.code == ReasonCode.INVALID_REQUEST
        assert report_period_must_be_valid_policy(ReportPeriod()) is None


class TestOverduePayable:
    @pytest.mark.parametrize("invoice,expected", [
        ({"invoice_type": "PAYABLE", "status": "OVERDUE", "due_date": date(2025, 4, 1)}, True),
        ({"invoice_type": "PAYABLE", "status": "PENDING", "due_date": date(2025, 3, 14)}, True),
        ({"invoice_type": "PAYABLE", "status": "PENDING", "due_date": date(2025, 3, 15)}, False),
        ({"invoice_type": "PAYABLE", "status": "PAID", "due_date": date(2025, 1, 1)}, False),
        ({"invoice_type": "PAYABLE", "status": "PENDING", "due_date": None}, False),
        ({"invoice_type": "RECEIVABLE", "status": "OVERDUE", "due_date": None}, False),
    ])
    def test_overdue(self, invoice, expected):
        assert is_overdue_payable(invoice, date(2025, 3, 15)) is expected


# ══════════════════════════════════════════════════════════════
# FINANCIAL SUMMARY
# ══════════════════════════════════════════════════════════════

class TestFinancialSummary:
    def _seed(self, store):
        _stay(store, date(2025, 3, 2), "CONFIRMED", "200")
        _stay(store, date(2025, 3, 5), "CHECKED_OUT", "150.50")
        _stay(store, date(2025, 3, 8), "CANCELLED", "90")
        _stay(store, date(2025, 3, 9), "PENDING", "75")
        _stay(store, date(2025, 4, 2), "CHECKED_IN", "300")

        _order(store, date(2025, 3, 3), "RECEIVED", "40")
        _order(store, date(2025, 3, 4), "ORDERED", "25")
        _order(store, date(2025, 3, 6), "PENDING", "999")
        _order(store, date(2025, 4, 1), "RECEIVED", "60")

        _invoice(store, "RECEIVABLE", "PENDING", "120", date(2025, 4, 1))
        _invoice(store, "RECEIVABLE", "PAID", "80", date(2025, 3, 1))
        _invoice(store, "PAYABLE", "PENDING", "33", date(2025, 3, 1))
        _invoice(store, "PAYABLE", "PENDING", "44", date(2025, 4, 1))
        _invoice(store, "PAYABLE", "OVERDUE", "10", date(2025, 3, 20))

    def test_march(self, env):
        svc, store, _ = env
        self._seed(store)

        outcome = svc.financial_summary(date(2025, 3, 1), date(2025, 3, 31))

        assert outcome.ok
        summary = outcome.data
        assert summary["room_revenue"] == Decimal("350.50")
        assert summary["lost_revenue"] == Decimal("90")
        assert summary["purchase_expenses"] == Decimal("65")
        assert summary["net"] == Decimal("285.50")
        assert summary["pending_receivables"] == Decimal("120")
        assert summary["overdue_payables"] == Decimal("43")
        assert (summary["reservation_count"], summary["cancelled_count"],
                summary["order_count"]) == (2, 1, 2)

    def test_open_period(self, env):
        svc, store, _ = env
        self._seed(store)
        summary = svc.financial_summary().data
        assert summary["date_from"] is None
        assert summary["room_revenue"] == Decimal("650.50")
        assert summary["purchase_expenses"] == Decimal("125")

    def test_today_override_moves_overdue_line(self, env):
        svc, store, _ = env
        self._seed(store)
        summary = svc.financial_summary(today=date(2025, 4, 2)).data
        assert summary["overdue_payables"] == Decimal("87")

    def test_empty_store(self, env):
        svc, _, _ = env
        summary = svc.financial_summary().data
        assert summary["room_revenue"] == Decimal("0")
        assert summary["net"] == Decimal("0")
        assert summary["order_count"] == 0

    def test_reversed_period(self, env):
        svc, _, notifier = env
        outcome = svc.financial_summary(date(2025, 3, 31), date(2025, 3, 1))
        assert outcome.reason.code == ReasonCode.INVALID_REQUEST
        assert notifier.last()[0] == ERROR


class TestHotelTimezone:
    def _late_order(self, store):
        store.insert(entities.PURCHASE_ORDERS, {
            "order_number": "PO-LATE",
            "status": "RECEIVED",
            "total_amount": Decimal("70"),
            "created_at": datetime(2025, 3, 31, 23, 0, tzinfo=timezone.utc),
        })

    def _service(self, store, tz, now=NOW):
        return ReportingService(store=store, notifier=RecordingNotifier(),
                                clock=FixedClock(now), hotel_timezone=tz)

    def test_order_counts_on_the_local_day(self):
        store = InMemoryRecordStore(clock=FixedClock(NOW))
        self._late_order(store)
        svc = self._service(store, "Europe/Madrid")

        march = svc.financial_summary(date(2025, 3, 1), date(2025, 3, 31)).data
        april = svc.financial_summary(date(2025, 4, 1), date(2025, 4, 30)).data
        assert march["order_count"] == 0
        assert april["purchase_expenses"] == Decimal("70")

    def test_utc_hotel_keeps_utc_day(self):
        store = InMemoryRecordStore(clock=FixedClock(NOW))
        self._late_order(store)
        svc = self._service(store, "UTC")
        march = svc.financial_summary(date(2025, 3, 1), date(2025, 3, 31)).data
        assert march["order_count"] == 1

    def test_overdue_uses_local_today(self):
        store = InMemoryRecordStore(clock=FixedClock(NOW))
        _invoice(store, "PAYABLE", "PENDING", "33", date(2025, 3, 15))
        late_evening = datetime(2025, 3, 15, 23, 30, tzinfo=timezone.utc)

        utc = self._service(store, "UTC", late_evening).financial_summary().data
        ahead = self._service(store, "Pacific/Kiritimati", late_evening).financial_summary().data
        assert utc["overdue_payables"] == Decimal("0")
        assert ahead["overdue_payables"] == Decimal("33")
