"""
PMS Django Adapter Wiring
=========================
Builds engine services for one HTTP request.

The record store is shared (it holds no per-request state); the
notifier is fresh per request so the response can echo exactly the
notifications that request produced. Each one is also logged.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

from django.conf import settings

from core.notifications import LoggingNotifier, RecordingNotifier
from core.store.django_store import DjangoRecordStore
from core.time.clock import get_default_clock
from engines.hotel_calendar.services import CalendarService
from engines.hotel_reservation.services import HotelReservationService
from engines.inventory.services import InventoryService
from engines.procurement.services import ProcurementService
from engines.reporting.services import ReportingService

_STORE_LOCK = threading.Lock()
_STORE: DjangoRecordStore | None = None


def get_store() -> DjangoRecordStore:
    """
    Lazy singleton store for adapter runtime.
    """
    global _STORE
    with _STORE_LOCK:
        if _STORE is None:
            _STORE = DjangoRecordStore()
        return _STORE


@dataclass(frozen=True)
class RequestServices:
    notifier: RecordingNotifier
    reservations: HotelReservationService
    calendar: CalendarService
    inventory: InventoryService
    procurement: ProcurementService
    reporting: ReportingService


def build_services() -> RequestServices:
    store = get_store()
    clock = get_default_clock()
    notifier = RecordingNotifier(downstream=LoggingNotifier())
    return RequestServices(
        notifier=notifier,
        reservations=HotelReservationService(
            store=store,
            notifier=notifier,
            clock=clock,
            confirmation_prefix=settings.PMS_CONFIRMATION_PREFIX,
            hotel_timezone=settings.PMS_HOTEL_TIMEZONE,
        ),
        calendar=CalendarService(store=store, notifier=notifier),
        inventory=InventoryService(store=store, notifier=notifier),
        procurement=ProcurementService(
            store=store,
            notifier=notifier,
            clock=clock,
            order_prefix=settings.PMS_ORDER_PREFIX,
            invoice_prefix=settings.PMS_INVOICE_PREFIX,
            payable_terms_days=settings.PMS_PAYABLE_TERMS_DAYS,
        ),
        reporting=ReportingService(
            store=store,
            notifier=notifier,
            clock=clock,
            hotel_timezone=settings.PMS_HOTEL_TIMEZONE,
        ),
    )
