"""
PMS Record Store - Relational Models
======================================
Tables behind the record-store contract.

This file contains NO business logic. Derived values (stock status,
stay totals, nights) are computed by the engines, never here.
Primary keys are UUIDs assigned by the store on insert.
"""

from __future__ import annotations

import uuid

from django.db import models


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class RoomStatus(models.TextChoices):
    AVAILABLE = "AVAILABLE", "Available"
    OCCUPIED = "OCCUPIED", "Occupied"
    RESERVED = "RESERVED", "Reserved"
    OUT_OF_ORDER = "OUT_OF_ORDER", "Out of order"
    OUT_OF_SERVICE = "OUT_OF_SERVICE", "Out of service"


class CleaningStatus(models.TextChoices):
    CLEAN = "CLEAN", "Clean"
    DIRTY = "DIRTY", "Dirty"
    IN_PROGRESS = "IN_PROGRESS", "In progress"
    INSPECTED = "INSPECTED", "Inspected"


class ReservationStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    CONFIRMED = "CONFIRMED", "Confirmed"
    CHECKED_IN = "CHECKED_IN", "Checked in"
    CHECKED_OUT = "CHECKED_OUT", "Checked out"
    CANCELLED = "CANCELLED", "Cancelled"
    NO_SHOW = "NO_SHOW", "No show"


class BookingSource(models.TextChoices):
    DIRECT = "DIRECT", "Direct"
    WEBSITE = "WEBSITE", "Website"
    BOOKING_COM = "BOOKING_COM", "Booking.com"
    EXPEDIA = "EXPEDIA", "Expedia"
    AIRBNB = "AIRBNB", "Airbnb"
    WALK_IN = "WALK_IN", "Walk-in"


class ItemDestination(models.TextChoices):
    RESTAURANT = "RESTAURANT", "Restaurant"
    MINIMARKET = "MINIMARKET", "Minimarket"
    BOTH = "BOTH", "Both"
    INTERNAL = "INTERNAL", "Internal"


class PurchaseOrderStatus(models.TextChoices):
    DRAFT = "DRAFT", "Draft"
    PENDING = "PENDING", "Pending"
    APPROVED = "APPROVED", "Approved"
    ORDERED = "ORDERED", "Ordered"
    RECEIVED = "RECEIVED", "Received"
    CANCELLED = "CANCELLED", "Cancelled"


class InvoiceType(models.TextChoices):
    RECEIVABLE = "RECEIVABLE", "Receivable"
    PAYABLE = "PAYABLE", "Payable"


class InvoiceStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    PAID = "PAID", "Paid"
    OVERDUE = "OVERDUE", "Overdue"
    CANCELLED = "CANCELLED", "Cancelled"


# ══════════════════════════════════════════════════════════════
# ROOMS & RESERVATIONS
# ══════════════════════════════════════════════════════════════

class Room(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    room_number = models.CharField(max_length=32, unique=True)
    name = models.CharField(max_length=255, blank=True, default="")
    floor = models.IntegerField(default=1)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(max_digits=12, decimal_places=2)
    weekday_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    weekend_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    day_stay_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    capacity = models.PositiveIntegerField(default=2)
    status = models.CharField(
        max_length=20, choices=RoomStatus.choices, default=RoomStatus.AVAILABLE,
    )
    cleaning_status = models.CharField(
        max_length=20, choices=CleaningStatus.choices, default=CleaningStatus.CLEAN,
    )
    amenities = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "pms_rooms"
        ordering = ["room_number"]

    def __str__(self) -> str:
        return f"{self.room_number} {self.name}".strip()


class Reservation(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    confirmation_code = models.CharField(max_length=32, unique=True)
    guest_name = models.CharField(max_length=255)
    guest_email = models.CharField(max_length=255, blank=True, default="")
    phone = models.CharField(max_length=64, blank=True, default="")
    room = models.ForeignKey(
        Room,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="reservations",
    )
    check_in = models.DateField()
    check_out = models.DateField()
    check_in_time = models.TimeField(null=True, blank=True)
    check_out_time = models.TimeField(null=True, blank=True)
    nights = models.IntegerField(default=1)
    guests_count = models.PositiveIntegerField(default=1)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    status = models.CharField(
        max_length=20, choices=ReservationStatus.choices,
        default=ReservationStatus.PENDING,
    )
    source = models.CharField(
        max_length=20, choices=BookingSource.choices, default=BookingSource.DIRECT,
    )
    notes = models.TextField(blank=True, default="")
    is_day_stay = models.BooleanField(default=False)
    extra_bed_count = models.PositiveIntegerField(default=0)
    extra_wood_count = models.PositiveIntegerField(default=0)
    discount_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    top_up_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "pms_reservations"
        ordering = ["check_in", "created_at"]
        indexes = [
            models.Index(fields=["room", "check_in"], name="idx_res_room_checkin"),
            models.Index(fields=["status"], name="idx_res_status"),
        ]

    def __str__(self) -> str:
        return f"{self.confirmation_code} {self.guest_name}"


# ══════════════════════════════════════════════════════════════
# INVENTORY & SUPPLIERS
# ══════════════════════════════════════════════════════════════

class Supplier(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    email = models.CharField(max_length=255, blank=True, default="")
    phone = models.CharField(max_length=64, blank=True, default="")
    address = models.TextField(blank=True, default="")
    categories = models.JSONField(default=list, blank=True)
    rating = models.PositiveSmallIntegerField(default=5)
    total_orders = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "pms_suppliers"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class InventoryItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    sku = models.CharField(max_length=64, blank=True, default="")
    category = models.CharField(max_length=32, default="FOOD")
    quantity = models.IntegerField(default=0)
    unit = models.CharField(max_length=32, default="pcs")
    min_stock = models.IntegerField(default=0)
    max_stock = models.IntegerField(default=100)
    unit_cost = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    sell_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    destination = models.CharField(
        max_length=20, choices=ItemDestination.choices,
        default=ItemDestination.INTERNAL,
    )
    supplier = models.ForeignKey(
        Supplier,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="items",
    )
    location = models.CharField(max_length=128, blank=True, default="")
    last_restocked = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "pms_inventory_items"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


# ══════════════════════════════════════════════════════════════
# PROCUREMENT & FINANCE
# ══════════════════════════════════════════════════════════════

class Invoice(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    invoice_number = models.CharField(max_length=32, unique=True)
    invoice_type = models.CharField(max_length=20, choices=InvoiceType.choices)
    customer_or_vendor = models.CharField(max_length=255, blank=True, default="")
    amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    due_date = models.DateField(null=True, blank=True)
    status = models.CharField(
        max_length=20, choices=InvoiceStatus.choices, default=InvoiceStatus.PENDING,
    )
    items = models.JSONField(default=list, blank=True)
    paid_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "pms_invoices"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.invoice_number


class PurchaseOrder(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_number = models.CharField(max_length=32, unique=True)
    supplier = models.ForeignKey(
        Supplier,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    supplier_name = models.CharField(max_length=255, blank=True, default="")
    status = models.CharField(
        max_length=20, choices=PurchaseOrderStatus.choices,
        default=PurchaseOrderStatus.PENDING,
    )
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    expected_delivery = models.DateField(null=True, blank=True)
    notes = models.TextField(blank=True, default="")
    invoice = models.ForeignKey(
        Invoice,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="purchase_orders",
    )
    received_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "pms_purchase_orders"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.order_number


class PurchaseOrderItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(
        PurchaseOrder, on_delete=models.CASCADE, related_name="lines",
    )
    item = models.ForeignKey(
        InventoryItem,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_lines",
    )
    item_name = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField()
    unit_cost = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    total = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "pms_purchase_order_items"
        ordering = ["created_at"]


class OrderTemplate(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    supplier = models.ForeignKey(
        Supplier,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="templates",
    )
    supplier_name = models.CharField(max_length=255, blank=True, default="")
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "pms_order_templates"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.name


class OrderTemplateItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    template = models.ForeignKey(
        OrderTemplate, on_delete=models.CASCADE, related_name="lines",
    )
    item = models.ForeignKey(
        InventoryItem,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="template_lines",
    )
    item_name = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField()
    unit_cost = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    total = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "pms_order_template_items"
        ordering = ["created_at"]
