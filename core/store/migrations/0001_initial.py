import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Room",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("room_number", models.CharField(max_length=32, unique=True)),
                ("name", models.CharField(blank=True, default="", max_length=255)),
                ("floor", models.IntegerField(default=1)),
                ("description", models.TextField(blank=True, default="")),
                ("price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("weekday_price", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("weekend_price", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("day_stay_price", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("capacity", models.PositiveIntegerField(default=2)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("AVAILABLE", "Available"),
                            ("OCCUPIED", "Occupied"),
                            ("RESERVED", "Reserved"),
                            ("OUT_OF_ORDER", "Out of order"),
                            ("OUT_OF_SERVICE", "Out of service"),
                        ],
                        default="AVAILABLE",
                        max_length=20,
                    ),
                ),
                (
                    "cleaning_status",
                    models.CharField(
                        choices=[
                            ("CLEAN", "Clean"),
                            ("DIRTY", "Dirty"),
                            ("IN_PROGRESS", "In progress"),
                            ("INSPECTED", "Inspected"),
                        ],
                        default="CLEAN",
                        max_length=20,
                    ),
                ),
                ("amenities", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "pms_rooms",
                "ordering": ["room_number"],
            },
        ),
        migrations.CreateModel(
            name="Supplier",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("email", models.CharField(blank=True, default="", max_length=255)),
                ("phone", models.CharField(blank=True, default="", max_length=64)),
                ("address", models.TextField(blank=True, default="")),
                ("categories", models.JSONField(blank=True, default=list)),
                ("rating", models.PositiveSmallIntegerField(default=5)),
                ("total_orders", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "pms_suppliers",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Invoice",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("invoice_number", models.CharField(max_length=32, unique=True)),
                (
                    "invoice_type",
                    models.CharField(
                        choices=[("RECEIVABLE", "Receivable"), ("PAYABLE", "Payable")],
                        max_length=20,
                    ),
                ),
                ("customer_or_vendor", models.CharField(blank=True, default="", max_length=255)),
                ("amount", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("due_date", models.DateField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("PAID", "Paid"),
                            ("OVERDUE", "Overdue"),
                            ("CANCELLED", "Cancelled"),
                        ],
                        default="PENDING",
                        max_length=20,
                    ),
                ),
                ("items", models.JSONField(blank=True, default=list)),
                ("paid_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "pms_invoices",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Reservation",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("confirmation_code", models.CharField(max_length=32, unique=True)),
                ("guest_name", models.CharField(max_length=255)),
                ("guest_email", models.CharField(blank=True, default="", max_length=255)),
                ("phone", models.CharField(blank=True, default="", max_length=64)),
                ("check_in", models.DateField()),
                ("check_out", models.DateField()),
                ("check_in_time", models.TimeField(blank=True, null=True)),
                ("check_out_time", models.TimeField(blank=True, null=True)),
                ("nights", models.IntegerField(default=1)),
                ("guests_count", models.PositiveIntegerField(default=1)),
                ("total_amount", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("CONFIRMED", "Confirmed"),
                            ("CHECKED_IN", "Checked in"),
                            ("CHECKED_OUT", "Checked out"),
                            ("CANCELLED", "Cancelled"),
                            ("NO_SHOW", "No show"),
                        ],
                        default="PENDING",
                        max_length=20,
                    ),
                ),
                (
                    "source",
                    models.CharField(
                        choices=[
                            ("DIRECT", "Direct"),
                            ("WEBSITE", "Website"),
                            ("BOOKING_COM", "Booking.com"),
                            ("EXPEDIA", "Expedia"),
                            ("AIRBNB", "Airbnb"),
                            ("WALK_IN", "Walk-in"),
                        ],
                        default="DIRECT",
                        max_length=20,
                    ),
                ),
                ("notes", models.TextField(blank=True, default="")),
                ("is_day_stay", models.BooleanField(default=False)),
                ("extra_bed_count", models.PositiveIntegerField(default=0)),
                ("extra_wood_count", models.PositiveIntegerField(default=0)),
                ("discount_amount", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("top_up_amount", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "room",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reservations",
                        to="core_store.room",
                    ),
                ),
            ],
            options={
                "db_table": "pms_reservations",
                "ordering": ["check_in", "created_at"],
                "indexes": [
                    models.Index(fields=["room", "check_in"], name="idx_res_room_checkin"),
                    models.Index(fields=["status"], name="idx_res_status"),
                ],
            },
        ),
        migrations.CreateModel(
            name="InventoryItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("sku", models.CharField(blank=True, default="", max_length=64)),
                ("category", models.CharField(default="FOOD", max_length=32)),
                ("quantity", models.IntegerField(default=0)),
                ("unit", models.CharField(default="pcs", max_length=32)),
                ("min_stock", models.IntegerField(default=0)),
                ("max_stock", models.IntegerField(default=100)),
                ("unit_cost", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("sell_price", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                (
                    "destination",
                    models.CharField(
                        choices=[
                            ("RESTAURANT", "Restaurant"),
                            ("MINIMARKET", "Minimarket"),
                            ("BOTH", "Both"),
                            ("INTERNAL", "Internal"),
                        ],
                        default="INTERNAL",
                        max_length=20,
                    ),
                ),
                ("location", models.CharField(blank=True, default="", max_length=128)),
                ("last_restocked", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "supplier",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="items",
                        to="core_store.supplier",
                    ),
                ),
            ],
            options={
                "db_table": "pms_inventory_items",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="PurchaseOrder",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("order_number", models.CharField(max_length=32, unique=True)),
                ("supplier_name", models.CharField(blank=True, default="", max_length=255)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("DRAFT", "Draft"),
                            ("PENDING", "Pending"),
                            ("APPROVED", "Approved"),
                            ("ORDERED", "Ordered"),
                            ("RECEIVED", "Received"),
                            ("CANCELLED", "Cancelled"),
                        ],
                        default="PENDING",
                        max_length=20,
                    ),
                ),
                ("total_amount", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("expected_delivery", models.DateField(blank=True, null=True)),
                ("notes", models.TextField(blank=True, default="")),
                ("received_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "supplier",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="orders",
                        to="core_store.supplier",
                    ),
                ),
                (
                    "invoice",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="purchase_orders",
                        to="core_store.invoice",
                    ),
                ),
            ],
            options={
                "db_table": "pms_purchase_orders",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="PurchaseOrderItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("item_name", models.CharField(max_length=255)),
                ("quantity", models.PositiveIntegerField()),
                ("unit_cost", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("total", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="lines",
                        to="core_store.purchaseorder",
                    ),
                ),
                (
                    "item",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="order_lines",
                        to="core_store.inventoryitem",
                    ),
                ),
            ],
            options={
                "db_table": "pms_purchase_order_items",
                "ordering": ["created_at"],
            },
        ),
        migrations.CreateModel(
            name="OrderTemplate",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("supplier_name", models.CharField(blank=True, default="", max_length=255)),
                ("total_amount", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "supplier",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="templates",
                        to="core_store.supplier",
                    ),
                ),
            ],
            options={
                "db_table": "pms_order_templates",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="OrderTemplateItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("item_name", models.CharField(max_length=255)),
                ("quantity", models.PositiveIntegerField()),
                ("unit_cost", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("total", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "template",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="lines",
                        to="core_store.ordertemplate",
                    ),
                ),
                (
                    "item",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="template_lines",
                        to="core_store.inventoryitem",
                    ),
                ),
            ],
            options={
                "db_table": "pms_order_template_items",
                "ordering": ["created_at"],
            },
        ),
    ]
