"""
PMS Record Store - App Configuration
======================================
Relational tables for rooms, reservations, inventory and procurement.
"""

from django.apps import AppConfig


class CoreStoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.store"
    label = "core_store"
    verbose_name = "PMS Record Store"
