"""
PMS - Django Settings (Infrastructure Only)
============================================
Django hosts the record store and the thin HTTP adapter. Engines never
import Django; they receive a store and a notifier.

Hotel-level knobs are read from ``PMS_*`` environment variables so a
deployment can change them without touching code.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("PMS_SECRET_KEY", "pms-dev-key-replace-before-deployment")

DEBUG = os.environ.get("PMS_DEBUG", "1") == "1"

ALLOWED_HOSTS = [h for h in os.environ.get("PMS_ALLOWED_HOSTS", "").split(",") if h]

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    # ── PMS Modules ───────────────────────────────────────
    "core.store",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL ───────────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"

# ── Database ──────────────────────────────────────────────────
# SQLite for development. Production DB configured separately.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("PMS_DB_PATH", BASE_DIR / "db.sqlite3"),
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# ── Default Primary Key ──────────────────────────────────────
# PMS models declare UUID keys explicitly. This is a Django fallback only.
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Hotel ─────────────────────────────────────────────────────
# "Today" for the front desk is the hotel's calendar day, not UTC's.
PMS_HOTEL_TIMEZONE = os.environ.get("PMS_HOTEL_TIMEZONE", "UTC")
PMS_CONFIRMATION_PREFIX = os.environ.get("PMS_CONFIRMATION_PREFIX", "CNF")
PMS_ORDER_PREFIX = os.environ.get("PMS_ORDER_PREFIX", "PO")
PMS_INVOICE_PREFIX = os.environ.get("PMS_INVOICE_PREFIX", "INV")
PMS_PAYABLE_TERMS_DAYS = int(os.environ.get("PMS_PAYABLE_TERMS_DAYS", "30"))

# ── Logging ───────────────────────────────────────────────────
PMS_LOG_LEVEL = os.environ.get("PMS_LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
        },
    },
    "loggers": {
        "pms": {
            "handlers": ["console"],
            "level": PMS_LOG_LEVEL,
            "propagate": True,
        },
    },
}
