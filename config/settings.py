"""
Sheet Ledger – Django Settings (Infrastructure Only)
======================================================
Django serves as the HTTP container for the ledger.
The ledger core does not depend on Django; only adapters do.

Environment:
    DJANGO_SECRET_KEY                      secret key (dev default below)
    DJANGO_DEBUG                           "1" / "0"
    SHEETLEDGER_SEED_DEMO_DATA             load the demo yard on first request
    SHEETLEDGER_ENFORCE_POOL_AVAILABILITY  refuse over-drawing movements
    SHEETLEDGER_LOG_LEVEL                  level for the sheetledger loggers
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
# BASE_DIR = project root where manage.py lives
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get(
    "DJANGO_SECRET_KEY",
    "sheetledger-dev-key-replace-before-deployment",
)

DEBUG = os.environ.get("DJANGO_DEBUG", "1") == "1"

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "testserver"]

# ── Installed Apps ────────────────────────────────────────────
# The event log is in memory; no ledger models are registered.
INSTALLED_APPS = [
    "django.contrib.contenttypes",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

# ── Database ──────────────────────────────────────────────────
# Unused by the ledger; Django still expects a default alias.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Sheet Ledger ──────────────────────────────────────────────
# Read by core.config.rules.ledger_rules_from_mapping.
SHEETLEDGER = {
    "ENFORCE_POOL_AVAILABILITY": os.environ.get(
        "SHEETLEDGER_ENFORCE_POOL_AVAILABILITY", "1"
    ),
    "STOCK_SHEET_ACTIVE_ONLY": True,
    "DEFAULT_DATE_RANGE": "ALL",
    "DEFAULT_HISTORY_ORDER": "ITEM_ASC",
    "SEED_DEMO_DATA": os.environ.get("SHEETLEDGER_SEED_DEMO_DATA", "0"),
}

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
        },
    },
    "loggers": {
        "sheetledger": {
            "handlers": ["console"],
            "level": os.environ.get("SHEETLEDGER_LOG_LEVEL", "INFO").upper(),
            "propagate": True,
        },
    },
}
