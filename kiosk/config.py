"""Runtime configuration defaults for the order API and status polling."""

from __future__ import annotations

import os

_API_BASE_URL_ENV = "KIOSK_API_BASE_URL"
_POLL_INTERVAL_ENV = "KIOSK_POLL_INTERVAL_SECONDS"
_REQUEST_TIMEOUT_ENV = "KIOSK_REQUEST_TIMEOUT_SECONDS"
_DEBUG_LOG_PATH_ENV = "KIOSK_DEBUG_LOG_PATH"


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


API_BASE_URL = os.environ.get(_API_BASE_URL_ENV, "").strip() or "http://localhost:5000"

POLL_INTERVAL_SECONDS = _env_float(_POLL_INTERVAL_ENV, 10.0)
REQUEST_TIMEOUT_SECONDS = _env_float(_REQUEST_TIMEOUT_ENV, 20.0)

DEBUG_LOG_PATH = os.environ.get(_DEBUG_LOG_PATH_ENV, "").strip() or "/tmp/kiosk-debug.log"

# Captions shown on the history status badges.
PENDING_LABEL = "We are preparing your order"
READY_LABEL = "Order ready"

MSG_MENU_FETCH_FAILED = "Error fetching menu items."
MSG_EMPTY_ORDER = "No items selected for the order."
MSG_SUBMISSION_FAILED = "Error saving order."
