"""Failures reported by the cart and order workflow."""

from __future__ import annotations


class KioskError(Exception):
    """Base class for recoverable kiosk failures."""


class MenuFetchFailed(KioskError):
    """The menu catalog could not be loaded."""


class EmptyOrder(KioskError):
    """No menu item has a quantity above zero."""


class SubmissionFailed(KioskError):
    """The order-acceptance service rejected or never received the order."""


class StatusFetchFailed(KioskError):
    """An order status query failed for a reason other than "not found"."""


class HistoryFetchFailed(KioskError):
    """The order-history service could not be read."""
