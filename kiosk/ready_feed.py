"""Process-wide feed of orders announced as ready."""

from __future__ import annotations

import logging
import threading

from kiosk.models import ReadyNotification

logger = logging.getLogger(__name__)


class ReadyOrderFeed:
    """Shared list of ready notifications.

    Producers call ``publish``. Consumers read a device's slice with ``for_serial``
    and may ``clear`` the whole feed.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[ReadyNotification] = []

    def publish(self, order_id: str, serial_number: str | None) -> ReadyNotification:
        entry = ReadyNotification(order_id=order_id, serial_number=serial_number)
        with self._lock:
            self._entries.append(entry)
        logger.debug("ready_published order_id=%s serial=%s", order_id, serial_number)
        return entry

    def for_serial(self, serial_number: str | None) -> list[ReadyNotification]:
        with self._lock:
            return [entry for entry in self._entries if entry.serial_number == serial_number]

    def all(self) -> list[ReadyNotification]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            dropped = len(self._entries)
            self._entries.clear()
        logger.debug("ready_cleared count=%d", dropped)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
