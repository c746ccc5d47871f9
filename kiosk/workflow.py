"""Cart and order workflow: quantities, submission and status tracking."""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from decimal import Decimal
from typing import Callable, Protocol

from kiosk.config import MSG_EMPTY_ORDER, MSG_MENU_FETCH_FAILED, MSG_SUBMISSION_FAILED
from kiosk.errors import EmptyOrder, HistoryFetchFailed, MenuFetchFailed, StatusFetchFailed, SubmissionFailed
from kiosk.models import MenuItem, Order, OrderLine, OrderStatus, ReadyNotification, order_total
from kiosk.ready_feed import ReadyOrderFeed

logger = logging.getLogger(__name__)


class OrderService(Protocol):
    """Remote collaborators the workflow talks to."""

    def fetch_menu(self, user_email: str) -> list[MenuItem]: ...

    def submit_order(self, order: Order) -> None: ...

    def fetch_history(self, user_email: str) -> list[Order]: ...

    def fetch_order(self, order_id: str) -> dict | None: ...


class CartWorkflow:
    """Owns the cart for one user/device and the orders it has submitted."""

    def __init__(
        self,
        service: OrderService,
        user_email: str,
        serial_number: str | None = None,
        ready_feed: ReadyOrderFeed | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.service = service
        self.user_email = user_email
        self.serial_number = serial_number
        self.ready_feed = ready_feed if ready_feed is not None else ReadyOrderFeed()
        self._clock = clock
        self._last_order_millis = 0
        self._history_generation = 0

        self.menu_items: list[MenuItem] = []
        self.quantities: dict[str, int] = {}
        self.history: list[Order] = []
        self.last_order: Order | None = None
        self.last_error: str | None = None

    # -- menu ---------------------------------------------------------------

    def load_menu(self) -> list[MenuItem]:
        try:
            items = self.service.fetch_menu(self.user_email)
        except MenuFetchFailed:
            self.menu_items = []
            self.quantities = {}
            self.last_error = MSG_MENU_FETCH_FAILED
            raise

        self.menu_items = list(items)
        self.quantities = {item.item_id: 0 for item in self.menu_items}
        self.last_error = None
        logger.info("menu_loaded user=%s items=%d", self.user_email, len(self.menu_items))
        return self.menu_items

    # -- cart ---------------------------------------------------------------

    def quantity_of(self, item_id: str) -> int:
        return self.quantities.get(item_id, 0)

    def adjust_quantity(self, item_id: str, delta: int) -> int:
        """Add ``delta`` to an item's count, never going below zero."""
        if item_id not in self.quantities:
            logger.warning("adjust_unknown_item item_id=%s", item_id)
            return 0
        count = max(0, self.quantities[item_id] + delta)
        self.quantities[item_id] = count
        return count

    def increase_quantity(self, item_id: str) -> int:
        return self.adjust_quantity(item_id, 1)

    def decrease_quantity(self, item_id: str) -> int:
        return self.adjust_quantity(item_id, -1)

    def remove_item(self, item_id: str) -> None:
        if item_id in self.quantities:
            self.quantities[item_id] = 0

    def _reset_quantities(self) -> None:
        self.quantities = {item.item_id: 0 for item in self.menu_items}

    def build_order(self) -> list[OrderLine]:
        lines = [
            OrderLine(name=item.name, quantity=self.quantities[item.item_id], unit_price=item.price)
            for item in self.menu_items
            if self.quantities.get(item.item_id, 0) > 0
        ]
        if not lines:
            self.last_order = None
            self.last_error = MSG_EMPTY_ORDER
            raise EmptyOrder(MSG_EMPTY_ORDER)
        return lines

    @staticmethod
    def order_total(lines: list[OrderLine]) -> Decimal:
        return order_total(lines)

    # -- submission ---------------------------------------------------------

    def _next_order_id(self) -> str:
        millis = int(self._clock() * 1000)
        if millis <= self._last_order_millis:
            millis = self._last_order_millis + 1
        self._last_order_millis = millis
        return f"ORD-{millis}"

    def submit_order(self, lines: list[OrderLine] | None = None) -> Order:
        """Send the cart to the order service.

        On failure the cart is left exactly as it was so the user can retry.
        """
        if lines is None:
            lines = self.build_order()

        order = Order(
            order_id=self._next_order_id(),
            user_email=self.user_email,
            serial_number=self.serial_number,
            lines=list(lines),
        )
        try:
            self.service.submit_order(order)
        except SubmissionFailed:
            self.last_error = MSG_SUBMISSION_FAILED
            raise

        self.history = [*self.history, order]
        self.last_order = order
        self.last_error = None
        self._reset_quantities()
        logger.info("order_submitted order_id=%s lines=%d total=%s", order.order_id, len(order.lines), order.total)
        return order

    def refresh_history(self) -> list[Order]:
        """Replace local history with the server's copy, keeping known Ready statuses.

        Local orders the server does not list yet are kept at the end. A clear that
        happens while the fetch is in flight wins over the fetched copy.
        """
        generation = self._history_generation
        try:
            remote = self.service.fetch_history(self.user_email)
        except HistoryFetchFailed as exc:
            logger.error("history_refresh_failed user=%s error=%s", self.user_email, exc)
            return self.history

        if generation != self._history_generation:
            logger.debug("history_refresh_discarded user=%s reason=cleared", self.user_email)
            return self.history

        known = {order.order_id: order.status for order in self.history}
        remote_ids = {order.order_id for order in remote}
        merged = [
            replace(order, status=OrderStatus.READY)
            if known.get(order.order_id) is OrderStatus.READY
            else order
            for order in remote
        ]
        merged.extend(order for order in self.history if order.order_id not in remote_ids)
        self.history = merged
        logger.debug("history_refreshed user=%s orders=%d", self.user_email, len(merged))
        return self.history

    # -- status -------------------------------------------------------------

    def status_of(self, order_id: str) -> OrderStatus:
        for order in self.history:
            if order.order_id == order_id:
                return order.status
        return OrderStatus.PENDING

    def poll_status(self) -> dict[str, OrderStatus]:
        """Query every order's status and apply the results in one replacement.

        A found order is still pending; a missing one has left the queue and is ready.
        Other failures keep the previous status.
        """
        snapshot = list(self.history)
        if not snapshot:
            return {}

        updates: dict[str, OrderStatus] = {}
        for order in snapshot:
            if order.status is OrderStatus.READY:
                updates[order.order_id] = OrderStatus.READY
                continue
            try:
                detail = self.service.fetch_order(order.order_id)
            except StatusFetchFailed as exc:
                logger.warning("status_fetch_failed order_id=%s error=%s", order.order_id, exc)
                continue
            updates[order.order_id] = OrderStatus.PENDING if detail is not None else OrderStatus.READY

        self.history = [
            replace(order, status=updates[order.order_id])
            if order.order_id in updates and order.status is not OrderStatus.READY
            else order
            for order in self.history
        ]
        logger.debug(
            "status_polled orders=%d ready=%d",
            len(snapshot),
            sum(1 for status in updates.values() if status is OrderStatus.READY),
        )
        return updates

    def clear_history(self) -> None:
        self.history = []
        self._history_generation += 1

    # -- ready feed ---------------------------------------------------------

    def ready_orders(self) -> list[ReadyNotification]:
        return self.ready_feed.for_serial(self.serial_number)

    def clear_ready_orders(self) -> None:
        self.ready_feed.clear()
