from decimal import Decimal

import pytest

from kiosk.models import MenuItem, Order
from kiosk.ready_feed import ReadyOrderFeed
from kiosk.workflow import CartWorkflow


class FakeOrderService:
    """In-memory stand-in for the order API client."""

    def __init__(self, menu=None):
        self.menu = list(menu or [])
        self.menu_error = None
        self.submit_error = None
        self.history_error = None
        self.submitted = []
        self.remote_history = None
        # order_id -> detail dict, None (not found) or an exception to raise
        self.statuses = {}
        self.status_calls = []

    def fetch_menu(self, user_email):
        if self.menu_error is not None:
            raise self.menu_error
        return list(self.menu)

    def submit_order(self, order):
        if self.submit_error is not None:
            raise self.submit_error
        self.submitted.append(order)

    def fetch_history(self, user_email):
        if self.history_error is not None:
            raise self.history_error
        if self.remote_history is None:
            return [Order(o.order_id, o.user_email, o.serial_number, list(o.lines)) for o in self.submitted]
        return list(self.remote_history)

    def fetch_order(self, order_id):
        self.status_calls.append(order_id)
        result = self.statuses.get(order_id, {"orderId": order_id})
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def menu():
    return [
        MenuItem(item_id="a1", name="Bibimbap", price=Decimal("5.00")),
        MenuItem(item_id="b2", name="Mandu", price=Decimal("3.50"), image_url="http://img/mandu.png"),
        MenuItem(item_id="c3", name="Kimchi", price=Decimal("0")),
    ]


@pytest.fixture
def service(menu):
    return FakeOrderService(menu)


@pytest.fixture
def feed():
    return ReadyOrderFeed()


@pytest.fixture
def clock():
    ticks = iter(range(1_700_000_000, 1_800_000_000))
    return lambda: float(next(ticks))


@pytest.fixture
def workflow(service, feed, clock):
    wf = CartWorkflow(service, "owner@example.com", serial_number="SN-1", ready_feed=feed, clock=clock)
    wf.load_menu()
    return wf
