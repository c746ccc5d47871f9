import json
from decimal import Decimal

import pytest
import requests

from kiosk.client import OrderApiClient
from kiosk.errors import HistoryFetchFailed, MenuFetchFailed, StatusFetchFailed, SubmissionFailed
from kiosk.models import Order, OrderLine


def make_response(status_code, payload=None, url="http://api.test/"):
    resp = requests.Response()
    resp.status_code = status_code
    resp.url = url
    resp._content = b"" if payload is None else json.dumps(payload).encode("utf-8")
    resp.headers["Content-Type"] = "application/json"
    return resp


class RecordingSession(requests.Session):
    def __init__(self, responses):
        super().__init__()
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def make_client(*responses):
    session = RecordingSession(responses)
    return OrderApiClient(base_url="http://api.test/", timeout=5, session=session), session


def test_fetch_menu_parses_items():
    client, session = make_client(
        make_response(200, [{"_id": "a1", "name": "Bibimbap", "price": 5, "imageUrl": "http://img/a1.png"}])
    )

    items = client.fetch_menu("owner@example.com")

    assert items[0].item_id == "a1"
    assert items[0].price == Decimal("5")
    assert items[0].image_url == "http://img/a1.png"
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("GET", "http://api.test/api/menuItems")
    assert kwargs["params"] == {"userEmail": "owner@example.com"}
    assert kwargs["timeout"] == 5


def test_fetch_menu_http_error():
    client, _ = make_client(make_response(500, {"error": "boom"}))
    with pytest.raises(MenuFetchFailed):
        client.fetch_menu("owner@example.com")


def test_fetch_menu_network_error():
    client, _ = make_client(requests.ConnectionError("refused"))
    with pytest.raises(MenuFetchFailed):
        client.fetch_menu("owner@example.com")


def test_fetch_menu_malformed_payload():
    client, _ = make_client(make_response(200, [{"name": "no id", "price": 1}]))
    with pytest.raises(MenuFetchFailed):
        client.fetch_menu("owner@example.com")


@pytest.mark.parametrize("price", ["NaN", "Infinity", "-Infinity", float("nan"), float("inf")])
def test_fetch_menu_non_finite_price(price):
    client, _ = make_client(make_response(200, [{"_id": "a1", "name": "Tea", "price": price}]))
    with pytest.raises(MenuFetchFailed):
        client.fetch_menu("owner@example.com")


def test_submit_order_posts_payload():
    client, session = make_client(make_response(201, {"ok": True}))
    order = Order("ORD-1", "owner@example.com", "SN-1", [OrderLine("Mandu", 2, Decimal("3.50"))])

    client.submit_order(order)

    method, url, kwargs = session.calls[0]
    assert (method, url) == ("POST", "http://api.test/api/orders")
    assert kwargs["json"]["items"] == [{"name": "Mandu", "quantity": 2, "price": 3.5, "total": 7.0}]
    assert kwargs["json"]["orderId"] == "ORD-1"


def test_submit_order_failure():
    client, _ = make_client(make_response(400, {"error": "bad"}))
    order = Order("ORD-1", "owner@example.com", None, [OrderLine("Mandu", 1, Decimal("3.50"))])
    with pytest.raises(SubmissionFailed):
        client.submit_order(order)


def test_fetch_history():
    client, session = make_client(
        make_response(
            200,
            [{"orderId": "ORD-9", "serialNumber": "SN-1", "items": [{"name": "Mandu", "quantity": 1, "price": 3.5, "total": 3.5}]}],
        )
    )

    history = client.fetch_history("owner@example.com")

    assert history[0].order_id == "ORD-9"
    assert history[0].user_email == "owner@example.com"
    assert history[0].total == Decimal("3.5")
    assert session.calls[0][1] == "http://api.test/api/orders/history"


def test_fetch_history_failure():
    client, _ = make_client(requests.Timeout("slow"))
    with pytest.raises(HistoryFetchFailed):
        client.fetch_history("owner@example.com")


def test_fetch_order_found():
    client, session = make_client(make_response(200, {"orderId": "ORD-1"}))
    assert client.fetch_order("ORD-1") == {"orderId": "ORD-1"}
    assert session.calls[0][1] == "http://api.test/api/orders/ORD-1"


def test_fetch_order_not_found_is_none():
    client, _ = make_client(make_response(404, {"error": "not found"}))
    assert client.fetch_order("ORD-1") is None


@pytest.mark.parametrize("result", [make_response(500, {"error": "boom"}), requests.ConnectionError("reset")])
def test_fetch_order_other_errors(result):
    client, _ = make_client(result)
    with pytest.raises(StatusFetchFailed):
        client.fetch_order("ORD-1")
