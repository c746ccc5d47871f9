"""HTTP client for the menu, order, history and status services."""

from __future__ import annotations

import logging
from typing import Any

import requests

from kiosk.config import API_BASE_URL, REQUEST_TIMEOUT_SECONDS
from kiosk.errors import HistoryFetchFailed, MenuFetchFailed, StatusFetchFailed, SubmissionFailed
from kiosk.models import MenuItem, Order

logger = logging.getLogger(__name__)


def _describe(exc: requests.RequestException) -> str:
    resp = exc.response
    if resp is None:
        return str(exc)
    try:
        payload = resp.json()
    except ValueError:
        payload = resp.text
    return f"HTTP {resp.status_code}: {payload}"


class OrderApiClient:
    """Thin wrapper over a requests session bound to one API base URL."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        resp = self.session.request(method, self._url(path), timeout=self.timeout, **kwargs)
        resp.raise_for_status()
        return resp

    def fetch_menu(self, user_email: str) -> list[MenuItem]:
        try:
            resp = self._request("GET", "/api/menuItems", params={"userEmail": user_email})
            return [MenuItem.from_json(item) for item in resp.json()]
        except requests.RequestException as exc:
            logger.error("menu_fetch_failed user=%s error=%s", user_email, _describe(exc))
            raise MenuFetchFailed(_describe(exc)) from exc
        except (ValueError, KeyError, TypeError) as exc:
            logger.error("menu_fetch_bad_payload user=%s error=%r", user_email, exc)
            raise MenuFetchFailed(f"Malformed menu payload: {exc}") from exc

    def submit_order(self, order: Order) -> None:
        try:
            self._request("POST", "/api/orders", json=order.to_payload())
        except requests.RequestException as exc:
            logger.error("order_submit_failed order_id=%s error=%s", order.order_id, _describe(exc))
            raise SubmissionFailed(_describe(exc)) from exc

    def fetch_history(self, user_email: str) -> list[Order]:
        try:
            resp = self._request("GET", "/api/orders/history", params={"userEmail": user_email})
            return [Order.from_json(item, user_email) for item in resp.json()]
        except requests.RequestException as exc:
            logger.error("history_fetch_failed user=%s error=%s", user_email, _describe(exc))
            raise HistoryFetchFailed(_describe(exc)) from exc
        except (ValueError, KeyError, TypeError) as exc:
            logger.error("history_fetch_bad_payload user=%s error=%r", user_email, exc)
            raise HistoryFetchFailed(f"Malformed history payload: {exc}") from exc

    def fetch_order(self, order_id: str) -> dict[str, Any] | None:
        """Return the order detail, or None when the service answers 404."""
        try:
            resp = self._request("GET", f"/api/orders/{order_id}")
        except requests.HTTPError as exc:
            if exc.response is not None and exc.response.status_code == 404:
                return None
            raise StatusFetchFailed(_describe(exc)) from exc
        except requests.RequestException as exc:
            raise StatusFetchFailed(_describe(exc)) from exc
        try:
            return resp.json()
        except ValueError:
            return {"orderId": order_id}
