"""Domain models for the menu kiosk."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from kiosk.config import PENDING_LABEL, READY_LABEL


def to_decimal(value: Any) -> Decimal:
    """Convert a JSON number (or numeric string) to a Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"Not a price: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Not a price: {value!r}")
    return result


class OrderStatus(str, Enum):
    """Lifecycle of a submitted order. Only PENDING -> READY is allowed."""

    PENDING = "Pending"
    READY = "Ready"

    @property
    def label(self) -> str:
        return READY_LABEL if self is OrderStatus.READY else PENDING_LABEL

    @classmethod
    def from_wire(cls, value: Any) -> OrderStatus:
        """Map a server-side status string; anything not ready counts as pending."""
        if isinstance(value, str) and value.strip().lower() in {"ready", READY_LABEL.lower()}:
            return cls.READY
        return cls.PENDING


@dataclass(frozen=True)
class MenuItem:
    """A menu item fetched from the catalog service."""

    item_id: str
    name: str
    price: Decimal
    image_url: str | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> MenuItem:
        price = to_decimal(data["price"])
        if price < 0:
            raise ValueError(f"Negative price for menu item {data.get('_id')!r}")
        return cls(
            item_id=str(data["_id"]),
            name=str(data["name"]),
            price=price,
            image_url=data.get("imageUrl") or None,
        )


@dataclass(frozen=True)
class OrderLine:
    """One priced, quantified menu item within an order."""

    name: str
    quantity: int
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_json(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "price": float(self.unit_price),
            "total": float(self.line_total),
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> OrderLine:
        return cls(name=str(data["name"]), quantity=int(data["quantity"]), unit_price=to_decimal(data["price"]))


def order_total(lines: list[OrderLine]) -> Decimal:
    """Sum of line totals."""
    return sum((line.line_total for line in lines), Decimal("0"))


@dataclass
class Order:
    """A submitted order tied to a user and an optional device serial."""

    order_id: str
    user_email: str
    serial_number: str | None
    lines: list[OrderLine] = field(default_factory=list)
    status: OrderStatus = OrderStatus.PENDING

    @property
    def total(self) -> Decimal:
        return order_total(self.lines)

    def to_payload(self) -> dict[str, Any]:
        """Body posted to the order-acceptance service."""
        return {
            "userEmail": self.user_email,
            "items": [line.to_json() for line in self.lines],
            "orderId": self.order_id,
            "serialNumber": self.serial_number,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any], user_email: str) -> Order:
        return cls(
            order_id=str(data["orderId"]),
            user_email=str(data.get("userEmail") or user_email),
            serial_number=data.get("serialNumber"),
            lines=[OrderLine.from_json(item) for item in data.get("items", [])],
            status=OrderStatus.from_wire(data.get("status")),
        )


@dataclass(frozen=True)
class ReadyNotification:
    """An order announced as ready on the shared feed."""

    order_id: str
    serial_number: str | None
