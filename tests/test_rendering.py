from decimal import Decimal

from kiosk.models import MenuItem, Order, OrderLine, OrderStatus, ReadyNotification
from kiosk.rendering import (
    badge_style,
    format_history_entry,
    format_menu_row,
    format_order_lines,
    format_ready_orders,
)


def test_menu_row_shows_price_and_quantity():
    row = format_menu_row(MenuItem("a1", "Bibimbap", Decimal("5")), 3)
    assert row.plain == "Bibimbap  $5.00   x3 "


def test_order_lines_with_total():
    lines = [OrderLine("Bibimbap", 2, Decimal("5.00")), OrderLine("Mandu", 1, Decimal("3.50"))]
    assert format_order_lines(lines).plain == "Bibimbap (x2) - $10.00\nMandu (x1) - $3.50\nTotal: $13.50"


def test_history_entry_uses_status_label():
    order = Order("ORD-1", "owner@example.com", "SN-1", [OrderLine("Mandu", 1, Decimal("3.50"))], OrderStatus.READY)
    text = format_history_entry(order).plain
    assert "Order ID: ORD-1 - Serial Number: SN-1" in text
    assert "Mandu (x1) - $3.50 each" in text
    assert text.endswith(" Order ready ")


def test_ready_orders():
    entries = [ReadyNotification("ORD-1", "SN-1"), ReadyNotification("ORD-2", "SN-1")]
    assert format_ready_orders(entries).plain == "Order ORD-1 is ready!\nOrder ORD-2 is ready!"


def test_badge_styles_differ():
    assert badge_style(OrderStatus.READY) != badge_style(OrderStatus.PENDING)
