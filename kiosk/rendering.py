"""Rendering helpers for menu rows, order lines and status badges."""

from __future__ import annotations

from decimal import Decimal

from rich.text import Text

from kiosk.models import MenuItem, Order, OrderLine, OrderStatus, ReadyNotification, order_total


def format_price(amount: Decimal) -> str:
    return f"${amount:.2f}"


def badge_style(status: OrderStatus) -> str:
    """Return a consistent badge style for order statuses."""
    if status is OrderStatus.READY:
        return "bold #0b1f0f on #5fbf72"
    return "bold #ffffff on #b23a48"


def format_status_badge(status: OrderStatus) -> Text:
    return Text(f" {status.label} ", style=badge_style(status))


def format_menu_row(item: MenuItem, quantity: int) -> Text:
    """Render a menu row as name, price and the current quantity."""
    text = Text()
    text.append(item.name)
    text.append(f"  {format_price(item.price)}", style="dim")
    if quantity > 0:
        text.append("  ")
        text.append(f" x{quantity} ", style="bold #ffffff on #2f6db5")
    else:
        text.append("  x0", style="dim")
    return text


def format_order_lines(lines: list[OrderLine], each: bool = False) -> Text:
    """Render order lines followed by the order total."""
    text = Text()
    for idx, line in enumerate(lines):
        if idx > 0:
            text.append("\n")
        if each:
            text.append(f"{line.name} (x{line.quantity}) - {format_price(line.unit_price)} each")
        else:
            text.append(f"{line.name} (x{line.quantity}) - {format_price(line.line_total)}")
    if lines:
        text.append("\n")
    text.append(f"Total: {format_price(order_total(lines))}", style="bold")
    return text


def format_history_entry(order: Order) -> Text:
    text = Text()
    text.append(f"Order ID: {order.order_id}", style="bold")
    text.append(f" - Serial Number: {order.serial_number or '-'}")
    text.append("\n")
    text.append_text(format_order_lines(order.lines, each=True))
    text.append("\n")
    text.append_text(format_status_badge(order.status))
    return text


def format_ready_orders(entries: list[ReadyNotification]) -> Text:
    text = Text()
    for idx, entry in enumerate(entries):
        if idx > 0:
            text.append("\n")
        text.append(f"Order {entry.order_id} is ready!", style="bold #5fbf72")
    return text
