"""Order summary modal shown after a successful submission."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from kiosk.models import Order
from kiosk.rendering import format_order_lines


class OrderSummaryModal(ModalScreen[None]):
    """Show the order id, device serial and priced lines of one order."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("enter", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
    ]

    CSS = """
    OrderSummaryModal {
        align: center middle;
        background: $background 60%;
    }

    #summary-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #summary-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #summary-body {
        color: white;
        margin-bottom: 1;
    }

    #summary-help {
        color: #dddddd;
    }
    """

    def __init__(self, order: Order) -> None:
        super().__init__()
        self.order = order

    def compose(self) -> ComposeResult:
        with Container(id="summary-dialog"):
            yield Static("Order Summary", id="summary-title")
            yield Static(id="summary-body")
            yield Static("Enter/Esc/q close", id="summary-help")

    def on_mount(self) -> None:
        body = Text(style="white")
        body.append(f"Order ID: {self.order.order_id}\n", style="bold")
        body.append(f"Serial Number: {self.order.serial_number or '-'}\n\n", style="bold")
        body.append_text(format_order_lines(self.order.lines))
        self.query_one("#summary-body", Static).update(body)

    def action_close(self) -> None:
        self.dismiss()
