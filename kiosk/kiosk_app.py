"""Main Textual app class."""

from __future__ import annotations

import logging

from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.timer import Timer
from textual.widgets import Header, Static

from kiosk.config import POLL_INTERVAL_SECONDS
from kiosk.errors import EmptyOrder, MenuFetchFailed, SubmissionFailed
from kiosk.models import MenuItem
from kiosk.rendering import format_history_entry, format_menu_row, format_ready_orders
from kiosk.summary_modal import OrderSummaryModal
from kiosk.workflow import CartWorkflow

logger = logging.getLogger(__name__)


class MenuKioskApp(App):
    """A Textual app for browsing a menu, ordering and following order status."""

    TITLE = "Menu Kiosk"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #menu-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #orders-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #status-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #menu-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #ready-list {
        height: auto;
        padding: 0 1;
        margin-bottom: 1;
    }

    #history-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    loading = reactive(True)
    submitting = reactive(False)
    selected_index = reactive(0)

    BINDINGS = [
        ("up", "move_selection(-1)", "Previous item"),
        ("down", "move_selection(1)", "Next item"),
        ("k", "move_selection(-1)", "Previous item"),
        ("j", "move_selection(1)", "Next item"),
        ("plus,equals_sign,right", "adjust_selected(1)", "More"),
        ("minus,left", "adjust_selected(-1)", "Less"),
        ("x,delete", "remove_selected", "Remove"),
        Binding("ctrl+s", "submit_order", "Get Order", priority=True),
        ("s", "show_summary", "Summary"),
        ("c", "clear_ready_orders", "Clear ready"),
        ("h", "clear_history", "Clear history"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, workflow: CartWorkflow, poll_interval: float = POLL_INTERVAL_SECONDS) -> None:
        super().__init__()
        self.workflow = workflow
        self.poll_interval = poll_interval
        self.system_status = ""
        self._poll_timer: Timer | None = None
        self.sub_title = workflow.user_email

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="menu-pane"):
                yield Static(f"Menu for {self.workflow.user_email}", classes="pane-title")
                yield Static("Loading...", id="menu-list")
            with Vertical(id="orders-pane"):
                yield Static(id="status-bar")
                yield Static(id="ready-list")
                yield Static("Order History", classes="pane-title")
                yield Static(id="history-list")

    def on_mount(self) -> None:
        logger.debug("on_mount user=%s serial=%s", self.workflow.user_email, self.workflow.serial_number)
        self._poll_timer = self.set_interval(self.poll_interval, self._poll_tick)
        self._refresh_all()
        self._load_menu()

    def on_unmount(self) -> None:
        if self._poll_timer is not None:
            self._poll_timer.stop()
            self._poll_timer = None
        logger.debug("on_unmount poll_timer_stopped")

    # -- workers ------------------------------------------------------------

    @work(thread=True, exclusive=True, group="menu")
    def _load_menu(self) -> None:
        try:
            self.workflow.load_menu()
        except MenuFetchFailed as exc:
            logger.error("menu_load_failed error=%s", exc)
        self.call_from_thread(self._finish_loading)

    @work(thread=True, exclusive=True, group="submit")
    def _submit(self) -> None:
        try:
            order = self.workflow.submit_order()
        except (EmptyOrder, SubmissionFailed) as exc:
            logger.warning("submit_blocked reason=%s error=%s", type(exc).__name__, exc)
            self.call_from_thread(self._show_error)
            return

        self.call_from_thread(self._after_submit, order.order_id)
        self.workflow.refresh_history()
        self.call_from_thread(self._refresh_history)

    @work(thread=True, exclusive=True, group="poll")
    def _poll(self) -> None:
        self.workflow.poll_status()
        self.call_from_thread(self._refresh_history)

    def _poll_tick(self) -> None:
        self._refresh_ready()
        if self.workflow.history:
            self._poll()

    # -- actions ------------------------------------------------------------

    def action_move_selection(self, delta: int) -> None:
        if isinstance(self.screen, OrderSummaryModal):
            return
        items = self.workflow.menu_items
        if not items:
            return
        self.selected_index = (self.selected_index + delta) % len(items)
        self._refresh_menu()

    def action_adjust_selected(self, delta: int) -> None:
        if isinstance(self.screen, OrderSummaryModal):
            return
        if self.submitting:
            return
        item = self._selected_item()
        if item is None:
            return
        self.workflow.adjust_quantity(item.item_id, delta)
        self._refresh_menu()

    def action_remove_selected(self) -> None:
        if isinstance(self.screen, OrderSummaryModal):
            return
        if self.submitting:
            return
        item = self._selected_item()
        if item is None:
            return
        self.workflow.remove_item(item.item_id)
        self._refresh_menu()

    def action_submit_order(self) -> None:
        if isinstance(self.screen, OrderSummaryModal):
            return
        if self.loading or self.submitting:
            return
        self.submitting = True
        logger.debug("submit_enter lines=%d", sum(1 for count in self.workflow.quantities.values() if count > 0))
        self.system_status = "Submitting order..."
        self._refresh_status()
        self._submit()

    def action_show_summary(self) -> None:
        if isinstance(self.screen, OrderSummaryModal):
            return
        if self.workflow.last_order is None:
            return
        self.push_screen(OrderSummaryModal(self.workflow.last_order))

    def action_clear_ready_orders(self) -> None:
        if isinstance(self.screen, OrderSummaryModal):
            return
        self.workflow.clear_ready_orders()
        self._refresh_ready()

    def action_clear_history(self) -> None:
        if isinstance(self.screen, OrderSummaryModal):
            return
        self.workflow.clear_history()
        self.system_status = "Order history cleared"
        self._refresh_history()
        self._refresh_status()

    # -- refresh ------------------------------------------------------------

    def _finish_loading(self) -> None:
        self.loading = False
        self.selected_index = 0
        self._refresh_all()

    def _after_submit(self, order_id: str) -> None:
        self.submitting = False
        self.system_status = f"Submitted {order_id}"
        self._refresh_all()
        if self.workflow.last_order is not None:
            self.push_screen(OrderSummaryModal(self.workflow.last_order))

    def _show_error(self) -> None:
        self.submitting = False
        self.system_status = ""
        self._refresh_status()

    def _selected_item(self) -> MenuItem | None:
        items = self.workflow.menu_items
        if not (0 <= self.selected_index < len(items)):
            return None
        return items[self.selected_index]

    def _refresh_all(self) -> None:
        self._refresh_menu()
        self._refresh_status()
        self._refresh_ready()
        self._refresh_history()

    def _refresh_menu(self) -> None:
        try:
            menu_widget = self.query_one("#menu-list", Static)
        except NoMatches:
            return
        if self.loading:
            menu_widget.update("Loading...")
            return

        items = self.workflow.menu_items
        if not items:
            menu_widget.update("No menu items available for this user.")
            return

        if self.selected_index >= len(items):
            self.selected_index = len(items) - 1

        lines = Text()
        for idx, item in enumerate(items):
            if idx > 0:
                lines.append("\n")
            pointer = "➤ " if idx == self.selected_index else "  "
            lines.append(pointer)
            lines.append_text(format_menu_row(item, self.workflow.quantity_of(item.item_id)))
        menu_widget.update(lines)

    def _refresh_status(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return
        text = Text("+/- quantity, X remove, Ctrl+S get order, S summary.\n")
        if self.workflow.last_error:
            text.append(self.workflow.last_error, style="bold #ffb3b3")
        else:
            text.append(self.system_status or "Ready")
        bar.update(text)

    def _refresh_ready(self) -> None:
        try:
            ready_widget = self.query_one("#ready-list", Static)
        except NoMatches:
            return
        entries = self.workflow.ready_orders()
        if not entries:
            ready_widget.update("")
            return
        text = Text("Ready Orders\n", style="bold")
        text.append_text(format_ready_orders(entries))
        text.append("\nC to clear ready orders", style="dim")
        ready_widget.update(text)

    def _refresh_history(self) -> None:
        try:
            history_widget = self.query_one("#history-list", Static)
        except NoMatches:
            return
        history = self.workflow.history
        if not history:
            history_widget.update("(no orders yet)")
            return

        lines = Text()
        for idx, order in enumerate(history):
            if idx > 0:
                lines.append("\n\n")
            lines.append_text(format_history_entry(order))
        history_widget.update(lines)
