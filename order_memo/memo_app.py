"""Main Textual app class."""

from __future__ import annotations

import logging
from typing import Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Click, Leave, MouseDown, MouseUp
from textual.screen import ModalScreen
from textual.timer import Timer
from textual.widgets import Header, Static

from order_memo.config import ADDED_NOTICE_SECONDS, STORAGE_DB_PATH
from order_memo.confirmed_modal import ConfirmedModal
from order_memo.customer_modal import CustomerModal
from order_memo.engine import OrderMemoEngine
from order_memo.hold_repeat import HoldRepeater
from order_memo.menu_modal import MenuModal
from order_memo.models import DraftOrder
from order_memo.rendering import format_order_row, format_totals
from order_memo.reset_modal import ResetModal
from order_memo.storage import KeyValueStore, SqliteCookieStore, StorageUnavailableError
from order_memo.visitor_modal import VisitorModal
from order_memo.visitors import VisitorRegistry

logger = logging.getLogger(__name__)


def open_default_store(db_path: str = STORAGE_DB_PATH) -> KeyValueStore:
    """Open the durable visitor store, creating its schema on first use."""
    store = SqliteCookieStore(db_path)
    try:
        store.bootstrap_schema()
    except StorageUnavailableError as exc:
        logger.warning("visitor storage unavailable at startup: %s", exc)
    return store


class HoldButton(Static):
    """Clickable quantity button that also repeats while the mouse is held down."""

    def __init__(
        self,
        label: str,
        on_hold_start: Callable[[], None],
        on_hold_stop: Callable[[], None],
        on_tap: Callable[[], None],
        **kwargs: object,
    ) -> None:
        super().__init__(label, **kwargs)
        self._on_hold_start = on_hold_start
        self._on_hold_stop = on_hold_stop
        self._on_tap = on_tap

    def on_mouse_down(self, event: MouseDown) -> None:
        self.capture_mouse()
        self._on_hold_start()

    def on_mouse_up(self, event: MouseUp) -> None:
        self.release_mouse()
        self._on_hold_stop()

    def on_leave(self, event: Leave) -> None:
        self._on_hold_stop()

    def on_click(self, event: Click) -> None:
        self._on_tap()


class OrderMemoApp(App):
    """A Textual app for jotting bar drink orders per visitor."""

    TITLE = "Bar Order Memo"
    SUB_TITLE = "Draft / Confirm"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #orders-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #side-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #orders-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #hold-plus {
        width: 9;
        margin-top: 1;
        background: $boost;
        text-style: bold;
    }

    #totals {
        margin-top: 1;
        text-style: bold;
    }

    #notice {
        color: #9be29b;
        margin-bottom: 1;
    }

    #status {
        margin-bottom: 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        ("m", "open_menu", "Menu"),
        ("v", "open_visitors", "Visitors"),
        ("c", "choose_customer", "Customer"),
        ("j", "move_selection(1)", "Next order"),
        ("k", "move_selection(-1)", "Previous order"),
        ("down", "move_selection(1)", "Next order"),
        ("up", "move_selection(-1)", "Previous order"),
        ("plus", "change_quantity(1)", "Quantity +1"),
        ("minus", "change_quantity(-1)", "Quantity -1"),
        ("d", "delete_order", "Delete order"),
        ("o", "show_confirmed", "Confirmed"),
        Binding("ctrl+s", "confirm_orders", "Confirm", priority=True),
        Binding("ctrl+r", "reset_orders", "Reset"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        engine: OrderMemoEngine | None = None,
        store: KeyValueStore | None = None,
    ) -> None:
        super().__init__()
        self.engine = engine or OrderMemoEngine()
        self.store = store if store is not None else open_default_store()
        self.registry = VisitorRegistry(self.store, on_visitor_removed=self.engine.clear_orders_by_customer)
        self.repeater = HoldRepeater(self._step_quantity, self.set_timer)
        self.order_selected_index: int | None = None
        self.system_status = ""
        self._notice_timer: Timer | None = None
        self._gesture_order_id: str | None = None
        logger.info("app_init")

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="orders-pane"):
                yield Static("Draft Orders", classes="pane-title")
                yield Static("(no orders yet)", id="orders-list")
                yield HoldButton(
                    "[ + ]",
                    on_hold_start=self._hold_start,
                    on_hold_stop=self._hold_stop,
                    on_tap=self._hold_tap,
                    id="hold-plus",
                    markup=False,
                )
                yield Static(id="totals")
            with Vertical(id="side-pane"):
                yield Static(id="notice")
                yield Static(id="status")
                yield Static(id="help")

    def on_mount(self) -> None:
        self._refresh_all()

    def on_unmount(self) -> None:
        self.repeater.stop_all()

    def _in_modal(self) -> bool:
        return isinstance(self.screen, ModalScreen)

    def action_open_menu(self) -> None:
        if self._in_modal():
            return
        self.push_screen(MenuModal(self.engine, on_change=self._on_order_added))

    def action_open_visitors(self) -> None:
        if self._in_modal():
            return
        self.push_screen(VisitorModal(self.registry, on_change=self._refresh_all))

    def action_choose_customer(self) -> None:
        if self._in_modal():
            return
        order = self._selected_order()
        if order is None:
            return

        def apply(customer: str | None) -> None:
            if customer is None:
                return
            self.engine.update_order_customer(order.id, customer)
            self._refresh_orders()

        self.push_screen(CustomerModal(order, self.registry.visitors), apply)

    def action_move_selection(self, delta: int) -> None:
        if self._in_modal():
            return
        orders = self.engine.orders
        if not orders:
            return

        if self.order_selected_index is None:
            self.order_selected_index = 0 if delta > 0 else len(orders) - 1
        else:
            self.order_selected_index = (self.order_selected_index + delta) % len(orders)
        self._refresh_orders()

    def action_change_quantity(self, delta: int) -> None:
        if self._in_modal():
            return
        order = self._selected_order()
        if order is None:
            return
        self.engine.increment_order_quantity(order.id, delta)
        self._refresh_orders()

    def action_delete_order(self) -> None:
        if self._in_modal():
            return
        order = self._selected_order()
        if order is None:
            return
        self.repeater.release(order.id)
        self.engine.remove_order(order.id)
        self._refresh_orders()

    def action_confirm_orders(self) -> None:
        if self._in_modal():
            return
        if not self.engine.confirm_all_orders():
            self.system_status = "Nothing to confirm"
            self._refresh_side()
            return

        self.system_status = f"Confirmed {self.engine.confirmed_total_drinks} drinks"
        self._refresh_side()
        self.push_screen(ConfirmedModal(self.engine))

    def action_show_confirmed(self) -> None:
        if self._in_modal():
            return
        self.push_screen(ConfirmedModal(self.engine))

    def action_reset_orders(self) -> None:
        if self._in_modal():
            return
        if not self.engine.orders:
            return

        def apply(confirmed: bool | None) -> None:
            if not confirmed:
                return
            self.repeater.stop_all()
            self.engine.reset_draft_orders()
            self.order_selected_index = None
            self.system_status = "Memo reset"
            self._refresh_all()

        self.push_screen(ResetModal(), apply)

    def _on_order_added(self) -> None:
        self.order_selected_index = 0
        if self._notice_timer is not None:
            self._notice_timer.stop()
        self._notice_timer = self.set_timer(ADDED_NOTICE_SECONDS, self._dismiss_notice)
        self._refresh_all()

    def _dismiss_notice(self) -> None:
        self._notice_timer = None
        self.engine.clear_added_notice()
        self._refresh_side()
        if isinstance(self.screen, MenuModal):
            self.screen.refresh_content()

    def _step_quantity(self, order_id: str) -> bool:
        reached_max = self.engine.increment_order_quantity(order_id, 1)
        self._refresh_orders()
        return reached_max

    def _hold_start(self) -> None:
        if self._gesture_order_id is not None:
            self.repeater.release(self._gesture_order_id)
        order = self._selected_order()
        self._gesture_order_id = order.id if order is not None else None
        if order is not None:
            self.repeater.press(order.id)

    def _hold_stop(self) -> None:
        # The gesture stays bound to the order it started on, whatever is selected now.
        if self._gesture_order_id is not None:
            self.repeater.release(self._gesture_order_id)

    def _hold_tap(self) -> None:
        order_id = self._gesture_order_id
        self._gesture_order_id = None
        if order_id is None:
            order = self._selected_order()
            order_id = order.id if order is not None else None
        if order_id is not None:
            self.repeater.click(order_id)

    def _selected_order(self) -> DraftOrder | None:
        orders = self.engine.orders
        if self.order_selected_index is None:
            return None
        if not (0 <= self.order_selected_index < len(orders)):
            return None
        return orders[self.order_selected_index]

    def _refresh_all(self) -> None:
        self._refresh_orders()
        self._refresh_side()

    def _refresh_orders(self) -> None:
        try:
            orders_widget = self.query_one("#orders-list", Static)
            totals_widget = self.query_one("#totals", Static)
        except NoMatches:
            return

        orders = self.engine.orders
        totals_widget.update(format_totals(self.engine.total_drinks, self.engine.total_amount))
        if not orders:
            self.order_selected_index = None
            orders_widget.update("(no orders yet)")
            return

        if self.order_selected_index is None:
            self.order_selected_index = 0
        elif self.order_selected_index >= len(orders):
            self.order_selected_index = len(orders) - 1

        lines = Text()
        for idx, order in enumerate(orders):
            if idx > 0:
                lines.append("\n")
            pointer = "➤ " if idx == self.order_selected_index else "  "
            lines.append(pointer)
            lines.append(f"{idx + 1}. ")
            lines.append_text(format_order_row(order))
        orders_widget.update(lines)

    def _refresh_side(self) -> None:
        try:
            notice_widget = self.query_one("#notice", Static)
            status_widget = self.query_one("#status", Static)
            help_widget = self.query_one("#help", Static)
        except NoMatches:
            return

        notice = self.engine.added_notice
        notice_widget.update(f"Added {notice.name}" if notice else "")
        visitors = ", ".join(visitor.name for visitor in self.registry.visitors) or "(none)"
        status_widget.update(Text(f"Visitors: {visitors}\n{self.system_status}"))
        help_widget.update(
            "m menu  v visitors  c customer\n"
            "j/k select  +/- quantity  d delete\n"
            "Ctrl+S confirm  o confirmed  Ctrl+R reset\n"
            "Ctrl+Q quit"
        )
