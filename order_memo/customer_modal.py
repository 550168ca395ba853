"""Customer picker modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from order_memo.models import DraftOrder, Visitor
from order_memo.rendering import customer_label, format_order_row


class CustomerModal(ModalScreen[str | None]):
    """Centered modal to attach one order to a visitor, or unassign it."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "choose", "Choose"),
    ]

    CSS = """
    CustomerModal {
        align: center middle;
        background: $background 60%;
    }

    #customer-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #customer-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #customer-body {
        margin-bottom: 1;
        color: white;
    }

    #customer-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, order: DraftOrder, visitors: tuple[Visitor, ...]) -> None:
        super().__init__()
        self.order = order
        self.choices = [""] + [visitor.name for visitor in visitors]
        # A former visitor's name stays selectable until it is changed.
        if order.customer and order.customer not in self.choices:
            self.choices.append(order.customer)
        self.cursor_index = self.choices.index(order.customer)

    def compose(self) -> ComposeResult:
        with Container(id="customer-dialog"):
            yield Static("Customer", id="customer-title")
            yield Static(id="customer-body")
            yield Static("J/K/↑/↓ move, Enter choose, Esc/q close", id="customer-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def action_close(self) -> None:
        self.dismiss(None)

    def action_move_cursor(self, delta: int) -> None:
        self.cursor_index = (self.cursor_index + delta) % len(self.choices)
        self._refresh_content()

    def action_choose(self) -> None:
        self.dismiss(self.choices[self.cursor_index])

    def _refresh_content(self) -> None:
        content = Text(style="white")
        content.append_text(format_order_row(self.order))
        content.append("\n")
        for idx, choice in enumerate(self.choices):
            content.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            checked = "(•)" if choice == self.order.customer else "( )"
            style = "bold white" if idx == self.cursor_index else "white"
            content.append(f"{pointer}{checked} {customer_label(choice)}", style=style)
        self.query_one("#customer-body", Static).update(content)
