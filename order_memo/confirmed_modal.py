"""Confirmed orders modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from order_memo.engine import OrderMemoEngine
from order_memo.rendering import format_grouped_row, format_totals


class ConfirmedModal(ModalScreen[None]):
    """Read-only view of the last confirmed snapshot, grouped by drink and customer."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("enter", "close", "Close"),
    ]

    CSS = """
    ConfirmedModal {
        align: center middle;
        background: $background 60%;
    }

    #confirmed-dialog {
        width: 64;
        height: auto;
        max-height: 90%;
        border: round $primary;
        background: $panel;
        padding: 1 2;
    }

    #confirmed-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #confirmed-summary {
        color: #dddddd;
        margin-bottom: 1;
    }

    #confirmed-body {
        color: white;
    }

    #confirmed-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, engine: OrderMemoEngine) -> None:
        super().__init__()
        self.engine = engine

    def compose(self) -> ComposeResult:
        with Container(id="confirmed-dialog"):
            yield Static("Confirmed Orders", id="confirmed-title")
            yield Static(id="confirmed-summary")
            yield Static(id="confirmed-body")
            yield Static("Enter/Esc/q back to memo", id="confirmed-help")

    def on_mount(self) -> None:
        groups = self.engine.grouped_confirmed_orders
        summary = f"{len(groups)} groups / " + format_totals(
            self.engine.confirmed_total_drinks, self.engine.confirmed_total_amount
        )
        self.query_one("#confirmed-summary", Static).update(summary)

        if not groups:
            self.query_one("#confirmed-body", Static).update("(no confirmed orders)")
            return

        body = Text()
        for idx, group in enumerate(groups):
            if idx > 0:
                body.append("\n")
            body.append_text(format_grouped_row(group))
        self.query_one("#confirmed-body", Static).update(body)

    def action_close(self) -> None:
        self.dismiss(None)
