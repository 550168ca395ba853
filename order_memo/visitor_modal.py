"""Visitor registration modal screen."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from order_memo.visitors import VisitorRegistry


class VisitorModal(ModalScreen[None]):
    """Type a name to add a visitor; select one to remove it."""

    CSS = """
    VisitorModal {
        align: center middle;
        background: $background 60%;
    }

    #visitor-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #visitor-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #visitor-value {
        border: heavy $secondary;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }

    #visitor-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #visitor-list {
        color: white;
        margin-bottom: 1;
    }

    #visitor-help {
        color: #dddddd;
    }
    """

    def __init__(self, registry: VisitorRegistry, on_change: Callable[[], None]) -> None:
        super().__init__()
        self.registry = registry
        self.on_change = on_change
        self.cursor_index = 0

    def compose(self) -> ComposeResult:
        with Container(id="visitor-dialog"):
            yield Static("Visitors", id="visitor-title")
            yield Static(id="visitor-value")
            yield Static(id="visitor-error")
            yield Static(id="visitor-list")
            yield Static(
                "Type a name, Enter add. ↑/↓ select, Ctrl+D remove. Esc close.",
                id="visitor-help",
            )

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key == "escape":
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            self.registry.add_visitor()
            self.cursor_index = max(0, len(self.registry.visitors) - 1)
            self._changed()
            event.stop()
            return

        if event.key == "backspace":
            if self.registry.pending_name:
                self.registry.set_pending_name(self.registry.pending_name[:-1])
                self._refresh_content()
            event.stop()
            return

        if event.key in {"up", "down"}:
            self._move_cursor(-1 if event.key == "up" else 1)
            event.stop()
            return

        if event.key == "ctrl+d":
            self._remove_selected()
            event.stop()
            return

        if event.is_printable and event.character:
            self.registry.set_pending_name(self.registry.pending_name + event.character)
            self._refresh_content()
            event.stop()

    def _move_cursor(self, delta: int) -> None:
        visitors = self.registry.visitors
        if not visitors:
            return
        self.cursor_index = (self.cursor_index + delta) % len(visitors)
        self._refresh_content()

    def _remove_selected(self) -> None:
        visitors = self.registry.visitors
        if not (0 <= self.cursor_index < len(visitors)):
            return
        self.registry.remove_visitor(visitors[self.cursor_index].id)
        self.cursor_index = min(self.cursor_index, max(0, len(self.registry.visitors) - 1))
        self._changed()

    def _changed(self) -> None:
        self._refresh_content()
        self.on_change()

    def _refresh_content(self) -> None:
        self.query_one("#visitor-value", Static).update(Text(f"{self.registry.pending_name}|"))
        self.query_one("#visitor-error", Static).update(self.registry.error_message)

        visitors = self.registry.visitors
        if not visitors:
            self.query_one("#visitor-list", Static).update("(no visitors yet)")
            return

        lines = Text()
        for idx, visitor in enumerate(visitors):
            if idx > 0:
                lines.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            lines.append(f"{pointer}{visitor.name}", style="bold white" if idx == self.cursor_index else "white")
        self.query_one("#visitor-list", Static).update(lines)
