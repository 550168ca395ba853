"""Menu modal screen with category tabs."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from order_memo.data import group_menu_items_by_category
from order_memo.engine import OrderMemoEngine
from order_memo.models import MenuItem


class MenuModal(ModalScreen[None]):
    """Browse the menu by category and add drinks to the memo."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("left", "switch_category(-1)", "Previous category"),
        ("h", "switch_category(-1)", "Previous category"),
        ("right", "switch_category(1)", "Next category"),
        ("l", "switch_category(1)", "Next category"),
        ("tab", "switch_category(1)", "Next category"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "add_current", "Add"),
    ]

    CSS = """
    MenuModal {
        align: center middle;
        background: $background 60%;
    }

    #menu-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #menu-tabs {
        margin-bottom: 1;
    }

    #menu-body {
        color: white;
        margin-bottom: 1;
    }

    #menu-notice {
        color: #9be29b;
    }

    #menu-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, engine: OrderMemoEngine, on_change: Callable[[], None]) -> None:
        super().__init__()
        self.engine = engine
        self.on_change = on_change
        self.categories = group_menu_items_by_category(engine.menu_items)
        self.category_index = 0
        self.cursor_index = 0

    def compose(self) -> ComposeResult:
        with Container(id="menu-dialog"):
            yield Static(id="menu-tabs")
            yield Static(id="menu-body")
            yield Static(id="menu-notice")
            yield Static("←/→ category, J/K/↑/↓ move, Enter add, Esc/q close", id="menu-help")

    def on_mount(self) -> None:
        self.refresh_content()

    def action_close(self) -> None:
        self.dismiss(None)

    def action_switch_category(self, delta: int) -> None:
        if not self.categories:
            return
        self.category_index = (self.category_index + delta) % len(self.categories)
        self.cursor_index = 0
        self.refresh_content()

    def action_move_cursor(self, delta: int) -> None:
        items = self._current_items()
        if not items:
            return
        self.cursor_index = (self.cursor_index + delta) % len(items)
        self.refresh_content()

    def action_add_current(self) -> None:
        items = self._current_items()
        if not items:
            return
        self.engine.add_order_from_menu(items[self.cursor_index].menu_id)
        self.on_change()
        self.refresh_content()

    def _current_items(self) -> list[MenuItem]:
        if not self.categories:
            return []
        return self.categories[self.category_index][1]

    def refresh_content(self) -> None:
        tabs = Text()
        for idx, (category, _) in enumerate(self.categories):
            if idx > 0:
                tabs.append(" ")
            style = "bold #0b1f0f on #5fbf72" if idx == self.category_index else "white"
            tabs.append(f" {category} ", style=style)
        self.query_one("#menu-tabs", Static).update(tabs)

        body = Text()
        for idx, item in enumerate(self._current_items()):
            if idx > 0:
                body.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            style = "bold white" if idx == self.cursor_index else "white"
            body.append(f"{pointer}{item.name}", style=style)
            body.append(f"  ¥{item.price}", style="dim")
        self.query_one("#menu-body", Static).update(body)

        notice = self.engine.added_notice
        self.query_one("#menu-notice", Static).update(f"Added {notice.name}" if notice else "")
