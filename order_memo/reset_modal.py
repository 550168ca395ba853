"""Yes/no prompt before discarding the draft memo."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static


class ResetModal(ModalScreen[bool]):
    BINDINGS = [
        ("y", "answer(True)", "Reset"),
        ("n", "answer(False)", "Keep"),
        ("escape", "answer(False)", "Keep"),
        ("q", "answer(False)", "Keep"),
    ]

    CSS = """
    ResetModal {
        align: center middle;
        background: $background 60%;
    }

    #reset-dialog {
        width: 48;
        height: auto;
        border: round $error;
        background: $panel;
        padding: 1 2;
    }

    #reset-prompt {
        color: white;
        margin-bottom: 1;
    }

    #reset-help {
        color: #dddddd;
    }
    """

    def compose(self) -> ComposeResult:
        with Container(id="reset-dialog"):
            yield Static("Reset the memo? All draft orders will be removed.", id="reset-prompt")
            yield Static("y reset, n/Esc keep", id="reset-help")

    def action_answer(self, confirmed: bool) -> None:
        self.dismiss(confirmed)
