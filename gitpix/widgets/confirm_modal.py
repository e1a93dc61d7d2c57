"""Confirmation dialog shown before a destructive repository write."""

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static


class ConfirmModal(ModalScreen[bool]):
    """Ask before committing a change that cannot be undone from gitpix.

    Dismisses with True when confirmed (button or ``y``) and False on
    cancel (button, ``n`` or escape).
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
        Binding("n", "cancel", "No", show=False),
        Binding("y", "confirm", "Yes", show=False),
    ]

    CSS = """
    ConfirmModal {
        align: center middle;
    }
    #confirm-box {
        width: 60;
        height: auto;
        border: heavy $error;
        padding: 1 2;
        background: $surface;
    }
    #confirm-title {
        text-style: bold;
        color: $error;
    }
    #confirm-detail {
        color: $text-muted;
    }
    #confirm-buttons {
        height: auto;
        margin: 1 0 0 0;
    }
    #confirm-buttons Button {
        margin: 0 1;
    }
    """

    def __init__(
        self,
        message: str,
        detail: str = "This creates a commit in the repository.",
    ) -> None:
        super().__init__()
        self.message = message
        self.detail = detail

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-box"):
            yield Label("Confirm", id="confirm-title")
            yield Static(self.message, id="confirm-message", markup=False)
            if self.detail:
                yield Static(self.detail, id="confirm-detail", markup=False)
            with Horizontal(id="confirm-buttons"):
                yield Button("Delete", id="confirm-btn", variant="error")
                yield Button("Cancel", id="cancel-btn")

    def on_mount(self) -> None:
        self.query_one("#cancel-btn", Button).focus()

    @on(Button.Pressed, "#confirm-btn")
    def action_confirm(self) -> None:
        self.dismiss(True)

    @on(Button.Pressed, "#cancel-btn")
    def action_cancel(self) -> None:
        self.dismiss(False)
