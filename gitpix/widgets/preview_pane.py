"""Preview pane describing the image currently held by the PreviewStore."""

import webbrowser

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Label, Static

from gitpix.preview import PreviewHandle
from gitpix.view_model import format_size


class PreviewPane(Vertical):
    DEFAULT_CSS = """
    PreviewPane {
        height: auto;
        border: solid $accent;
        padding: 0 1;
    }
    PreviewPane #preview-actions {
        height: auto;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.handle: PreviewHandle | None = None

    def compose(self) -> ComposeResult:
        yield Static("Preview", markup=False)
        yield Label("Select a file and press View to preview it", id="preview-name", markup=False)
        yield Label("", id="preview-details", markup=False)
        with Horizontal(id="preview-actions"):
            yield Button("Open", id="open-preview-btn", disabled=True)

    def show_handle(self, handle: PreviewHandle) -> None:
        self.handle = handle
        self.query_one("#preview-name", Label).update(handle.file_name)
        self.query_one("#preview-details", Label).update(
            f"{handle.media_type}  {format_size(handle.size)}  {handle.path}"
        )
        self.query_one("#open-preview-btn", Button).disabled = False

    def reset(self) -> None:
        self.handle = None
        self.query_one("#preview-name", Label).update("Select a file and press View to preview it")
        self.query_one("#preview-details", Label).update("")
        self.query_one("#open-preview-btn", Button).disabled = True

    @on(Button.Pressed, "#open-preview-btn")
    def open_preview(self) -> None:
        if self.handle is None or self.handle.released:
            self.reset()
            return
        webbrowser.open(self.handle.uri)
