"""Local image picker modal."""

from pathlib import Path
from typing import Iterable

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DirectoryTree, Input, Label, Static

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif", ".webp", ".bmp", ".svg", ".ico"}


def is_image_path(path: Path) -> bool:
    return path.suffix.lower() in IMAGE_SUFFIXES


class ImageDirectoryTree(DirectoryTree):
    """DirectoryTree that only shows folders and image files."""

    def filter_paths(self, paths: Iterable[Path]) -> Iterable[Path]:
        return [p for p in paths if p.is_dir() or is_image_path(p)]


class LocalFileModal(ModalScreen[Path | None]):
    """Pick an image from the local disk, either from the tree or by typing a path."""

    CSS = """
    LocalFileModal {
        align: center middle;
    }
    #picker-box {
        width: 80;
        max-width: 95%;
        height: 30;
        max-height: 90%;
        border: heavy $accent;
        padding: 1 2;
        background: $surface;
    }
    #file-tree {
        height: 1fr;
    }
    #picker-error {
        color: $error;
    }
    .form-buttons {
        height: auto;
        margin: 1 0 0 0;
    }
    .form-buttons Button {
        margin: 0 1;
    }
    """

    def __init__(self, root: Path | str = ".") -> None:
        super().__init__()
        self._root = Path(root)

    def compose(self) -> ComposeResult:
        with Vertical(id="picker-box"):
            yield Static("Choose Image", markup=False)
            yield ImageDirectoryTree(str(self._root), id="file-tree")
            yield Label("Path")
            yield Input(id="path-input", placeholder="Select a file above or type a path")
            yield Label("", id="picker-error", markup=False)
            with Horizontal(classes="form-buttons"):
                yield Button("Select", id="select-btn", variant="primary")
                yield Button("Cancel", id="cancel-btn")

    @on(DirectoryTree.FileSelected)
    def on_file_selected(self, event: DirectoryTree.FileSelected) -> None:
        self.query_one("#path-input", Input).value = str(event.path)

    @on(Button.Pressed, "#select-btn")
    def select_file(self) -> None:
        value = self.query_one("#path-input", Input).value.strip()
        if not value:
            self.query_one("#picker-error", Label).update("Please choose a file")
            return
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = self._root / path
        if not path.is_file():
            self.query_one("#picker-error", Label).update(f"Not a file: {value}")
            return
        self.dismiss(path)

    @on(Button.Pressed, "#cancel-btn")
    def cancel(self) -> None:
        self.dismiss(None)
