"""Application header with a small picture-frame mark."""

from rich.table import Table
from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from gitpix import __version__

FRAME_ART = "+-----+\n| /\\_ |\n+-----+"


class AppHeader(Widget):
    """App-wide header showing the frame mark, app name, target repo, and version."""

    DEFAULT_CSS = """
    AppHeader {
        height: 3;
        background: $primary;
        color: $text;
        dock: top;
        padding: 0 1;
    }
    """

    location: reactive[str] = reactive("")

    def render(self) -> Table:
        grid = Table.grid(expand=True)
        grid.add_column(width=9, no_wrap=True)
        grid.add_column(ratio=1)
        grid.add_column(width=10, no_wrap=True)

        frame = Text(FRAME_ART, style="bold")
        title = Text("GitHub Image Manager", style="bold", justify="center")
        title.append(f"\n{self.location or 'not connected'}", style="italic")
        version = Text(f"\nv{__version__}", justify="right")

        grid.add_row(frame, title, version)
        return grid
