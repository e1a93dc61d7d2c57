"""Data table listing the files of the remote folder."""

from textual.binding import Binding
from textual.widgets import DataTable

from gitpix.view_model import ListingView

COLUMNS = ("Name", "Path", "Size")


class FileTable(DataTable):
    """A row-cursor DataTable keyed by repository path."""

    BINDINGS = [
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
        Binding("g", "scroll_home", "Top", show=False),
        Binding("G", "scroll_end", "Bottom", show=False),
    ]

    DEFAULT_CSS = """
    FileTable {
        height: 1fr;
    }
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, cursor_type="row", zebra_stripes=True, **kwargs)

    def on_mount(self) -> None:
        self.add_columns(*COLUMNS)

    def show_listing(self, view: ListingView) -> None:
        """Replace every row with the rows of ``view``."""
        self.clear()
        for row in view.rows:
            self.add_row(row.name, row.path, row.size_label, key=row.key)

    def selected_key(self) -> str | None:
        if self.cursor_row is not None and self.row_count > 0:
            row_key, _ = self.coordinate_to_cell_key(self.cursor_coordinate)
            return row_key.value
        return None

    def action_scroll_home(self) -> None:
        """Move cursor to the first row."""
        if self.row_count > 0:
            self.move_cursor(row=0)

    def action_scroll_end(self) -> None:
        """Move cursor to the last row."""
        if self.row_count > 0:
            self.move_cursor(row=self.row_count - 1)
