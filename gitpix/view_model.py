"""Pure view model for the file listing, rendered by the manager screen."""

from dataclasses import dataclass, field

from gitpix.remote.models import RemoteFileEntry

EMPTY_PLACEHOLDER = "No images found in this folder"
EMPTY_STATUS = "✓ No images found. Add one to get started!"


@dataclass
class ListingRow:
    key: str
    name: str
    path: str
    size_label: str
    download_url: str | None = None


@dataclass
class ListingView:
    rows: list[ListingRow] = field(default_factory=list)
    placeholder: str = ""
    status: str = ""
    error: bool = False

    @property
    def empty(self) -> bool:
        return not self.error and not self.rows


def format_size(size: int) -> str:
    return f"{size / 1024:.2f} KB"


def build_listing_view(entries: list[RemoteFileEntry]) -> ListingView:
    rows = [
        ListingRow(
            key=e.path,
            name=e.name,
            path=e.path,
            size_label=format_size(e.size),
            download_url=e.download_url,
        )
        for e in entries
    ]
    if not rows:
        return ListingView(placeholder=EMPTY_PLACEHOLDER, status=EMPTY_STATUS)
    return ListingView(rows=rows, status=f"✓ Successfully loaded {len(rows)} image(s)")


def error_view(message: str) -> ListingView:
    return ListingView(placeholder=f"Error: {message}", status=f"❌ {message}", error=True)
