"""Tests for the pure listing view model."""

from gitpix.remote.models import RemoteFileEntry
from gitpix.view_model import (
    EMPTY_PLACEHOLDER,
    EMPTY_STATUS,
    build_listing_view,
    error_view,
    format_size,
)


def _entry(name: str, size: int = 2048, kind: str = "file") -> RemoteFileEntry:
    return RemoteFileEntry(
        name=name,
        path=f"images/{name}",
        sha=f"sha-{name}",
        size=size,
        type=kind,
        download_url=f"https://raw.test/octo/pics/main/images/{name}" if kind == "file" else None,
    )


class TestBuildListingView:
    def test_one_row_per_entry(self):
        view = build_listing_view([_entry("a.png"), _entry("b.png")])
        assert [r.name for r in view.rows] == ["a.png", "b.png"]
        assert [r.key for r in view.rows] == ["images/a.png", "images/b.png"]
        assert not view.empty
        assert not view.error

    def test_status_counts_rows(self):
        view = build_listing_view([_entry("a.png"), _entry("b.png"), _entry("c.png")])
        assert view.status == "✓ Successfully loaded 3 image(s)"
        assert view.placeholder == ""

    def test_rows_carry_download_url(self):
        row = build_listing_view([_entry("a.png")]).rows[0]
        assert row.download_url.endswith("/images/a.png")
        assert row.path == "images/a.png"

    def test_empty_is_success_not_error(self):
        view = build_listing_view([])
        assert view.empty
        assert not view.error
        assert view.placeholder == EMPTY_PLACEHOLDER
        assert view.status == EMPTY_STATUS

    def test_error_view_is_distinct_from_empty(self):
        view = error_view("Repository or folder not found.")
        assert view.error
        assert not view.empty
        assert view.rows == []
        assert view.placeholder == "Error: Repository or folder not found."
        assert view.status.startswith("❌")


class TestFormatSize:
    def test_kilobytes_two_decimals(self):
        assert format_size(2048) == "2.00 KB"
        assert format_size(1536) == "1.50 KB"
        assert format_size(0) == "0.00 KB"
        assert format_size(70) == "0.07 KB"
