"""Main screen: repository credentials, upload form, file list and preview."""

import asyncio
from pathlib import Path

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, Footer, Input, Label, Static

from gitpix.errors import ErrorCode, app_error
from gitpix.manager import MISSING_CREDENTIALS, MISSING_UPLOAD, REFRESH_DELAY
from gitpix.remote.exceptions import BusyError, ContentsError
from gitpix.screens.local_file import LocalFileModal
from gitpix.session import validate_credentials
from gitpix.view_model import ListingRow, ListingView, build_listing_view, error_view
from gitpix.widgets.app_header import AppHeader
from gitpix.widgets.confirm_modal import ConfirmModal
from gitpix.widgets.file_table import FileTable
from gitpix.widgets.preview_pane import PreviewPane
from gitpix.widgets.status_banner import StatusBanner

INITIAL_PLACEHOLDER = "Enter your repository details and press Refresh"


class ImageManagerScreen(Screen):
    BINDINGS = [
        ("f5", "refresh_listing", "Refresh"),
        ("f3", "view", "View"),
        ("f4", "edit", "Edit"),
        ("f8", "delete", "Delete"),
        ("ctrl+o", "choose_file", "Choose File"),
        ("ctrl+s", "save", "Save"),
    ]

    CSS = """
    ImageManagerScreen {
        layout: vertical;
    }
    #sections {
        height: 1fr;
        padding: 0 2;
    }
    #credentials-section, #upload-section, #files-section {
        height: auto;
        border: solid $accent;
        padding: 0 1;
        margin: 0 0 1 0;
    }
    #files-section {
        height: 20;
    }
    .field-row {
        height: auto;
    }
    .field-row Vertical {
        width: 1fr;
        height: auto;
        padding: 0 1 0 0;
    }
    #upload-row {
        height: auto;
    }
    #upload-row Input {
        width: 1fr;
    }
    #upload-row Button, #file-actions Button {
        margin: 0 1;
    }
    #file-actions {
        height: auto;
    }
    #listing-placeholder {
        color: $text-muted;
    }
    #listing-placeholder.error {
        color: $error;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self._rows: dict[str, ListingRow] = {}
        self.listing_view: ListingView | None = None

    def compose(self) -> ComposeResult:
        yield AppHeader(id="header")
        with VerticalScroll(id="sections"):
            with Vertical(id="credentials-section"):
                yield Static("Repository", markup=False)
                with Horizontal(classes="field-row"):
                    with Vertical():
                        yield Label("GitHub Token")
                        yield Input(id="token", placeholder="ghp_...", password=True)
                    with Vertical():
                        yield Label("Username")
                        yield Input(id="owner", placeholder="octocat")
                    with Vertical():
                        yield Label("Repository")
                        yield Input(id="repo", placeholder="my-images")
                    with Vertical():
                        yield Label("Folder (optional)")
                        yield Input(id="folder", placeholder="images/")
            with Vertical(id="upload-section"):
                yield Static("Upload", markup=False)
                yield Label("No file selected", id="selected-file", markup=False)
                with Horizontal(id="upload-row"):
                    yield Button("Choose File [^O]", id="choose-btn")
                    yield Input(id="file-name", placeholder="File name, e.g. cat.png")
                    yield Button("Save [^S]", id="save-btn", variant="primary")
            with Vertical(id="files-section"):
                yield Static("Files", markup=False)
                yield Label(INITIAL_PLACEHOLDER, id="listing-placeholder", markup=False)
                yield FileTable(id="file-table")
                with Horizontal(id="file-actions"):
                    yield Button("Refresh [F5]", id="refresh-btn")
                    yield Button("View [F3]", id="view-btn")
                    yield Button("Edit [F4]", id="edit-btn")
                    yield Button("Delete [F8]", id="del-btn", variant="error")
            yield PreviewPane(id="preview")
        yield StatusBanner(id="status")
        yield Footer()

    def on_unmount(self) -> None:
        self.app.image_client.previews.release()

    # --- Helpers ---

    def _set_status(self, message: str, kind: str = "info") -> None:
        self.query_one("#status", StatusBanner).set_status(message, kind)

    def _report(self, exc: ContentsError, code: ErrorCode, prefix: str = "") -> None:
        if isinstance(exc, BusyError):
            code = ErrorCode.VAL_BUSY
        self._set_status(f"❌ {prefix}{exc.message}", "error")
        app_error(self, code, detail=exc.message, status=exc.status)

    def _credentials_ok(self) -> bool:
        ok = validate_credentials(
            self.app.session,
            self.query_one("#token", Input).value,
            self.query_one("#owner", Input).value,
            self.query_one("#repo", Input).value,
            self.query_one("#folder", Input).value,
        )
        if not ok:
            self._set_status(f"❌ {MISSING_CREDENTIALS}", "error")
            app_error(self, ErrorCode.VAL_CREDENTIALS)
            return False
        creds = self.app.session.credentials
        location = f"{creds.owner}/{creds.repo}"
        self.query_one("#header", AppHeader).location = f"{location}/{creds.folder}" if creds.folder else location
        return True

    def _selected_row(self) -> ListingRow | None:
        key = self.query_one("#file-table", FileTable).selected_key()
        if key is None:
            self._set_status("Select a file in the list first", "info")
            return None
        return self._rows.get(key)

    def _render_listing(self, view: ListingView) -> None:
        self.listing_view = view
        self._rows = {row.key: row for row in view.rows}
        self.query_one("#file-table", FileTable).show_listing(view)
        placeholder = self.query_one("#listing-placeholder", Label)
        placeholder.update(view.placeholder)
        placeholder.display = bool(view.placeholder)
        placeholder.set_class(view.error, "error")

    def _clear_upload_form(self) -> None:
        self.query_one("#file-name", Input).value = ""
        self.query_one("#selected-file", Label).update("No file selected")

    # --- Listing ---

    @on(Button.Pressed, "#refresh-btn")
    def action_refresh_listing(self) -> None:
        self.refresh_listing()

    @work(exclusive=True, group="listing")
    async def refresh_listing(self) -> None:
        if not self._credentials_ok():
            return
        self._set_status("⏳ Loading images...", "info")
        placeholder = self.query_one("#listing-placeholder", Label)
        placeholder.update("Loading...")
        placeholder.display = True
        try:
            files = await asyncio.to_thread(self.app.image_client.list_files, self.app.session)
        except ContentsError as exc:
            self._render_listing(error_view(exc.message))
            self._report(exc, ErrorCode.NET_LIST)
            return
        view = build_listing_view(files)
        self._render_listing(view)
        self._set_status(view.status, "success")

    # --- Local file selection ---

    @on(Button.Pressed, "#choose-btn")
    def action_choose_file(self) -> None:
        def on_path(path: Path | None) -> None:
            if path is None:
                return
            try:
                pending = self.app.image_client.select_local_file(self.app.session, path)
            except ContentsError as exc:
                self._report(exc, ErrorCode.VAL_UPLOAD)
                return
            self.query_one("#file-name", Input).value = pending.display_name
            self.query_one("#selected-file", Label).update(f"Selected: {path}")
            self._set_status(f"✓ File selected: {pending.display_name}", "success")
        self.app.push_screen(LocalFileModal(self.app.start_dir), on_path)

    # --- Upload ---

    @on(Button.Pressed, "#save-btn")
    def action_save(self) -> None:
        if not self._credentials_ok():
            return
        file_name = self.query_one("#file-name", Input).value.strip()
        if not file_name or self.app.session.pending is None:
            self._set_status(f"❌ {MISSING_UPLOAD}", "error")
            app_error(self, ErrorCode.VAL_UPLOAD)
            return
        self.upload(file_name)

    @work(group="upload")
    async def upload(self, file_name: str) -> None:
        self._set_status("⏳ Uploading image...", "info")
        try:
            result = await asyncio.to_thread(
                self.app.image_client.upsert_file, self.app.session, file_name
            )
        except ContentsError as exc:
            self._report(exc, ErrorCode.NET_UPLOAD, "Error uploading image: ")
            return
        verb = "saved" if result.created else "updated"
        self._set_status(f"✓ Image {verb} successfully: {file_name}", "success")
        self._clear_upload_form()
        self.set_timer(REFRESH_DELAY, self.refresh_listing)

    # --- Row actions ---

    @on(Button.Pressed, "#view-btn")
    def action_view(self) -> None:
        row = self._selected_row()
        if row is None:
            return
        if not row.download_url:
            self._set_status(f"❌ {row.name} has no download URL", "error")
            return
        self.preview(row.name, row.download_url)

    @work(exclusive=True, group="preview")
    async def preview(self, file_name: str, download_url: str) -> None:
        self._set_status("⏳ Loading image...", "info")
        try:
            handle = await asyncio.to_thread(
                self.app.image_client.preview_file, self.app.session, file_name, download_url
            )
        except ContentsError as exc:
            self._report(exc, ErrorCode.NET_PREVIEW, "Error loading image: ")
            return
        self.query_one("#preview", PreviewPane).show_handle(handle)
        self._set_status(f"✓ Image loaded: {file_name}", "success")

    @on(Button.Pressed, "#edit-btn")
    def action_edit(self) -> None:
        row = self._selected_row()
        if row is None or not self._credentials_ok():
            return
        self.load_for_edit(row.name, row.path)

    @work(group="edit")
    async def load_for_edit(self, file_name: str, file_path: str) -> None:
        self._set_status("⏳ Loading image for editing...", "info")
        try:
            pending = await asyncio.to_thread(
                self.app.image_client.load_for_edit, self.app.session, file_name, file_path
            )
        except ContentsError as exc:
            self._report(exc, ErrorCode.NET_EDIT, "Error loading file for edit: ")
            return
        self.query_one("#file-name", Input).value = pending.display_name
        self.query_one("#selected-file", Label).update(f"Editing: {file_path}")
        self.query_one("#file-name", Input).focus()
        self._set_status(f"✓ File loaded for editing: {file_name}", "success")

    @on(Button.Pressed, "#del-btn")
    def action_delete(self) -> None:
        row = self._selected_row()
        if row is None or not self._credentials_ok():
            return

        def on_confirmed(confirmed: bool) -> None:
            if confirmed:
                self.delete_remote(row.name, row.path)

        self.app.push_screen(
            ConfirmModal(
                f'Are you sure you want to delete "{row.name}"?',
                detail=f"{row.path} will be removed with a commit.",
            ),
            on_confirmed,
        )

    @work(group="delete")
    async def delete_remote(self, file_name: str, file_path: str) -> None:
        self._set_status("⏳ Deleting image...", "info")
        try:
            await asyncio.to_thread(
                self.app.image_client.delete_file, self.app.session, file_name, file_path
            )
        except ContentsError as exc:
            self._report(exc, ErrorCode.NET_DELETE, "Error deleting image: ")
            return
        self._render_listing(build_listing_view(self.app.session.entries))
        self._set_status(f"✓ Image deleted: {file_name}", "success")
        # The folder disappears with its last file, so there is nothing to re-list
        if self.app.session.entries or not self.app.session.credentials.folder:
            self.set_timer(REFRESH_DELAY, self.refresh_listing)
