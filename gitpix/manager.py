"""Repository image operations: list, select, preview, edit-load, delete, upsert."""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from gitpix.preview import PreviewHandle, PreviewStore
from gitpix.remote.client import ContentsClient
from gitpix.remote.exceptions import BusyError, FormatError, ValidationError
from gitpix.remote.models import RemoteFileEntry
from gitpix.session import Credentials, PendingFile, SessionState, encode_data_url, extract_base64

logger = logging.getLogger(__name__)

REFRESH_DELAY = 0.5     # seconds between a successful upload and the listing refresh
STATUS_TIMEOUT = 5.0    # seconds a status message stays visible

MISSING_CREDENTIALS = "Please fill in GitHub token, username, and repository name"
MISSING_UPLOAD = "Please select an image file and enter a filename"


@dataclass
class UpsertResult:
    path: str
    created: bool
    sha: str | None = None


@dataclass
class DeleteResult:
    path: str
    sha: str


class RepositoryImageClient:
    """All remote interaction plus the derived session state.

    Methods are blocking; the UI runs them off the event loop with
    ``asyncio.to_thread``.
    """

    def __init__(self, contents: ContentsClient | None = None, previews: PreviewStore | None = None) -> None:
        self._contents = contents or ContentsClient()
        self._previews = previews or PreviewStore()
        self._busy: set[str] = set()
        self._busy_lock = threading.Lock()

    @property
    def previews(self) -> PreviewStore:
        return self._previews

    def close(self) -> None:
        self._previews.release()
        self._contents.close()

    # --- Internal ---

    @staticmethod
    def _require_credentials(state: SessionState) -> Credentials:
        creds = state.credentials
        if creds is None or not creds.complete:
            raise ValidationError(MISSING_CREDENTIALS)
        return creds

    @contextmanager
    def _claim(self, path: str) -> Iterator[None]:
        with self._busy_lock:
            if path in self._busy:
                raise BusyError(f"{path} already has an operation in progress")
            self._busy.add(path)
        try:
            yield
        finally:
            with self._busy_lock:
                self._busy.discard(path)

    def is_busy(self, path: str) -> bool:
        with self._busy_lock:
            return path in self._busy

    # --- Operations ---

    def list_files(self, state: SessionState) -> list[RemoteFileEntry]:
        creds = self._require_credentials(state)
        entries = self._contents.list_directory(creds)
        files = [e for e in entries if e.is_file]
        logger.info("Listed %d file(s), skipped %d other entries", len(files), len(entries) - len(files))
        state.entries = files
        return files

    def select_local_file(self, state: SessionState, path: Path) -> PendingFile:
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise ValidationError(f"Could not read {path.name}: {exc.strerror or exc}") from exc
        raw = encode_data_url(data, path.name)
        pending = PendingFile(display_name=path.name, raw_content=raw, base64_content=extract_base64(raw))
        state.pending = pending
        logger.info("Selected local file %s (%d bytes)", path.name, len(data))
        return pending

    def preview_file(self, state: SessionState, file_name: str, download_url: str) -> PreviewHandle:
        data = self._contents.download(download_url)
        return self._previews.acquire(file_name, data)

    def load_for_edit(self, state: SessionState, file_name: str, file_path: str) -> PendingFile:
        creds = self._require_credentials(state)
        entry = self._contents.get_file(creds, file_path, "Failed to fetch file")
        # Files over 1 MB come back with encoding "none" and empty content
        if entry.encoding != "base64" or entry.content is None:
            raise FormatError(f"{file_name} is too large to load for editing")
        # The API wraps base64 content at 60 columns
        content = "".join(entry.content.split())
        pending = PendingFile(display_name=file_name, base64_content=content)
        state.pending = pending
        logger.info("Loaded %s for editing", file_path)
        return pending

    def delete_file(self, state: SessionState, file_name: str, file_path: str) -> DeleteResult:
        """Delete ``file_path`` and drop it from ``state.entries``.

        The listing is not re-fetched here; GitHub removes a folder together
        with its last file, so a follow-up listing may legitimately 404.
        The caller is responsible for asking the user to confirm first.
        """
        creds = self._require_credentials(state)
        with self._claim(file_path):
            entry = self._contents.get_file(creds, file_path, "Failed to fetch file for deletion")
            self._contents.delete_file(creds, file_path, entry.sha, f"Delete {file_name}")
        state.entries = [e for e in state.entries if e.path != file_path]
        logger.info("Deleted %s", file_path)
        return DeleteResult(path=file_path, sha=entry.sha)

    def upsert_file(self, state: SessionState, file_name: str) -> UpsertResult:
        creds = self._require_credentials(state)
        file_name = file_name.strip()
        pending = state.pending
        if not file_name or pending is None:
            raise ValidationError(MISSING_UPLOAD)

        path = creds.target_path(file_name)
        with self._claim(path):
            probe = self._contents.probe_sha(creds, path)
            if probe.error:
                logger.warning("Treating %s as new after failed lookup: %s", path, probe.error)
            verb = "Update" if probe.found else "Add"
            response = self._contents.put_file(
                creds, path, pending.base64_content, f"{verb} {file_name}", sha=probe.sha
            )

        if state.pending is pending:
            state.pending = None
        new_sha = response.content.sha if response.content else None
        logger.info("%s %s", "Updated" if probe.found else "Created", path)
        return UpsertResult(path=path, created=not probe.found, sha=new_sha)
