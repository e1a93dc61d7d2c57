"""Scoped ownership of the temporary file backing the image preview."""

import logging
import mimetypes
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class PreviewHandle:
    file_name: str
    path: Path
    size: int
    media_type: str

    @property
    def uri(self) -> str:
        return self.path.as_uri()

    @property
    def released(self) -> bool:
        return not self.path.exists()


class PreviewStore:
    """Holds at most one live preview; acquiring a new one releases the old one."""

    def __init__(self, directory: Path | None = None) -> None:
        self._directory = directory
        self._current: PreviewHandle | None = None
        self._lock = threading.Lock()

    @property
    def current(self) -> PreviewHandle | None:
        return self._current

    def acquire(self, file_name: str, data: bytes) -> PreviewHandle:
        suffix = Path(file_name).suffix
        with tempfile.NamedTemporaryFile(
            prefix="gitpix-", suffix=suffix, dir=self._directory, delete=False
        ) as tmp:
            tmp.write(data)
            tmp_path = Path(tmp.name)
        media_type, _ = mimetypes.guess_type(file_name)
        handle = PreviewHandle(
            file_name=file_name,
            path=tmp_path,
            size=len(data),
            media_type=media_type or "application/octet-stream",
        )
        with self._lock:
            previous, self._current = self._current, handle
        if previous is not None:
            self._unlink(previous)
        logger.debug("Preview acquired: %s -> %s", file_name, tmp_path)
        return handle

    def release(self) -> None:
        with self._lock:
            previous, self._current = self._current, None
        if previous is not None:
            self._unlink(previous)

    @staticmethod
    def _unlink(handle: PreviewHandle) -> None:
        try:
            handle.path.unlink(missing_ok=True)
            logger.debug("Preview released: %s", handle.path)
        except OSError as exc:
            logger.warning("Could not remove preview file %s: %s", handle.path, exc)

    def __enter__(self) -> "PreviewStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()
