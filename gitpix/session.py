"""Session-local state: credentials, the pending upload and the last listing."""

import base64
import logging
import mimetypes
from dataclasses import dataclass, field

from gitpix.remote.models import RemoteFileEntry

logger = logging.getLogger(__name__)


@dataclass
class Credentials:
    token: str = ""
    owner: str = ""
    repo: str = ""
    folder: str = ""    # No trailing slash; "" means the repository root

    @classmethod
    def from_form(cls, token: str, owner: str, repo: str, folder: str) -> "Credentials":
        folder = folder.strip()
        if folder.endswith("/"):
            folder = folder[:-1]
        return cls(token=token.strip(), owner=owner.strip(), repo=repo.strip(), folder=folder)

    @property
    def complete(self) -> bool:
        return bool(self.token and self.owner and self.repo)

    def target_path(self, file_name: str) -> str:
        return f"{self.folder}/{file_name}" if self.folder else file_name


@dataclass
class PendingFile:
    display_name: str = ""
    base64_content: str = ""
    raw_content: str | None = None     # data: URL when chosen locally, None when loaded for edit


@dataclass
class SessionState:
    credentials: Credentials | None = None
    pending: PendingFile | None = None
    entries: list[RemoteFileEntry] = field(default_factory=list)


def validate_credentials(state: SessionState, token: str, owner: str, repo: str, folder: str) -> bool:
    """Normalize the form values and cache them on the session.

    Returns True iff token, owner and repo are non-empty after trimming. The
    normalized credentials are cached either way so the folder always reflects
    the latest form value.
    """
    creds = Credentials.from_form(token, owner, repo, folder)
    state.credentials = creds
    if not creds.complete:
        logger.debug("Credential validation failed (missing token, owner or repo)")
        return False
    return True


def extract_base64(encoded: str) -> str:
    """Return the payload of a data URL, or ``encoded`` unchanged if it has none."""
    _, sep, payload = encoded.partition(",")
    if not sep or not payload:
        return encoded
    return payload


def encode_data_url(data: bytes, file_name: str) -> str:
    mime, _ = mimetypes.guess_type(file_name)
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime or 'application/octet-stream'};base64,{payload}"
