"""GitHub Contents API data models."""

from dataclasses import dataclass

from pydantic import BaseModel


class RemoteFileEntry(BaseModel):
    """One item of a contents response (file, dir, symlink or submodule)."""

    name: str
    path: str
    sha: str
    size: int = 0
    type: str = "file"
    download_url: str | None = None
    html_url: str | None = None
    content: str | None = None  # Base64, only present on single-file responses
    encoding: str | None = None

    @property
    def is_file(self) -> bool:
        return self.type == "file"


class CommitInfo(BaseModel):
    """Commit metadata returned by PUT and DELETE."""

    sha: str | None = None
    message: str | None = None


class WriteResponse(BaseModel):
    """Body of a successful PUT (content is null for DELETE)."""

    content: RemoteFileEntry | None = None
    commit: CommitInfo | None = None


@dataclass
class ShaProbe:
    """Outcome of looking up the current sha of a path before writing it."""

    sha: str | None = None
    error: str | None = None    # Set when the lookup failed for a reason other than 404

    @property
    def found(self) -> bool:
        return self.sha is not None
