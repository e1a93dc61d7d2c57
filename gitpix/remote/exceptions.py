"""Exception types raised by the contents client and the image manager."""


class ContentsError(Exception):
    """Base class for every failure surfaced by a repository operation."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class ValidationError(ContentsError):
    """Required local input (credentials, file name, selected file) is missing."""


class BusyError(ValidationError):
    """Another write or delete on the same path has not finished yet."""


class NotFoundError(ContentsError):
    """The repository or folder does not exist (HTTP 404 on listing)."""


class ApiError(ContentsError):
    """The Contents API answered with a non-2xx status."""


class FetchError(ContentsError):
    """An auxiliary fetch (file metadata, raw download) failed."""


class FormatError(ContentsError):
    """The API returned a payload of an unexpected shape."""
