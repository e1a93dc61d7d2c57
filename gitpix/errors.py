"""Centralised error codes and user-facing error notification helper."""
from enum import Enum

ERROR_TITLE = "That image did not develop"


class ErrorCode(str, Enum):
    VAL_CREDENTIALS = "GP-VAL01"
    VAL_UPLOAD      = "GP-VAL02"
    VAL_BUSY        = "GP-VAL03"
    NET_LIST        = "GP-NET01"
    NET_PREVIEW     = "GP-NET02"
    NET_EDIT        = "GP-NET03"
    NET_UPLOAD      = "GP-NET04"
    NET_DELETE      = "GP-NET05"
    APP_UNEXPECTED  = "GP-APP01"


_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.VAL_CREDENTIALS: "Please fill in GitHub token, username, and repository name.",
    ErrorCode.VAL_UPLOAD:      "Please select an image file and enter a filename.",
    ErrorCode.VAL_BUSY:        "That file is still being saved or deleted. Try again in a moment.",
    ErrorCode.NET_LIST:        "The folder could not be listed.",
    ErrorCode.NET_PREVIEW:     "The image could not be loaded for preview.",
    ErrorCode.NET_EDIT:        "The file could not be loaded for editing.",
    ErrorCode.NET_UPLOAD:      "The image could not be uploaded.",
    ErrorCode.NET_DELETE:      "The image could not be deleted.",
    ErrorCode.APP_UNEXPECTED:  "Something unexpected happened. Please try again.",
}


# Input problems the user can fix on the spot; no request reached GitHub
_WARNINGS = {ErrorCode.VAL_CREDENTIALS, ErrorCode.VAL_UPLOAD, ErrorCode.VAL_BUSY}


def app_error(widget, code: ErrorCode, *, detail: str = "", status: int | None = None) -> None:
    """Raise a toast for ``code``.

    Validation codes are shown as short warnings. Remote failures are errors
    and carry the HTTP status next to the reference when one is known.
    """
    base = _MESSAGES.get(code, "An unexpected error occurred.")
    reference = f"{code.value} (HTTP {status})" if status else code.value
    message = f"{base}{' ' + detail if detail else ''}\n\nReference: {reference}"
    if code in _WARNINGS:
        widget.notify(message, title="Check your input", severity="warning", timeout=6)
    else:
        widget.notify(message, title=ERROR_TITLE, severity="error", timeout=12)
