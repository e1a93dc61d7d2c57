"""Main Textual App class."""

import logging
from pathlib import Path

from textual.app import App

from gitpix.errors import ErrorCode, app_error
from gitpix.manager import RepositoryImageClient
from gitpix.screens.images import ImageManagerScreen
from gitpix.session import SessionState

logger = logging.getLogger(__name__)


class GitPixApp(App):
    TITLE = "gitpix"
    CSS = """
    Screen {
        background: $surface;
    }
    """

    SCREENS = {
        "images": ImageManagerScreen,
    }

    def __init__(self, image_client: RepositoryImageClient | None = None, start_dir: Path | None = None):
        super().__init__()
        self.session = SessionState()
        self.image_client = image_client or RepositoryImageClient()
        self.start_dir = Path(start_dir) if start_dir else Path.cwd()

    def on_mount(self) -> None:
        self.push_screen("images")

    def on_unmount(self) -> None:
        self.image_client.close()

    def _handle_exception(self, error: Exception) -> None:
        """Best-effort safety net: show toast instead of crashing.

        Overrides Textual's private _handle_exception. If notify itself fails,
        the error is only logged.
        """
        logger.exception("Unhandled error", exc_info=error)
        try:
            app_error(self, ErrorCode.APP_UNEXPECTED)
        except Exception:
            logger.exception("Could not show error notification")
