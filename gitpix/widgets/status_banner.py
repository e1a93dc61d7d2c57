"""Ephemeral status line that clears itself after a fixed interval."""

from textual.timer import Timer
from textual.widgets import Label

from gitpix.manager import STATUS_TIMEOUT

KINDS = ("info", "success", "error")


class StatusBanner(Label):
    """Shows one status message at a time; a newer message replaces the older one."""

    DEFAULT_CSS = """
    StatusBanner {
        width: 100%;
        height: 1;
        padding: 0 1;
    }
    StatusBanner.info {
        color: $accent;
    }
    StatusBanner.success {
        color: $success;
    }
    StatusBanner.error {
        color: $error;
    }
    """

    def __init__(self, *, timeout: float = STATUS_TIMEOUT, **kwargs) -> None:
        super().__init__("", markup=False, **kwargs)
        self.timeout = timeout
        self.current_message = ""
        self.current_kind = ""
        self._clear_timer: Timer | None = None

    def set_status(self, message: str, kind: str = "info") -> None:
        if kind not in KINDS:
            kind = "info"
        if self._clear_timer is not None:
            self._clear_timer.stop()
        self.current_message = message
        self.current_kind = kind
        self.update(message)
        self.remove_class(*KINDS)
        self.add_class(kind)
        self._clear_timer = self.set_timer(self.timeout, self.clear_message)

    def clear_message(self) -> None:
        self._clear_timer = None
        self.current_message = ""
        self.current_kind = ""
        self.update("")
        self.remove_class(*KINDS)
