"""Terminal document host for the dictation controller.

Implements the outbound ``DocumentHost`` interface by keeping the buffer,
cursor and recent notifications in a :class:`UiState` that the CLI renders.
"""

from voicenote.apps.ui import UiState
from voicenote.core.env import LOGGER
from voicenote.core.types import Notification, NotificationKind

_WARNING_KINDS = frozenset(
    {NotificationKind.ERROR, NotificationKind.DICTATION_UNAVAILABLE}
)


class TerminalHost:
    """Collects controller output for display and saving."""

    def __init__(self, state: UiState | None = None) -> None:
        self.state = state or UiState()
        self.cursor = 0

    @property
    def text(self) -> str:
        return self.state.document

    def on_document_text_changed(self, text: str) -> None:
        self.state.document = text
        self.cursor = len(text)

    def on_cursor_reposition(self, position: int) -> None:
        self.cursor = position

    def on_user_notification(self, kind: NotificationKind, message: str) -> None:
        if kind in _WARNING_KINDS:
            LOGGER.warning("%s: %s", kind.value, message)
            self.state.status = "Stopped"
        else:
            LOGGER.debug("%s: %s", kind.value, message)
        if kind is NotificationKind.RECORDING_STARTED:
            self.state.status = "Listening"
        elif kind is NotificationKind.RECORDING_STOPPED:
            self.state.status = "Finishing"
        self.state.notifications.append(Notification(kind, message))
