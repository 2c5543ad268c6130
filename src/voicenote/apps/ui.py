"""Terminal rendering for the dictation host.

All render functions are pure: they take a UiState snapshot and return
Rich renderables. No side effects, no mutation.
"""

from dataclasses import dataclass, field

from rich.layout import Layout
from rich.panel import Panel
from rich.text import Text

from voicenote.core.types import Notification, NotificationKind

_NOTIFICATION_STYLES: dict[NotificationKind, str] = {
    NotificationKind.RECORDING_STARTED: "green",
    NotificationKind.RECORDING_STOPPED: "yellow",
    NotificationKind.SPEECH_RECOGNIZED: "cyan",
    NotificationKind.SPELL_CORRECTED: "magenta",
    NotificationKind.DICTATION_UNAVAILABLE: "red",
    NotificationKind.ERROR: "bold red",
}


@dataclass(slots=True)
class UiState:
    """Snapshot of host state consumed by render functions."""

    status: str = "Starting"
    language: str = ""
    locale: str = ""
    dictionary_ready: bool = False
    preview: str = ""
    document: str = ""
    notifications: list[Notification] = field(default_factory=list)
    max_notifications: int = 5
    max_document_chars: int = 1200


def render_status_panel(state: UiState) -> Panel:
    """Render the top status bar."""
    status = Text()
    status.append("Status: ", style="bold")
    status_style = "green" if state.status == "Listening" else "yellow"
    status.append(state.status, style=status_style)
    status.append(" | ")
    status.append(f"Speech: {state.language or '--'}")
    status.append(" | ")
    status.append(f"Dictionary: {state.locale or '--'} ")
    if state.dictionary_ready:
        status.append("ready", style="green")
    else:
        status.append("off", style="red")
    return Panel(status, title="Status", padding=(0, 1))


def render_document_panel(state: UiState) -> Panel:
    """Render the tail of the document plus the uncommitted preview."""
    body = Text()
    document = state.document
    if len(document) > state.max_document_chars:
        document = "…" + document[-state.max_document_chars :]
    body.append(document)
    if state.preview:
        if document and not document[-1].isspace():
            body.append(" ")
        body.append(state.preview, style="dim italic")
    if not body.plain:
        body.append("Listening...", style="dim")
    return Panel(body, title="Note", padding=(0, 1))


def render_notifications_panel(state: UiState) -> Panel:
    body = Text()
    for note in state.notifications[-state.max_notifications :]:
        body.append(f"{note.kind.value}: ", style=_NOTIFICATION_STYLES[note.kind])
        body.append(note.message)
        body.append("\n")
    return Panel(body, title="Events", padding=(0, 1))


def render_layout(state: UiState) -> Layout:
    """Compose the full terminal layout from state."""
    layout = Layout()
    layout.split_column(
        Layout(render_status_panel(state), name="status", size=3),
        Layout(render_document_panel(state), name="document", ratio=2),
        Layout(
            render_notifications_panel(state),
            name="events",
            size=state.max_notifications + 2,
        ),
    )
    return layout
