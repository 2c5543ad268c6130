"""Core data types shared across voicenote modules."""

from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True, slots=True)
class Token:
    """A whitespace-delimited run split into punctuation and core.

    ``leading + core + trailing`` always reconstructs the original run.
    """

    leading: str
    core: str
    trailing: str

    @property
    def text(self) -> str:
        return f"{self.leading}{self.core}{self.trailing}"

    @property
    def is_punctuation(self) -> bool:
        return not self.core


@dataclass(frozen=True, slots=True)
class RecognitionResult:
    """One entry of a recognition stream's result list."""

    transcript: str
    is_final: bool = False


@dataclass(frozen=True, slots=True)
class RecognitionEvent:
    """Incremental update from a recognition stream.

    Attributes:
        result_index: First entry of *results* that changed since the
            previous event.
        results: The stream's whole result list for the current run.
    """

    result_index: int
    results: tuple[RecognitionResult, ...]


@dataclass(frozen=True, slots=True)
class StreamError:
    """Error payload delivered through ``on_error``."""

    error: str
    message: str = ""

    def __str__(self) -> str:
        return f"{self.error}: {self.message}" if self.message else self.error


@dataclass(slots=True)
class TranscriptState:
    """Mutable state of a transcript session."""

    final_transcript: str = ""
    interim_transcript: str = ""
    result_delivered: bool = False
    is_listening: bool = False

    @property
    def combined(self) -> str:
        return (self.final_transcript + self.interim_transcript).strip()


@dataclass(frozen=True, slots=True)
class EditResult:
    """Outcome of a manual edit passed through correct-as-you-type.

    *original* and *replacement* are empty when no word was replaced.
    """

    text: str
    cursor: int
    original: str = ""
    replacement: str = ""

    @property
    def corrected(self) -> bool:
        return bool(self.original)


class NotificationKind(StrEnum):
    """User-facing notification categories sent to the host."""

    RECORDING_STARTED = "recording-started"
    RECORDING_STOPPED = "recording-stopped"
    SPEECH_RECOGNIZED = "speech-recognized"
    SPELL_CORRECTED = "spell-corrected"
    DICTATION_UNAVAILABLE = "dictation-unavailable"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Notification:
    """A notification as recorded by a host."""

    kind: NotificationKind
    message: str
