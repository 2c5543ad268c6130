"""Core dictation pipeline — no audio or UI dependencies.

Re-exports key symbols for convenience.
"""

from voicenote.core.controller import DictationController, merge_dictation
from voicenote.core.dictionary import DictionaryService, shared_dictionary
from voicenote.core.errors import (
    DictionaryUnavailableError,
    VoicenoteError,
)
from voicenote.core.protocols import (
    DictionaryLike,
    DocumentHost,
    RecognitionStream,
    Scheduler,
    StreamListener,
)
from voicenote.core.text import TextCorrectionEngine, last_completed_word, tokenize
from voicenote.core.transcript import TranscriptSession
from voicenote.core.types import (
    EditResult,
    NotificationKind,
    RecognitionEvent,
    RecognitionResult,
    StreamError,
    Token,
    TranscriptState,
)

__all__ = [
    "DictationController",
    "DictionaryLike",
    "DictionaryService",
    "DictionaryUnavailableError",
    "DocumentHost",
    "EditResult",
    "NotificationKind",
    "RecognitionEvent",
    "RecognitionResult",
    "RecognitionStream",
    "Scheduler",
    "StreamError",
    "StreamListener",
    "TextCorrectionEngine",
    "Token",
    "TranscriptSession",
    "TranscriptState",
    "VoicenoteError",
    "last_completed_word",
    "merge_dictation",
    "shared_dictionary",
    "tokenize",
]
