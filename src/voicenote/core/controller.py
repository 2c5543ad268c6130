"""Dictation controller: joins speech, correction, and the host document.

The controller owns the document buffer on behalf of its host. Spoken
text is previewed live while a session runs and committed, corrected,
when the session ends. Typed text is corrected one finished word at a
time, keeping the host's cursor on the same logical position.
"""

from __future__ import annotations

from voicenote.core.constants import (
    DEFAULT_COOLDOWN_SECONDS,
    DEFAULT_MIN_TYPED_WORD_LENGTH,
)
from voicenote.core.env import LOGGER
from voicenote.core.protocols import DocumentHost, RecognitionStream, Scheduler
from voicenote.core.text import TextCorrectionEngine, last_completed_word
from voicenote.core.transcript import TranscriptSession
from voicenote.core.types import EditResult, NotificationKind, StreamError


def merge_dictation(document: str, dictated: str) -> str:
    """Append *dictated* to *document* with exactly one separating space."""
    if document and not document[-1].isspace():
        return f"{document} {dictated}"
    return document + dictated


class DictationController:
    """Integration layer between a host editor and the dictation pipeline."""

    def __init__(
        self,
        engine: TextCorrectionEngine,
        host: DocumentHost,
        *,
        scheduler: Scheduler,
        stream: RecognitionStream | None = None,
        text: str = "",
        min_typed_word_length: int = DEFAULT_MIN_TYPED_WORD_LENGTH,
        cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS,
    ) -> None:
        self.engine = engine
        self.host = host
        self.min_typed_word_length = min_typed_word_length
        self._text = text
        self._preview = ""
        self._recording = False
        self._alive = True
        self._session: TranscriptSession | None = None
        if stream is not None:
            self._session = TranscriptSession(
                stream,
                on_result=self._on_session_result,
                on_end=self._on_session_end,
                on_error=self._on_session_error,
                scheduler=scheduler,
                cooldown_seconds=cooldown_seconds,
            )

    @property
    def text(self) -> str:
        return self._text

    @property
    def preview(self) -> str:
        """Text recognized so far in the running session, not yet committed."""
        return self._preview

    @property
    def recording(self) -> bool:
        return self._recording

    @property
    def dictation_available(self) -> bool:
        return self._session is not None

    @property
    def session(self) -> TranscriptSession | None:
        return self._session

    # ── Host → controller ───────────────────────────────────────────

    def on_dictation_toggle(self) -> None:
        if not self._alive:
            return
        if self._session is None:
            self.host.on_user_notification(
                NotificationKind.DICTATION_UNAVAILABLE,
                "Speech recognition is not supported on this system.",
            )
            return
        if not self._recording:
            if self._session.ending:
                # The end event of the last session has not arrived yet.
                return
            self._preview = ""
            self._recording = self._session.start()
            if self._recording:
                self.host.on_user_notification(
                    NotificationKind.RECORDING_STARTED,
                    "Speak clearly into your microphone.",
                )
        else:
            self._session.stop()
            self._recording = False
            self.host.on_user_notification(
                NotificationKind.RECORDING_STOPPED,
                "Finishing transcription.",
            )

    def on_manual_edit(self, new_text: str, cursor: int) -> EditResult:
        """Adopt a typed edit, correcting the word the user just finished.

        Only the last completed word is considered. When it is replaced,
        the cursor moves by the length difference if it sits at or after
        that word.
        """
        self._text = new_text
        if not self._alive or not self.engine.ready:
            return EditResult(new_text, cursor)

        span = last_completed_word(new_text)
        if span is None:
            return EditResult(new_text, cursor)
        start, end = span
        word = new_text[start:end]
        if len(word) < self.min_typed_word_length:
            return EditResult(new_text, cursor)

        replacement = self.engine.correct_word(word)
        if replacement == word:
            return EditResult(new_text, cursor)

        corrected = new_text[:start] + replacement + new_text[end:]
        new_cursor = cursor
        if cursor >= end:
            new_cursor = cursor + len(replacement) - len(word)
        self._text = corrected
        LOGGER.debug("Corrected %r -> %r at %d", word, replacement, start)
        self.host.on_document_text_changed(corrected)
        self.host.on_cursor_reposition(new_cursor)
        self.host.on_user_notification(
            NotificationKind.SPELL_CORRECTED,
            f'"{word}" corrected to "{replacement}"',
        )
        return EditResult(corrected, new_cursor, word, replacement)

    def commit_document(self) -> str:
        """Correct the whole buffer, as done before a note is saved."""
        if not self._alive:
            return self._text
        corrected = self.engine.correct_text(self._text)
        if corrected != self._text:
            self._text = corrected
            self.host.on_document_text_changed(corrected)
        return corrected

    def dispose(self) -> None:
        """Detach from the host; late stream callbacks become no-ops."""
        self._alive = False
        self._recording = False
        if self._session is not None:
            self._session.dispose()

    # ── Session → controller ────────────────────────────────────────

    def _on_session_result(self, text: str) -> None:
        if not self._alive:
            return
        self._preview = text

    def _on_session_end(self) -> None:
        if not self._alive:
            return
        self._recording = False
        dictated = self._preview.strip()
        self._preview = ""
        if not dictated:
            return
        corrected = self.engine.correct_text(dictated)
        self._text = merge_dictation(self._text, corrected)
        self.host.on_document_text_changed(self._text)
        self.host.on_user_notification(
            NotificationKind.SPEECH_RECOGNIZED,
            "Your speech has been added to the note.",
        )

    def _on_session_error(self, error: StreamError) -> None:
        if not self._alive:
            return
        self._recording = False
        self.host.on_user_notification(
            NotificationKind.ERROR,
            f"There was an error with speech recognition ({error}).",
        )
