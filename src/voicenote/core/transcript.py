"""Transcript session: a two-state machine over a recognition stream.

The session turns the stream's result lists into one growing transcript
and guarantees the final text of a session reaches ``on_result`` exactly
once, even when the stream reports its end more than once.

All transitions are plain synchronous methods. The stream calls
:meth:`TranscriptSession.handle_result`, :meth:`handle_end` and
:meth:`handle_error` on the owner's event loop; the post-session reset is
a cancellable callback on the injected scheduler.
"""

from __future__ import annotations

from collections.abc import Callable

from voicenote.core.constants import DEFAULT_COOLDOWN_SECONDS
from voicenote.core.env import LOGGER
from voicenote.core.protocols import Cancellable, RecognitionStream, Scheduler
from voicenote.core.types import RecognitionEvent, StreamError, TranscriptState


class TranscriptSession:
    """Accumulates final and interim recognition results for one owner."""

    def __init__(
        self,
        stream: RecognitionStream | None,
        *,
        on_result: Callable[[str], None],
        scheduler: Scheduler,
        on_end: Callable[[], None] | None = None,
        on_error: Callable[[StreamError], None] | None = None,
        cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS,
    ) -> None:
        self._stream = stream
        self._on_result = on_result
        self._on_end = on_end
        self._on_error = on_error
        self._scheduler = scheduler
        self._cooldown_seconds = cooldown_seconds
        self._state = TranscriptState()
        self._cursor = 0
        self._accepting = False
        self._ending = False
        self._disposed = False
        self._pending_reset: Cancellable | None = None

    @property
    def supported(self) -> bool:
        return self._stream is not None

    @property
    def state(self) -> TranscriptState:
        return self._state

    def is_active(self) -> bool:
        return self._state.is_listening

    @property
    def ending(self) -> bool:
        """True between a graceful stop and the stream's end event."""
        return self._ending

    # ── Commands ────────────────────────────────────────────────────

    def start(self) -> bool:
        """Begin a session. Returns False when nothing was started."""
        if self._stream is None:
            LOGGER.error("Speech recognition is not available")
            return False
        if self._disposed or self._state.is_listening:
            return False
        if self._ending:
            LOGGER.debug("Previous session still finishing; not restarting")
            return False
        self._cancel_pending_reset()
        self._state.final_transcript = ""
        self._state.interim_transcript = ""
        self._state.result_delivered = False
        self._cursor = 0
        self._accepting = True
        # Set before starting: the stream may report an error synchronously.
        self._state.is_listening = True
        self._stream.start(self)
        return self._state.is_listening

    def stop(self) -> None:
        """Ask the stream to finish; buffered final text is still delivered."""
        if self._stream is not None and self._state.is_listening:
            self._ending = True
            self._state.is_listening = False
            self._stream.stop()

    def abort(self) -> None:
        """Terminate at once, dropping interim text and later events."""
        if self._stream is not None and self._state.is_listening:
            self._stream.abort()
        self._state.is_listening = False
        self._state.interim_transcript = ""
        self._accepting = False
        self._ending = False

    def dispose(self) -> None:
        self.abort()
        self._cancel_pending_reset()
        self._disposed = True

    # ── Stream events ───────────────────────────────────────────────

    def handle_result(self, event: RecognitionEvent) -> None:
        if not self._accepting:
            return
        interim: list[str] = []
        for index in range(max(event.result_index, self._cursor), len(event.results)):
            result = event.results[index]
            if result.is_final:
                # Finals before the cursor were consumed by an earlier event.
                self._state.final_transcript += result.transcript + " "
                self._cursor = index + 1
            else:
                interim.append(result.transcript)
        self._state.interim_transcript = "".join(interim)
        self._on_result(self._state.combined)

    def handle_end(self) -> None:
        if not self._accepting:
            return
        self._ending = False
        self._state.is_listening = False
        self._state.interim_transcript = ""
        if self._state.final_transcript and not self._state.result_delivered:
            self._on_result(self._state.final_transcript.strip())
            self._state.result_delivered = True
            if self._on_end is not None:
                self._on_end()
            self._cancel_pending_reset()
            self._pending_reset = self._scheduler.call_later(
                self._cooldown_seconds, self._reset_after_cooldown
            )
        elif self._on_end is not None:
            self._on_end()

    def handle_error(self, error: StreamError) -> None:
        if not self._accepting:
            return
        self._ending = False
        self._state.is_listening = False
        LOGGER.error("Speech recognition error: %s", error)
        if self._on_error is not None:
            self._on_error(error)

    # ── Internals ───────────────────────────────────────────────────

    def _reset_after_cooldown(self) -> None:
        self._pending_reset = None
        if self._disposed or self._state.is_listening:
            return
        self._state.final_transcript = ""
        self._state.result_delivered = False

    def _cancel_pending_reset(self) -> None:
        if self._pending_reset is not None:
            self._pending_reset.cancel()
            self._pending_reset = None
