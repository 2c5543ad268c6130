"""Structural type protocols for the collaborators around the pipeline."""

from collections.abc import Callable, Sequence
from typing import Protocol

from voicenote.core.types import NotificationKind, RecognitionEvent, StreamError


class DictionaryLike(Protocol):
    """What the correction engine needs from a dictionary service."""

    def is_ready(self) -> bool: ...

    def check_word(self, word: str) -> bool: ...

    def suggest(self, word: str) -> Sequence[str]: ...

    def is_ignored(self, word: str) -> bool: ...


class StreamListener(Protocol):
    """Receiver of recognition stream events."""

    def handle_result(self, event: RecognitionEvent) -> None: ...

    def handle_end(self) -> None: ...

    def handle_error(self, error: StreamError) -> None: ...


class RecognitionStream(Protocol):
    """A continuous speech-recognition stream.

    Events are delivered to the listener passed to :meth:`start` on the
    owner's event loop, in arrival order.
    """

    def start(self, listener: StreamListener) -> None: ...

    def stop(self) -> None: ...

    def abort(self) -> None: ...


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Deferred-callback source; ``asyncio.AbstractEventLoop`` satisfies it."""

    def call_later(
        self, delay: float, callback: Callable[[], object]
    ) -> Cancellable: ...


class DocumentHost(Protocol):
    """Outbound interface to the editor hosting the document buffer."""

    def on_document_text_changed(self, text: str) -> None: ...

    def on_cursor_reposition(self, position: int) -> None: ...

    def on_user_notification(self, kind: NotificationKind, message: str) -> None: ...
