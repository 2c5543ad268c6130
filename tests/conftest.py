"""Shared test fixtures — no microphone, speech model, or dictionary file needed."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import pytest

from voicenote.core.types import (
    Notification,
    NotificationKind,
    RecognitionEvent,
    RecognitionResult,
    StreamError,
)


class FakeDictionary:
    """In-memory dictionary: a word list plus fixed suggestions."""

    def __init__(
        self,
        words: set[str] | None = None,
        suggestions: dict[str, list[str]] | None = None,
        ready: bool = True,
    ) -> None:
        self.words = {w.lower() for w in (words or set())}
        self.suggestions = suggestions or {}
        self.ready = ready
        self.ignored: set[str] = set()
        self.lookups: list[str] = []

    def is_ready(self) -> bool:
        return self.ready

    def add_to_ignore(self, word: str) -> None:
        self.ignored.add(word.lower())

    def is_ignored(self, word: str) -> bool:
        return word.lower() in self.ignored

    def check_word(self, word: str) -> bool:
        if not self.ready:
            return True
        self.lookups.append(word)
        return word.lower() in self.words

    def suggest(self, word: str) -> list[str]:
        if not self.ready:
            return []
        return list(self.suggestions.get(word, []))


class FakeStream:
    """Recognition stream driven by the test instead of a microphone."""

    def __init__(self) -> None:
        self.listener: Any = None
        self.calls: list[str] = []
        self.results: list[RecognitionResult] = []

    def start(self, listener: Any) -> None:
        self.calls.append("start")
        self.listener = listener
        self.results = []

    def stop(self) -> None:
        self.calls.append("stop")

    def abort(self) -> None:
        self.calls.append("abort")

    # Helpers that mimic what a real stream emits.

    def interim(self, text: str) -> None:
        event = RecognitionEvent(
            len(self.results),
            tuple(self.results) + (RecognitionResult(text),),
        )
        self.listener.handle_result(event)

    def final(self, text: str) -> None:
        self.results.append(RecognitionResult(text, is_final=True))
        self.listener.handle_result(
            RecognitionEvent(len(self.results) - 1, tuple(self.results))
        )

    def end(self) -> None:
        self.listener.handle_end()

    def error(self, code: str = "network", message: str = "") -> None:
        self.listener.handle_error(StreamError(code, message))


@dataclass
class FakeHandle:
    callback: Callable[[], object]
    delay: float
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Collects delayed callbacks; tests fire them explicitly."""

    def __init__(self) -> None:
        self.handles: list[FakeHandle] = []

    def call_later(self, delay: float, callback: Callable[[], object]) -> FakeHandle:
        handle = FakeHandle(callback, delay)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[FakeHandle]:
        return [h for h in self.handles if not h.cancelled]

    def run_pending(self) -> None:
        for handle in self.pending:
            handle.cancelled = True
            handle.callback()


@dataclass
class RecordingHost:
    """DocumentHost that records everything the controller tells it."""

    texts: list[str] = field(default_factory=list)
    cursors: list[int] = field(default_factory=list)
    notifications: list[Notification] = field(default_factory=list)

    def on_document_text_changed(self, text: str) -> None:
        self.texts.append(text)

    def on_cursor_reposition(self, position: int) -> None:
        self.cursors.append(position)

    def on_user_notification(self, kind: NotificationKind, message: str) -> None:
        self.notifications.append(Notification(kind, message))

    @property
    def kinds(self) -> list[NotificationKind]:
        return [n.kind for n in self.notifications]


@pytest.fixture
def fake_dictionary() -> FakeDictionary:
    return FakeDictionary(
        words={"this", "is", "great", "the", "cat", "like", "hello", "world", "receive"},
        suggestions={
            "grate": ["great", "grace"],
            "teh": ["the", "ten"],
            "cta": ["cat", "cut"],
            "recieve": ["receive"],
            "wrld": ["world"],
            "tho": ["though"],
            "xyzzy": [],
            "abt": ["about"],
        },
    )


@pytest.fixture
def fake_stream() -> FakeStream:
    return FakeStream()


@pytest.fixture
def fake_scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def recording_host() -> RecordingHost:
    return RecordingHost()


@pytest.fixture
def dictionary_file(tmp_path: Any) -> Any:
    """A tiny symspellpy word-frequency file."""
    path = tmp_path / "words.txt"
    entries = {
        "the": 23135851162,
        "this": 3228469010,
        "is": 4705743816,
        "great": 438913370,
        "grace": 19470584,
        "hello": 24271196,
        "world": 331442476,
        "receive": 78361606,
        "cat": 24137808,
        "don": 9081046,
        "do": 1534243098,
        "we": 1346393130,
    }
    path.write_text("".join(f"{w} {c}\n" for w, c in entries.items()))
    return path
