"""Punctuation-aware spell correction for free text.

Text is split on whitespace into runs; each run is decomposed into
leading punctuation, a core word, and trailing punctuation. Only the core
is looked up and possibly replaced, then the punctuation is reattached
exactly as it was.
"""

from __future__ import annotations

import re

from voicenote.core.env import LOGGER
from voicenote.core.protocols import DictionaryLike
from voicenote.core.types import Token

PUNCTUATION = ".,!?;:'\"()\\-–—"

_PUNCT_ONLY_RE = re.compile(f"^[{PUNCTUATION}]+$")
_LEADING_RE = re.compile(f"^[{PUNCTUATION}]+")
_TRAILING_RE = re.compile(f"[{PUNCTUATION}]+$")
_WHITESPACE_RE = re.compile(r"\s+")
_NUMERIC_RE = re.compile(r"^\d+$")
_URL_RE = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)
_EMAIL_RE = re.compile(r"^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}$", re.IGNORECASE)

# A word counts as completed once whitespace or closing punctuation
# follows it at the end of the buffer.
_LAST_WORD_RE = re.compile(r"(\S+?)([.,!?;:'\"()]*)(\s*)$")
_COMPLETED_RE = re.compile(r"(\s|[.,!?;:'\"()]\s*)$")


def tokenize(run: str) -> Token:
    """Split one whitespace-free run into ``Token(leading, core, trailing)``."""
    if not run or _PUNCT_ONLY_RE.match(run):
        return Token("", "", run)
    leading = _LEADING_RE.match(run)
    lead = leading.group(0) if leading else ""
    rest = run[len(lead):]
    trailing = _TRAILING_RE.search(rest)
    trail = trailing.group(0) if trailing else ""
    return Token(lead, rest[: len(rest) - len(trail)], trail)


def is_skippable(word: str) -> bool:
    """Words the engine never touches, whatever the dictionary says."""
    return bool(
        len(word) <= 1
        or _NUMERIC_RE.match(word)
        or _URL_RE.match(word)
        or _EMAIL_RE.match(word)
    )


def last_completed_word(text: str) -> tuple[int, int] | None:
    """Return the ``(start, end)`` span of the core of the last finished word.

    A word is finished when the buffer ends in whitespace or in trailing
    punctuation. Returns None while the user is still inside a word.
    """
    if not text or not _COMPLETED_RE.search(text):
        return None
    match = _LAST_WORD_RE.search(text)
    if match is None:
        return None
    run_start = match.start(1)
    run = match.group(1) + match.group(2)
    token = tokenize(run)
    if token.is_punctuation:
        return None
    start = run_start + len(token.leading)
    return start, start + len(token.core)


class TextCorrectionEngine:
    """Applies a dictionary to single words and whole documents."""

    def __init__(self, dictionary: DictionaryLike) -> None:
        self.dictionary = dictionary

    @property
    def ready(self) -> bool:
        return self.dictionary.is_ready()

    def correct_word(self, word: str) -> str:
        """Replace *word* with the top suggestion if it is misspelled."""
        try:
            if is_skippable(word) or self.dictionary.is_ignored(word):
                return word
            if self.dictionary.check_word(word):
                return word
            suggestions = self.dictionary.suggest(word)
        except Exception:
            LOGGER.exception("Error correcting word %r", word)
            return word
        return suggestions[0] if suggestions else word

    def correct_token(self, run: str) -> str:
        token = tokenize(run)
        if token.is_punctuation:
            return run
        corrected = self.correct_word(token.core)
        if corrected == token.core:
            return run
        return f"{token.leading}{corrected}{token.trailing}"

    def correct_text(self, text: str) -> str:
        """Correct every word of *text*.

        Whitespace runs collapse to a single space in the result. On any
        failure the original text is returned unmodified.
        """
        if not self.ready:
            return text
        try:
            runs = _WHITESPACE_RE.split(text)
            return " ".join(self.correct_token(run) for run in runs)
        except Exception:
            LOGGER.exception("Error correcting text")
            return text
