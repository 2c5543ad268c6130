"""Language dictionary service backed by symspellpy.

The service is created once per process (see :func:`shared_dictionary`)
and becomes ready asynchronously. Until then, and whenever a lookup
fails, it answers "valid" and suggests nothing so typing and dictation
are never blocked by the dictionary.
"""

from __future__ import annotations

import asyncio
import re
from importlib.resources import files
from pathlib import Path
from typing import Any

from voicenote.core.constants import (
    CONTRACTION_SUFFIXES,
    DEFAULT_LOCALE,
    DEFAULT_MAX_EDIT_DISTANCE,
    DEFAULT_PREFIX_LENGTH,
    LOCALE_DICTIONARIES,
)
from voicenote.core.env import LOGGER
from voicenote.core.errors import DictionaryUnavailableError

_NUMERIC_RE = re.compile(r"^\d+$")

_shared: DictionaryService | None = None


def resolve_dictionary_path(locale: str, path: str | Path | None = None) -> Path:
    """Locate the word-frequency file for *locale*.

    An explicit *path* wins over the bundled dictionary for the locale.

    Raises:
        DictionaryUnavailableError: The locale is unknown or the file
            does not exist.
    """
    if path is not None:
        candidate = Path(path).expanduser()
    else:
        name = LOCALE_DICTIONARIES.get(locale)
        if name is None:
            raise DictionaryUnavailableError(f"no dictionary for locale {locale!r}")
        candidate = Path(str(files("symspellpy") / name))
    if not candidate.is_file():
        raise DictionaryUnavailableError(f"dictionary file not found: {candidate}")
    return candidate


class DictionaryService:
    """Answers "is this word valid" and "what could it have been"."""

    def __init__(
        self,
        locale: str = DEFAULT_LOCALE,
        *,
        path: str | Path | None = None,
        max_edit_distance: int = DEFAULT_MAX_EDIT_DISTANCE,
    ) -> None:
        self.locale = locale
        self.path = path
        self.max_edit_distance = max_edit_distance
        self._sym_spell: Any = None
        self._verbosity: Any = None
        self._ready = False
        self._ignored: set[str] = set()

    async def initialize(self) -> bool:
        """Load the dictionary off the event loop. Never raises."""
        try:
            sym_spell, verbosity = await asyncio.to_thread(self._load)
        except Exception:
            LOGGER.exception("Failed to initialize dictionary (%s)", self.locale)
            self._ready = False
            return False
        self._sym_spell = sym_spell
        self._verbosity = verbosity
        self._ready = True
        LOGGER.info(
            "Dictionary ready: %s (%d words)", self.locale, len(sym_spell.words)
        )
        return True

    def _load(self) -> tuple[Any, Any]:
        from symspellpy import SymSpell, Verbosity

        dictionary_path = resolve_dictionary_path(self.locale, self.path)
        sym_spell = SymSpell(
            max_dictionary_edit_distance=self.max_edit_distance,
            prefix_length=DEFAULT_PREFIX_LENGTH,
        )
        if not sym_spell.load_dictionary(
            str(dictionary_path), term_index=0, count_index=1, encoding="utf-8"
        ):
            raise DictionaryUnavailableError(
                f"could not read dictionary: {dictionary_path}"
            )
        return sym_spell, Verbosity.CLOSEST

    def is_ready(self) -> bool:
        return self._ready

    def add_to_ignore(self, word: str) -> None:
        self._ignored.add(word.lower())

    def is_ignored(self, word: str) -> bool:
        return word.lower() in self._ignored

    def check_word(self, word: str) -> bool:
        """Return True when *word* is spelled correctly (or cannot be judged)."""
        if len(word) <= 1 or _NUMERIC_RE.match(word) or self.is_ignored(word):
            return True
        if not self._ready:
            LOGGER.debug("Dictionary not ready; accepting %r", word)
            return True
        try:
            return self._known(word.lower())
        except Exception:
            LOGGER.exception("Error checking word %r", word)
            return True

    def _known(self, lower: str) -> bool:
        words = self._sym_spell.words
        if lower in words:
            return True
        stem, apostrophe, suffix = lower.rpartition("'")
        if apostrophe and stem and suffix in CONTRACTION_SUFFIXES:
            # "don't" -> "don" + "t", "we're" -> "we" + "re"
            if suffix == "t" and stem.endswith("n"):
                return stem in words or stem[:-1] in words
            return stem in words
        return False

    def suggest(self, word: str) -> list[str]:
        """Ranked replacement candidates for *word*; best first."""
        if not self._ready:
            LOGGER.debug("Dictionary not ready; no suggestions for %r", word)
            return []
        try:
            items = self._sym_spell.lookup(
                word,
                self._verbosity,
                max_edit_distance=self.max_edit_distance,
                transfer_casing=True,
            )
        except Exception:
            LOGGER.exception("Error getting suggestions for %r", word)
            return []
        return [item.term for item in items]


def shared_dictionary(locale: str = DEFAULT_LOCALE, **kwargs: Any) -> DictionaryService:
    """Return the process-wide dictionary service, creating it on first use.

    Later calls return the same instance regardless of their arguments.
    Callers still need to ``await service.initialize()`` once.
    """
    global _shared
    if _shared is None:
        _shared = DictionaryService(locale, **kwargs)
    return _shared
