"""Tests for voicenote.core.dictionary — symspellpy-backed word checks."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from voicenote.core import dictionary as dictionary_module
from voicenote.core.dictionary import (
    DictionaryService,
    resolve_dictionary_path,
    shared_dictionary,
)
from voicenote.core.errors import DictionaryUnavailableError


@pytest.fixture
def ready_service(dictionary_file: Path) -> DictionaryService:
    service = DictionaryService(path=dictionary_file)
    assert asyncio.run(service.initialize()) is True
    return service


class TestInitialize:
    def test_ready_after_load(self, ready_service: DictionaryService) -> None:
        assert ready_service.is_ready()

    def test_not_ready_before_load(self, dictionary_file: Path) -> None:
        service = DictionaryService(path=dictionary_file)
        assert not service.is_ready()

    def test_unknown_locale_fails_quietly(self) -> None:
        service = DictionaryService("xx_XX")
        assert asyncio.run(service.initialize()) is False
        assert not service.is_ready()

    def test_missing_file_fails_quietly(self, tmp_path: Path) -> None:
        service = DictionaryService(path=tmp_path / "nope.txt")
        assert asyncio.run(service.initialize()) is False
        assert not service.is_ready()


class TestResolveDictionaryPath:
    def test_bundled_english(self) -> None:
        path = resolve_dictionary_path("en_US")
        assert path.is_file()
        assert path.name == "frequency_dictionary_en_82_765.txt"

    def test_explicit_path_wins(self, dictionary_file: Path) -> None:
        assert resolve_dictionary_path("xx_XX", dictionary_file) == dictionary_file

    def test_unknown_locale(self) -> None:
        with pytest.raises(DictionaryUnavailableError):
            resolve_dictionary_path("xx_XX")


class TestCheckWord:
    def test_known_words(self, ready_service: DictionaryService) -> None:
        assert ready_service.check_word("hello")
        assert ready_service.check_word("Hello")
        assert ready_service.check_word("WORLD")

    def test_unknown_word(self, ready_service: DictionaryService) -> None:
        assert not ready_service.check_word("helo")

    def test_contractions(self, ready_service: DictionaryService) -> None:
        assert ready_service.check_word("don't")
        assert ready_service.check_word("we're")
        assert not ready_service.check_word("zzz'll")

    @pytest.mark.parametrize("word", ["a", "7", "31337"])
    def test_short_and_numeric_always_valid(
        self, ready_service: DictionaryService, word: str
    ) -> None:
        assert ready_service.check_word(word)

    def test_ignored_words_valid(self, ready_service: DictionaryService) -> None:
        ready_service.add_to_ignore("Kubectl")
        assert ready_service.is_ignored("kubectl")
        assert ready_service.is_ignored("KUBECTL")
        assert ready_service.check_word("kubectl")

    def test_not_ready_fails_open(self, dictionary_file: Path) -> None:
        service = DictionaryService(path=dictionary_file)
        assert service.check_word("qwxzv")
        assert service.suggest("qwxzv") == []

    def test_lookup_error_fails_open(
        self, ready_service: DictionaryService, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def boom(lower: str) -> bool:
            raise RuntimeError(lower)

        monkeypatch.setattr(ready_service, "_known", boom)
        assert ready_service.check_word("helo")


class TestSuggest:
    def test_closest_first(self, ready_service: DictionaryService) -> None:
        assert ready_service.suggest("helo")[0] == "hello"
        assert ready_service.suggest("teh")[0] == "the"

    def test_casing_transferred(self, ready_service: DictionaryService) -> None:
        assert ready_service.suggest("Wrold")[0] == "World"

    def test_nothing_close(self, ready_service: DictionaryService) -> None:
        assert ready_service.suggest("qwxzvbnm") == []


class TestSharedDictionary:
    def test_same_instance(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(dictionary_module, "_shared", None)
        first = shared_dictionary("en_US")
        second = shared_dictionary("xx_XX")
        assert first is second
        assert first.locale == "en_US"

    def test_ignore_list_shared(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(dictionary_module, "_shared", None)
        shared_dictionary().add_to_ignore("voicenote")
        assert shared_dictionary().is_ignored("VoiceNote")
