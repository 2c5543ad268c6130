"""Tests for voicenote.apps.cli — argument parsing and the correct command."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from voicenote.apps import cli
from voicenote.core import dictionary as dictionary_module


@pytest.fixture(autouse=True)
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VOICENOTE_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.delenv("VOICENOTE_VOSK_MODEL", raising=False)
    monkeypatch.setattr(dictionary_module, "_shared", None)


class TestArgParser:
    def test_no_subcommand(self) -> None:
        args = cli.build_arg_parser().parse_args([])
        assert args.subcommand is None
        assert not args.list_devices

    def test_dictate_overrides(self) -> None:
        args = cli.build_arg_parser().parse_args(
            [
                "dictate",
                "--device", "3",
                "--model", "/models/small",
                "--no-auto-end",
                "--locale", "en",
                "--ignore", "kubectl",
                "--ignore", "nginx",
            ]
        )
        config = cli._apply_overrides(args)
        assert config.speech.device == 3
        assert config.speech.model == "/models/small"
        assert config.speech.auto_end is False
        assert config.dictionary.locale == "en"
        assert args.ignore == ["kubectl", "nginx"]

    def test_correct_keeps_speech_defaults(self) -> None:
        args = cli.build_arg_parser().parse_args(["correct", "--dictionary", "w.txt"])
        config = cli._apply_overrides(args)
        assert config.dictionary.path == "w.txt"
        assert config.speech.auto_end is True


class TestCorrectCommand:
    def test_corrects_file(
        self,
        tmp_path: Path,
        dictionary_file: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        source = tmp_path / "draft.txt"
        source.write_text("helo wrold, this is kubectl!\n")
        monkeypatch.setattr(
            sys,
            "argv",
            [
                "voicenote",
                "correct",
                "--dictionary", str(dictionary_file),
                "--ignore", "kubectl",
                str(source),
            ],
        )
        assert cli.main() == 0
        assert "hello world, this is kubectl!" in capsys.readouterr().out

    def test_text_printed_verbatim(
        self,
        tmp_path: Path,
        dictionary_file: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        source = tmp_path / "draft.txt"
        source.write_text("this is :smile: [bold]teh[/bold]\n")
        monkeypatch.setattr(
            sys,
            "argv",
            ["voicenote", "correct", "--dictionary", str(dictionary_file), str(source)],
        )
        assert cli.main() == 0
        assert "this is :smile: [bold]teh[/bold]" in capsys.readouterr().out

    def test_missing_dictionary_passes_text_through(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        source = tmp_path / "draft.txt"
        source.write_text("helo wrold\n")
        monkeypatch.setattr(
            sys,
            "argv",
            [
                "voicenote",
                "correct",
                "--dictionary", str(tmp_path / "missing.txt"),
                str(source),
            ],
        )
        assert cli.main() == 1
        assert "helo wrold" in capsys.readouterr().out
