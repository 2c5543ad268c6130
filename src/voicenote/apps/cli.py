"""CLI entry point for voicenote.

Parses arguments, configures logging, and launches the requested command.

Subcommands:
    dictate — dictate into a note with live spell correction (default)
    correct — spell-correct a text file or stdin
"""

import argparse
import asyncio
import dataclasses
import logging
import os
import sys

from voicenote.apps.config import VoicenoteConfig, load_config
from voicenote.core.constants import DEFAULT_LOCALE


def _add_shared_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments shared across subcommands."""
    parser.add_argument(
        "--locale",
        default=None,
        help=f"Dictionary locale (default: from config or {DEFAULT_LOCALE})",
    )
    parser.add_argument(
        "--dictionary",
        default=None,
        help="Word-frequency dictionary file (overrides --locale)",
    )
    parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="WORD",
        help="Never correct WORD (repeatable)",
    )
    parser.add_argument(
        "--config-file",
        default=None,
        help="JSON config file (default: ~/.config/voicenote/config.json)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $LOG_LEVEL or INFO)",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with subcommand support."""
    parser = argparse.ArgumentParser(
        description="Dictate notes with live, punctuation-aware spell correction"
    )
    parser.add_argument(
        "--list-devices", action="store_true", help="List audio devices"
    )

    subparsers = parser.add_subparsers(dest="subcommand")

    # `voicenote dictate`
    dictate_parser = subparsers.add_parser(
        "dictate",
        help="Dictate into a markdown note until Ctrl+C",
    )
    _add_shared_args(dictate_parser)
    dictate_parser.add_argument(
        "--model", default=None, help="Vosk model directory"
    )
    dictate_parser.add_argument(
        "--device", type=int, default=None, help="Audio input device"
    )
    dictate_parser.add_argument(
        "--notes-file",
        default=None,
        help="Output file path (default: auto-named in notes directory)",
    )
    dictate_parser.add_argument(
        "--no-auto-end",
        action="store_true",
        help="Keep one session open instead of ending on silence",
    )
    dictate_parser.add_argument(
        "--no-ui", action="store_true", help="Disable the Rich live UI"
    )

    # `voicenote correct`
    correct_parser = subparsers.add_parser(
        "correct",
        help="Spell-correct text from FILE (or stdin) and print it",
    )
    _add_shared_args(correct_parser)
    correct_parser.add_argument("file", nargs="?", default=None)
    return parser


def list_audio_devices() -> None:
    """Display available audio input devices."""
    import sounddevice as sd
    from rich.console import Console
    from rich.table import Table

    console = Console()
    table = Table(title="Audio Input Devices")
    table.add_column("ID", style="cyan")
    table.add_column("Device", style="white")
    table.add_column("Default", style="green")
    for i, d in enumerate(sd.query_devices()):
        if d["max_input_channels"] > 0:
            is_default = "Yes" if i == sd.default.device[0] else ""
            table.add_row(str(i), d["name"], is_default)
    console.print(table)


def _apply_overrides(args: argparse.Namespace) -> VoicenoteConfig:
    """Load config and fold command-line overrides into it."""
    config = load_config(args.config_file)
    dictionary = config.dictionary
    if args.locale:
        dictionary = dataclasses.replace(dictionary, locale=args.locale)
    if args.dictionary:
        dictionary = dataclasses.replace(dictionary, path=args.dictionary)
    config = dataclasses.replace(config, dictionary=dictionary)

    if args.subcommand == "dictate":
        speech = config.speech
        if args.model:
            speech = dataclasses.replace(speech, model=args.model)
        if args.device is not None:
            speech = dataclasses.replace(speech, device=args.device)
        if args.no_auto_end:
            speech = dataclasses.replace(speech, auto_end=False)
        config = dataclasses.replace(config, speech=speech)
    return config


def _run_dictate(args: argparse.Namespace) -> int:
    """Run the dictation loop."""
    from voicenote.apps.notes import resolve_notes_path
    from voicenote.apps.pipeline import DictationRunner

    config = _apply_overrides(args)
    runner = DictationRunner(
        config,
        resolve_notes_path(args.notes_file),
        ignore=tuple(args.ignore),
        no_ui=args.no_ui,
    )
    return asyncio.run(runner.run())


def _run_correct(args: argparse.Namespace) -> int:
    """Correct a document the way a note is corrected before saving."""
    from pathlib import Path

    from rich.console import Console

    from voicenote.core.dictionary import shared_dictionary
    from voicenote.core.text import TextCorrectionEngine

    config = _apply_overrides(args)
    text = Path(args.file).read_text() if args.file else sys.stdin.read()

    dictionary = shared_dictionary(
        config.dictionary.locale,
        path=config.dictionary.path,
        max_edit_distance=config.dictionary.max_edit_distance,
    )
    for word in config.dictionary.ignore + tuple(args.ignore):
        dictionary.add_to_ignore(word)
    ready = asyncio.run(dictionary.initialize())

    Console().print(
        TextCorrectionEngine(dictionary).correct_text(text),
        markup=False,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )
    return 0 if ready else 1


def main() -> int:
    """CLI entry point. Returns exit code."""
    from voicenote.core.env import setup_environment

    setup_environment()

    from rich.console import Console
    from rich.logging import RichHandler

    parser = build_arg_parser()
    args = parser.parse_args()

    log_level = (
        getattr(args, "log_level", None) or os.environ.get("LOG_LEVEL", "INFO")
    ).upper()
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                show_time=False,
                show_path=False,
                rich_tracebacks=False,
            )
        ],
    )

    if args.list_devices:
        list_audio_devices()
        return 0

    if args.subcommand == "correct":
        return _run_correct(args)

    if args.subcommand is None:
        args = parser.parse_args(["dictate", *sys.argv[1:]])
    return _run_dictate(args)
