"""Application-level configuration loaded from JSON.

Reads ``~/.config/voicenote/config.json`` (directory overridable with the
``VOICENOTE_CONFIG_DIR`` environment variable) into frozen dataclasses.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from voicenote.core.constants import (
    DEFAULT_CONFIG_DIR,
    DEFAULT_CONFIG_DIR_ENV,
    DEFAULT_CONFIG_FILE,
    DEFAULT_COOLDOWN_SECONDS,
    DEFAULT_LOCALE,
    DEFAULT_MAX_EDIT_DISTANCE,
    DEFAULT_MIN_TYPED_WORD_LENGTH,
    DEFAULT_SAMPLE_RATE,
    DEFAULT_SPEECH_LANGUAGE,
    DEFAULT_VAD_FRAME_MS,
    DEFAULT_VAD_MODE,
    DEFAULT_VAD_SILENCE_MS,
    DEFAULT_VOSK_MODEL,
    DEFAULT_VOSK_MODEL_ENV,
)
from voicenote.core.env import LOGGER


# ---------------------------------------------------------------------------
# Nested config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DictionaryConfig:
    """Spell-check dictionary selection and user ignore list."""

    locale: str = DEFAULT_LOCALE
    path: str | None = None
    max_edit_distance: int = DEFAULT_MAX_EDIT_DISTANCE
    ignore: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class SpeechConfig:
    """Speech model, capture device, and silence end-pointing.

    The recognition language comes from the Vosk model; ``language`` is
    only shown in the status bar.
    """

    model: str = DEFAULT_VOSK_MODEL
    language: str = DEFAULT_SPEECH_LANGUAGE
    sample_rate: int = DEFAULT_SAMPLE_RATE
    device: int | None = None
    auto_end: bool = True
    vad_mode: int = DEFAULT_VAD_MODE
    vad_frame_ms: int = DEFAULT_VAD_FRAME_MS
    vad_silence_ms: int = DEFAULT_VAD_SILENCE_MS


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Behavior of the dictation controller inside the editor."""

    cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS
    min_typed_word_length: int = DEFAULT_MIN_TYPED_WORD_LENGTH


@dataclass(frozen=True, slots=True)
class VoicenoteConfig:
    """Top-level configuration."""

    dictionary: DictionaryConfig = field(default_factory=DictionaryConfig)
    speech: SpeechConfig = field(default_factory=SpeechConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)


# ---------------------------------------------------------------------------
# Config loading helpers
# ---------------------------------------------------------------------------


def config_dir() -> Path:
    return Path(
        os.environ.get(DEFAULT_CONFIG_DIR_ENV, "") or DEFAULT_CONFIG_DIR,
    ).expanduser()


def _resolve_config_path(base: Path, path_str: str) -> Path:
    """Resolve a path relative to *base*. Absolute paths used as-is."""
    p = Path(path_str).expanduser()
    if p.is_absolute():
        return p
    return base / p


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    raw = data.get(name, {})
    if not isinstance(raw, dict):
        LOGGER.warning("Ignoring config section %r: expected an object", name)
        return {}
    return raw


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------


def load_config(path: str | None = None) -> VoicenoteConfig:
    """Load voicenote configuration from a JSON file.

    The ``VOICENOTE_VOSK_MODEL`` environment variable overrides
    ``speech.model`` and is resolved against the current directory.
    Relative paths in the file are resolved against the config directory.

    Returns a default config if the file does not exist.
    """
    base = config_dir()
    config_path = Path(path).expanduser() if path else base / DEFAULT_CONFIG_FILE
    env_model = os.environ.get(DEFAULT_VOSK_MODEL_ENV, "")

    data: dict[str, Any] = {}
    if config_path.exists():
        with open(config_path) as f:
            loaded = json.load(f)
        if isinstance(loaded, dict):
            data = loaded
        else:
            LOGGER.warning("Ignoring %s: top level is not an object", config_path)

    # -- dictionary --------------------------------------------------------
    dict_raw = _section(data, "dictionary")
    dict_path = dict_raw.get("path")
    dictionary = DictionaryConfig(
        locale=str(dict_raw.get("locale", DEFAULT_LOCALE)),
        path=str(_resolve_config_path(base, str(dict_path))) if dict_path else None,
        max_edit_distance=int(
            dict_raw.get("max_edit_distance", DEFAULT_MAX_EDIT_DISTANCE)
        ),
        ignore=tuple(str(w) for w in dict_raw.get("ignore", []) if w),
    )

    # -- speech ------------------------------------------------------------
    speech_raw = _section(data, "speech")
    model = speech_raw.get("model")
    if env_model:
        model_path = str(Path(env_model).expanduser().absolute())
    elif model:
        model_path = str(_resolve_config_path(base, str(model)))
    else:
        model_path = DEFAULT_VOSK_MODEL
    device = speech_raw.get("device")
    speech = SpeechConfig(
        model=model_path,
        language=str(speech_raw.get("language", DEFAULT_SPEECH_LANGUAGE)),
        sample_rate=int(speech_raw.get("sample_rate", DEFAULT_SAMPLE_RATE)),
        device=int(device) if device is not None else None,
        auto_end=bool(speech_raw.get("auto_end", True)),
        vad_mode=int(speech_raw.get("vad_mode", DEFAULT_VAD_MODE)),
        vad_frame_ms=int(speech_raw.get("vad_frame_ms", DEFAULT_VAD_FRAME_MS)),
        vad_silence_ms=int(speech_raw.get("vad_silence_ms", DEFAULT_VAD_SILENCE_MS)),
    )

    # -- editor ------------------------------------------------------------
    editor_raw = _section(data, "editor")
    editor = EditorConfig(
        cooldown_seconds=float(
            editor_raw.get("cooldown_seconds", DEFAULT_COOLDOWN_SECONDS)
        ),
        min_typed_word_length=int(
            editor_raw.get("min_typed_word_length", DEFAULT_MIN_TYPED_WORD_LENGTH)
        ),
    )

    return VoicenoteConfig(dictionary=dictionary, speech=speech, editor=editor)
