"""Default configuration values for voicenote."""

from typing import Final

# Dictionary
DEFAULT_LOCALE: Final = "en_US"
DEFAULT_MAX_EDIT_DISTANCE: Final = 2
DEFAULT_PREFIX_LENGTH: Final = 7
LOCALE_DICTIONARIES: Final = {
    "en_US": "frequency_dictionary_en_82_765.txt",
    "en": "frequency_dictionary_en_82_765.txt",
}
CONTRACTION_SUFFIXES: Final = frozenset({"s", "t", "d", "m", "re", "ve", "ll"})

# Speech
DEFAULT_SPEECH_LANGUAGE: Final = "en-US"
DEFAULT_SAMPLE_RATE: Final = 16_000
DEFAULT_VOSK_MODEL: Final = "~/.local/share/voicenote/models/vosk-model-small-en-us-0.15"
DEFAULT_VOSK_MODEL_ENV: Final = "VOICENOTE_VOSK_MODEL"
DEFAULT_VAD_FRAME_MS: Final = 30
DEFAULT_VAD_MODE: Final = 2
DEFAULT_VAD_SILENCE_MS: Final = 1500
DEFAULT_AUDIO_QUEUE_MAXSIZE: Final = 200
DEFAULT_STOP_TIMEOUT: Final = 3.0

# Editor
DEFAULT_COOLDOWN_SECONDS: Final = 0.5
DEFAULT_MIN_TYPED_WORD_LENGTH: Final = 3

# Config / notes
DEFAULT_CONFIG_DIR: Final = "~/.config/voicenote"
DEFAULT_CONFIG_DIR_ENV: Final = "VOICENOTE_CONFIG_DIR"
DEFAULT_CONFIG_FILE: Final = "config.json"
DEFAULT_NOTES_DIR: Final = "~/.local/share/voicenote/notes"
DEFAULT_NOTES_DIR_ENV: Final = "VOICENOTE_NOTES_DIR"
