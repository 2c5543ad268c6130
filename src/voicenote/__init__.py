__version__ = "0.1.0"


def __getattr__(name: str):
    """Lazy re-exports from voicenote.core for convenience."""
    _core_names = {
        "DictationController",
        "DictionaryService",
        "TextCorrectionEngine",
        "TranscriptSession",
        "shared_dictionary",
    }
    if name in _core_names:
        from voicenote import core

        return getattr(core, name)
    raise AttributeError(f"module 'voicenote' has no attribute {name!r}")
