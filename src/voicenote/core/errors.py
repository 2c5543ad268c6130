"""Exception types raised inside voicenote.

None of these escape to the host: the dictionary and correction layers
catch them at their boundaries and fail open.
"""


class VoicenoteError(RuntimeError):
    """Base class for voicenote failures."""


class DictionaryUnavailableError(VoicenoteError):
    """The requested dictionary could not be located or loaded."""
