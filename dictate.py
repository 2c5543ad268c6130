# /// script
# requires-python = ">=3.12"
# dependencies = [
#     "voicenote",
# ]
#
# [tool.uv.sources]
# voicenote = { path = "." }
# ///
"""Dictate notes with live spell correction."""

from voicenote.apps.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
