"""Notes file output: where the terminal host saves finished documents."""

import os
from datetime import datetime
from pathlib import Path

from voicenote.core.constants import DEFAULT_NOTES_DIR, DEFAULT_NOTES_DIR_ENV
from voicenote.core.env import LOGGER


def resolve_notes_path(notes_file: str | None) -> Path:
    """Determine the output file path for this session.

    Priority:
    1. ``--notes-file`` flag (absolute or relative to cwd)
    2. ``VOICENOTE_NOTES_DIR`` env var / default dir, with timestamp filename
    """
    if notes_file:
        return Path(notes_file).resolve()

    notes_dir = Path(
        os.environ.get(DEFAULT_NOTES_DIR_ENV, "")
        or os.path.expanduser(DEFAULT_NOTES_DIR)
    )
    notes_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d_%H%M")
    return notes_dir / f"{timestamp}.md"


def append_note(path: Path, text: str) -> bool:
    """Append a dictated note under a timestamped heading.

    Returns False (and writes nothing) when *text* is blank.
    """
    if not text.strip():
        LOGGER.info("Nothing dictated; %s left untouched", path)
        return False
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M")
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a") as f:
        if path.stat().st_size > 0:
            f.write("\n---\n\n")
        f.write(f"# Note — {timestamp}\n\n{text.strip()}\n")
        f.flush()
    return True
