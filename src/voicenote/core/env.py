"""Environment setup, output suppression, and logging for voicenote.

setup_environment() should be called before the speech backend is loaded
so Kaldi does not flood the terminal with decoder diagnostics.
"""

import contextlib
import io
import logging
import os
from collections.abc import Generator

LOGGER = logging.getLogger("voicenote")


def setup_environment() -> None:
    """Silence the speech backend's native logging, if it is installed."""
    try:
        import vosk
    except (ImportError, OSError):
        return
    vosk.SetLogLevel(-1)


@contextlib.contextmanager
def suppress_output() -> Generator[None, None, None]:
    """Hide noisy library prints while a native model loads.

    Redirects fd-level stderr and Python-level stdout/stderr to devnull
    so that library code writing directly to file descriptors is silenced.
    """
    devnull = os.open(os.devnull, os.O_WRONLY)
    stderr_fd = os.dup(2)
    try:
        os.dup2(devnull, 2)
        with (
            contextlib.redirect_stdout(io.StringIO()),
            contextlib.redirect_stderr(io.StringIO()),
        ):
            yield
    finally:
        os.dup2(stderr_fd, 2)
        os.close(stderr_fd)
        os.close(devnull)
