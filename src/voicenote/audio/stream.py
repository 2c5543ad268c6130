"""Continuous speech-recognition stream over the microphone.

Audio is captured with sounddevice, decoded incrementally by a Vosk
recognizer, and optionally end-pointed by WebRTC VAD. The stream keeps a
result list in the same shape a browser recognition stream does: zero or
more final entries followed by at most one interim entry. Every change is
delivered to the listener on the asyncio loop that called :meth:`start`.

The sounddevice callback only copies frames onto the loop; recognition
runs in a worker thread via ``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
import importlib
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import numpy as np

from voicenote.audio.vad import SilenceEndpointer, VadConfig
from voicenote.core.constants import DEFAULT_AUDIO_QUEUE_MAXSIZE, DEFAULT_SAMPLE_RATE
from voicenote.core.env import LOGGER, suppress_output
from voicenote.core.protocols import StreamListener
from voicenote.core.types import RecognitionEvent, RecognitionResult, StreamError


class VoskRecognitionStream:
    """Microphone → Vosk stream implementing the recognition protocol."""

    def __init__(
        self,
        recognizer_factory: Callable[[], Any],
        input_factory: Callable[[Callable[..., None]], Any],
        *,
        endpointer: SilenceEndpointer | None = None,
    ) -> None:
        self._recognizer_factory = recognizer_factory
        self._input_factory = input_factory
        self._endpointer = endpointer
        self._loop: asyncio.AbstractEventLoop | None = None
        self._listener: StreamListener | None = None
        self._recognizer: Any = None
        self._input: Any = None
        self._queue: asyncio.Queue[np.ndarray] | None = None
        self._task: asyncio.Task[None] | None = None
        self._finals: list[RecognitionResult] = []
        self._partial = ""
        self._stopping = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    # ── Protocol ────────────────────────────────────────────────────

    def start(self, listener: StreamListener) -> None:
        if self.running:
            LOGGER.warning("Recognition stream already running; start ignored")
            return
        self._loop = asyncio.get_running_loop()
        self._listener = listener
        self._finals = []
        self._partial = ""
        self._stopping = False
        self._queue = asyncio.Queue(maxsize=DEFAULT_AUDIO_QUEUE_MAXSIZE)
        if self._endpointer is not None:
            self._endpointer.reset()
        try:
            self._recognizer = self._recognizer_factory()
            self._input = self._input_factory(self._audio_callback)
            self._input.start()
        except Exception as exc:
            LOGGER.error("Could not open audio input: %s", exc)
            self._input = None
            self._listener = None
            listener.handle_error(StreamError("audio-capture", str(exc)))
            return
        self._task = self._loop.create_task(self._processor())

    def stop(self) -> None:
        """Close the microphone; pending audio is decoded, then ``end`` fires."""
        self._stopping = True
        self._close_input()

    def abort(self) -> None:
        """Close the microphone and drop everything; no further events."""
        self._listener = None
        self._close_input()
        if self._task is not None:
            self._task.cancel()
            self._task = None

    # ── Audio thread ────────────────────────────────────────────────

    def _audio_callback(
        self,
        indata: np.ndarray,
        frames: int,
        time_info: Any,
        status: Any,
    ) -> None:
        """Sounddevice thread callback: hand the frame to the loop."""
        if self._loop is None:
            return
        data = indata.reshape(-1).copy()
        self._loop.call_soon_threadsafe(self._enqueue, data)

    def _enqueue(self, data: np.ndarray) -> None:
        if self._queue is not None and not self._queue.full():
            self._queue.put_nowait(data)

    # ── Loop side ───────────────────────────────────────────────────

    async def _processor(self) -> None:
        assert self._queue is not None
        try:
            while not (self._stopping and self._queue.empty()):
                try:
                    frame = await asyncio.wait_for(self._queue.get(), timeout=0.05)
                except asyncio.TimeoutError:
                    continue
                await self._accept(frame)
                if self._endpointer is not None and self._endpointer.process(frame):
                    LOGGER.debug("Silence after speech; ending session")
                    self.stop()
            await self._finish()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            LOGGER.exception("Speech recognition failed")
            self._close_input()
            self._emit_error(StreamError("recognition", str(exc)))

    async def _accept(self, frame: np.ndarray) -> None:
        accepted = await asyncio.to_thread(
            self._recognizer.AcceptWaveform, frame.tobytes()
        )
        if accepted:
            text = json.loads(self._recognizer.Result()).get("text", "")
            had_partial = bool(self._partial)
            self._partial = ""
            if text:
                self._finals.append(RecognitionResult(text, is_final=True))
                self._emit_result(len(self._finals) - 1)
            elif had_partial:
                self._emit_result(len(self._finals))
            return
        partial = json.loads(self._recognizer.PartialResult()).get("partial", "")
        if partial != self._partial:
            self._partial = partial
            self._emit_result(len(self._finals))

    async def _finish(self) -> None:
        text = json.loads(self._recognizer.FinalResult()).get("text", "")
        self._partial = ""
        if text:
            self._finals.append(RecognitionResult(text, is_final=True))
            self._emit_result(len(self._finals) - 1)
        listener, self._listener = self._listener, None
        if listener is not None:
            listener.handle_end()

    def _emit_result(self, index: int) -> None:
        if self._listener is None:
            return
        results = tuple(self._finals)
        if self._partial:
            results += (RecognitionResult(self._partial),)
        self._listener.handle_result(RecognitionEvent(index, results))

    def _emit_error(self, error: StreamError) -> None:
        listener, self._listener = self._listener, None
        if listener is not None:
            listener.handle_error(error)

    def _close_input(self) -> None:
        if self._input is None:
            return
        stream, self._input = self._input, None
        try:
            stream.stop()
            stream.close()
        except Exception as exc:
            LOGGER.warning("Error closing audio input: %s", exc)


def speech_backend_available() -> bool:
    """Feature-detect the speech stack (vosk, sounddevice and PortAudio)."""
    for name in ("vosk", "sounddevice"):
        try:
            importlib.import_module(name)
        except (ImportError, OSError) as exc:
            LOGGER.warning("Dictation disabled: %s unavailable (%s)", name, exc)
            return False
    return True


def create_stream(
    model_path: str | Path,
    *,
    sample_rate: int = DEFAULT_SAMPLE_RATE,
    device: int | None = None,
    vad_config: VadConfig | None = None,
) -> VoskRecognitionStream | None:
    """Build a microphone recognition stream, or None if dictation is unsupported."""
    path = Path(model_path).expanduser()
    if not speech_backend_available():
        return None
    if not path.is_dir():
        LOGGER.warning("Dictation disabled: no Vosk model at %s", path)
        return None

    import sounddevice as sd
    import vosk

    try:
        with suppress_output():
            model = vosk.Model(str(path))
    except Exception as exc:
        LOGGER.warning("Dictation disabled: could not load %s (%s)", path, exc)
        return None

    endpointer = SilenceEndpointer(vad_config) if vad_config is not None else None
    blocksize = vad_config.frame_samples if vad_config is not None else 0

    def make_input(callback: Callable[..., None]) -> Any:
        stream_kwargs: dict[str, Any] = {}
        if device is not None:
            stream_kwargs["device"] = device
        return sd.InputStream(
            samplerate=sample_rate,
            blocksize=blocksize,
            channels=1,
            dtype="int16",
            callback=callback,
            **stream_kwargs,
        )

    return VoskRecognitionStream(
        lambda: vosk.KaldiRecognizer(model, sample_rate),
        make_input,
        endpointer=endpointer,
    )
