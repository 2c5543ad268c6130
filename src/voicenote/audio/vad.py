"""Silence end-pointing for dictation sessions using WebRTC VAD.

A session is considered finished once speech has been heard and is then
followed by a configurable stretch of continuous silence.
"""

import math
from dataclasses import dataclass

import numpy as np
import webrtcvad

from voicenote.core.constants import (
    DEFAULT_SAMPLE_RATE,
    DEFAULT_VAD_FRAME_MS,
    DEFAULT_VAD_MODE,
    DEFAULT_VAD_SILENCE_MS,
)


@dataclass(frozen=True, slots=True)
class VadConfig:
    """Immutable end-pointing configuration."""

    frame_ms: int = DEFAULT_VAD_FRAME_MS
    mode: int = DEFAULT_VAD_MODE
    silence_ms: int = DEFAULT_VAD_SILENCE_MS
    sample_rate: int = DEFAULT_SAMPLE_RATE

    def __post_init__(self) -> None:
        if self.frame_ms not in (10, 20, 30):
            raise ValueError("frame_ms must be one of: 10, 20, 30")
        if not (0 <= self.mode <= 3):
            raise ValueError("mode must be between 0 and 3")
        if self.sample_rate not in (8_000, 16_000, 32_000, 48_000):
            raise ValueError("sample_rate must be 8000, 16000, 32000 or 48000")

    @property
    def frame_samples(self) -> int:
        return int(self.sample_rate * self.frame_ms / 1000)


class SilenceEndpointer:
    """Feeds int16 audio through WebRTC VAD and reports end of speech."""

    __slots__ = (
        "_vad",
        "_config",
        "_silence_frames_needed",
        "_pending",
        "_heard_speech",
        "_silent_frames",
    )

    def __init__(self, config: VadConfig, vad: object | None = None) -> None:
        self._config = config
        self._vad = vad if vad is not None else webrtcvad.Vad(config.mode)
        self._silence_frames_needed = int(
            math.ceil(config.silence_ms / config.frame_ms)
        )
        self._pending = np.array([], dtype=np.int16)
        self._heard_speech = False
        self._silent_frames = 0

    @property
    def heard_speech(self) -> bool:
        return self._heard_speech

    def process(self, frame: np.ndarray) -> bool:
        """Consume *frame*; True once speech has been followed by silence."""
        if frame.size == 0:
            return False
        self._pending = np.concatenate([self._pending, frame.astype(np.int16)])
        size = self._config.frame_samples
        while self._pending.size >= size:
            chunk, self._pending = self._pending[:size], self._pending[size:]
            if self._vad.is_speech(chunk.tobytes(), self._config.sample_rate):
                self._heard_speech = True
                self._silent_frames = 0
            elif self._heard_speech:
                self._silent_frames += 1
                if self._silent_frames >= self._silence_frames_needed:
                    self.reset()
                    return True
        return False

    def reset(self) -> None:
        self._pending = np.array([], dtype=np.int16)
        self._heard_speech = False
        self._silent_frames = 0
