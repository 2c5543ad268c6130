"""Terminal dictation loop: microphone → controller → notes file.

DictationRunner wires the shared dictionary, the Vosk stream and a
TerminalHost around one DictationController, keeps dictation sessions
running back to back until Ctrl+C, then corrects the whole document and
appends it to the notes file.
"""

import asyncio
import signal
from pathlib import Path

from rich.console import Console
from rich.live import Live

from voicenote.apps.config import VoicenoteConfig
from voicenote.apps.host import TerminalHost
from voicenote.apps.notes import append_note
from voicenote.apps.ui import UiState, render_layout
from voicenote.audio.stream import create_stream
from voicenote.audio.vad import VadConfig
from voicenote.core.constants import DEFAULT_STOP_TIMEOUT
from voicenote.core.controller import DictationController
from voicenote.core.dictionary import shared_dictionary
from voicenote.core.env import LOGGER
from voicenote.core.text import TextCorrectionEngine
from voicenote.core.types import NotificationKind


class DictationRunner:
    """Async orchestrator for a terminal dictation session."""

    def __init__(
        self,
        config: VoicenoteConfig,
        notes_path: Path,
        *,
        ignore: tuple[str, ...] = (),
        no_ui: bool = False,
    ) -> None:
        self.config = config
        self.notes_path = notes_path
        self.ignore = config.dictionary.ignore + ignore
        self.no_ui = no_ui
        self.ui_state = UiState(
            language=config.speech.language,
            locale=config.dictionary.locale,
        )
        self.host = TerminalHost(self.ui_state)
        self.console_ui = Console(stderr=True)
        self.live: Live | None = None

    def _update_ui(self, controller: DictationController) -> None:
        self.ui_state.preview = controller.preview
        if self.live:
            self.live.update(render_layout(self.ui_state))

    def _failed(self) -> bool:
        return any(
            n.kind in (NotificationKind.ERROR, NotificationKind.DICTATION_UNAVAILABLE)
            for n in self.ui_state.notifications
        )

    async def run(self) -> int:
        loop = asyncio.get_running_loop()
        dict_cfg = self.config.dictionary
        dictionary = shared_dictionary(
            dict_cfg.locale,
            path=dict_cfg.path,
            max_edit_distance=dict_cfg.max_edit_distance,
        )
        for word in self.ignore:
            dictionary.add_to_ignore(word)
        # Dictation may start before the dictionary is ready; corrections
        # pass text through until then.
        init_task = asyncio.create_task(dictionary.initialize())

        speech = self.config.speech
        vad_config = (
            VadConfig(
                frame_ms=speech.vad_frame_ms,
                mode=speech.vad_mode,
                silence_ms=speech.vad_silence_ms,
                sample_rate=speech.sample_rate,
            )
            if speech.auto_end
            else None
        )
        self.ui_state.status = "Loading speech model"
        stream = await asyncio.to_thread(
            create_stream,
            speech.model,
            sample_rate=speech.sample_rate,
            device=speech.device,
            vad_config=vad_config,
        )

        controller = DictationController(
            TextCorrectionEngine(dictionary),
            self.host,
            scheduler=loop,
            stream=stream,
            min_typed_word_length=self.config.editor.min_typed_word_length,
            cooldown_seconds=self.config.editor.cooldown_seconds,
        )
        if not controller.dictation_available:
            controller.on_dictation_toggle()
            await init_task
            return 1

        stop_event = asyncio.Event()

        def signal_handler() -> None:
            if not stop_event.is_set():
                LOGGER.debug("Stopping...")
                stop_event.set()

        signal_handler_installed = False
        try:
            loop.add_signal_handler(signal.SIGINT, signal_handler)
            signal_handler_installed = True
        except NotImplementedError:
            signal_handler_installed = False

        if not self.no_ui:
            self.live = Live(
                render_layout(self.ui_state),
                console=self.console_ui,
                refresh_per_second=10,
            )
            self.live.start()
        else:
            LOGGER.info("Listening... (Ctrl+C to stop)")

        try:
            while not stop_event.is_set() and not self._failed():
                if not controller.recording and not stream.running:
                    controller.on_dictation_toggle()
                self.ui_state.dictionary_ready = dictionary.is_ready()
                self._update_ui(controller)
                try:
                    await asyncio.wait_for(stop_event.wait(), timeout=0.1)
                except asyncio.TimeoutError:
                    pass

            if controller.recording:
                controller.on_dictation_toggle()
            try:
                async with asyncio.timeout(DEFAULT_STOP_TIMEOUT):
                    while stream.running:
                        self._update_ui(controller)
                        await asyncio.sleep(0.05)
            except TimeoutError:
                LOGGER.warning("Speech stream did not finish; discarding it")

            await init_task
            self.ui_state.dictionary_ready = dictionary.is_ready()
            text = controller.commit_document()
            self._update_ui(controller)
        finally:
            controller.dispose()
            if signal_handler_installed:
                loop.remove_signal_handler(signal.SIGINT)
            if self.live:
                self.live.stop()

        if append_note(self.notes_path, text):
            self.console_ui.print(f"[green]Saved note to {self.notes_path}[/green]")
        return 1 if self._failed() else 0
