"""Reading summaries aloud."""

import os
from pathlib import Path

from ..config import TTSConfig
from ..core.logging import get_logger
from ..core.playback import AudioPlayer
from ..core.sounds import save_audio
from .base import TTSInterface

log = get_logger()


class SpeechService:
    """Speaks summary text through a TTS backend and an audio player.

    Starting a new reading stops the current one. A stop that arrives while a
    reading is still being synthesized cancels that reading.
    """

    def __init__(self, tts: TTSInterface, player: AudioPlayer | None = None):
        self.tts = tts
        self.player = player or AudioPlayer()
        self._initialized = False
        self._audio_file: Path | None = None
        # Bumped by every stop; a read whose token changed while it was
        # awaiting must not start playback.
        self._read_token = 0

    @property
    def is_speaking(self) -> bool:
        speaking = self.player.is_playing()
        if not speaking:
            self._discard(self.player.check_finished())
        return speaking

    async def read(self, text: str) -> bool:
        """Speak ``text``.

        Returns:
            True if playback started, False otherwise.
        """
        text = text.strip()
        if not text:
            return False

        self.stop()
        token = self._read_token

        if not self._initialized:
            await self.tts.initialize()
            self._initialized = True
            if token != self._read_token:
                log.debug("Reading stopped during TTS initialization")
                return False

        audio = await self.tts.synthesize(text)
        if token != self._read_token:
            log.debug("Reading stopped during synthesis")
            return False
        if audio is None or len(audio) == 0:
            log.warning("Speech synthesis produced no audio")
            return False

        try:
            audio_file = save_audio(audio, self.tts.get_sample_rate())
        except (OSError, RuntimeError) as e:
            log.error(f"Failed to write speech audio: {e}")
            return False

        if not self.player.play(audio_file):
            log.warning("No audio player available")
            self._discard(audio_file)
            return False

        self._audio_file = audio_file
        return True

    def stop(self) -> None:
        """Stop speaking immediately, including a reading still being synthesized."""
        self._read_token += 1
        self._discard(self.player.stop())
        self._discard(self._audio_file)
        self._audio_file = None

    async def cleanup(self) -> None:
        self.stop()
        await self.tts.cleanup()

    def _discard(self, audio_file: Path | None) -> None:
        if audio_file and audio_file.exists():
            try:
                os.unlink(audio_file)
            except OSError:
                pass


def create_speech_service(config: TTSConfig) -> SpeechService:
    """Create the speech service for the configured TTS backend.

    Raises:
        ValueError: If the backend name is unknown.
    """
    if config.backend == "kokoro":
        from .kokoro import KokoroTTS

        return SpeechService(KokoroTTS(config))
    raise ValueError(f"Unknown TTS backend: {config.backend!r}")
