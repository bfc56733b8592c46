"""Kokoro-82M backend for reading summaries aloud."""

import asyncio
import time
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from ..config import TTSConfig
from ..core.context import sanitize_for_log
from ..core.logging import get_logger
from .base import TTSInterface, clean_for_speech

log = get_logger()


class KokoroTTS(TTSInterface):
    """Speaks cleaned summary text with Kokoro.

    The model runs on a single worker thread; loading and synthesis never
    block the event loop.
    """

    SAMPLE_RATE = 24000
    REPO_ID = "hexgrad/Kokoro-82M"

    def __init__(self, config: TTSConfig):
        self.config = config
        self.pipeline = None
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="kokoro")

    async def initialize(self) -> None:
        if self.pipeline is not None:
            return
        log.debug(f"Loading Kokoro model (lang={self.config.kokoro_lang})")

        def load_model():
            from kokoro import KPipeline
            return KPipeline(lang_code=self.config.kokoro_lang, repo_id=self.REPO_ID)

        self.pipeline = await asyncio.get_running_loop().run_in_executor(self._executor, load_model)

    def _render(self, text: str) -> np.ndarray | None:
        segments = []
        for _, _, audio in self.pipeline(text, voice=self.config.kokoro_voice, speed=self.config.kokoro_speed):
            if audio is None:
                continue
            # Kokoro yields torch tensors; soundfile needs numpy
            segments.append(np.asarray(audio, dtype=np.float32).reshape(-1))
        if not segments:
            return None
        return np.concatenate(segments)

    async def synthesize(self, text: str) -> np.ndarray | None:
        """Speak a summary, dropping markdown symbols first.

        Returns:
            Float32 audio, or None if there was nothing to say or Kokoro failed.
        """
        if self.pipeline is None:
            log.error("Kokoro pipeline not initialized")
            return None

        spoken = clean_for_speech(text)
        if not spoken:
            return None
        log.trace(f"Speaking: {sanitize_for_log(spoken)}")

        start = time.perf_counter()
        try:
            audio = await asyncio.get_running_loop().run_in_executor(self._executor, self._render, spoken)
        except Exception as e:
            log.error(f"Kokoro synthesis failed: {e}")
            return None
        log.trace(f"Kokoro synthesis: {time.perf_counter() - start:.3f}s")
        return audio

    def get_sample_rate(self) -> int:
        return self.SAMPLE_RATE

    async def cleanup(self) -> None:
        self._executor.shutdown(wait=False)
        self.pipeline = None
