"""Sound feedback for finished and failed summaries."""

from ..config import FeedbackConfig
from .logging import get_logger
from .playback import play_sound_async
from .sounds import SoundManager

log = get_logger()


class NullNotifier:
    """Notifier that does nothing."""

    def notify_success(self) -> None:
        pass

    def notify_failure(self, message: str) -> None:
        pass

    def cleanup(self) -> None:
        pass


class FeedbackNotifier:
    """Plays a chime on success and a soft tone on failure.

    Sound files are generated lazily on first use. Playback problems are
    logged and never raised to the caller.
    """

    def __init__(self, config: FeedbackConfig, sounds: SoundManager | None = None, play=play_sound_async):
        self.config = config
        self.sounds = sounds or SoundManager(config.sample_rate)
        self._play = play

    def _ensure_sounds(self) -> bool:
        if self.sounds.success_file is not None:
            return True
        try:
            self.sounds.init_sounds()
        except (OSError, RuntimeError) as e:
            log.warning(f"Could not generate feedback sounds: {e}")
            return False
        return True

    def notify_success(self) -> None:
        if not (self.config.enabled and self.config.success_sound):
            return
        if self._ensure_sounds():
            log.debug("Playing success chime")
            self._play(self.sounds.success_file)

    def notify_failure(self, message: str) -> None:
        log.debug(f"Summary failure: {message}")
        if not (self.config.enabled and self.config.failure_sound):
            return
        if self._ensure_sounds():
            log.debug("Playing failure tone")
            self._play(self.sounds.failure_file)

    def cleanup(self) -> None:
        self.sounds.cleanup()


def create_notifier(config: FeedbackConfig) -> "FeedbackNotifier | NullNotifier":
    if not config.enabled:
        return NullNotifier()
    return FeedbackNotifier(config)
