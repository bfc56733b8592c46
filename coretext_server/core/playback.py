"""Audio playback through the platform's command-line player."""

import shutil
import subprocess
import sys
from pathlib import Path

from .logging import get_logger

log = get_logger()


def get_player() -> list[str] | None:
    """Get audio player command for this platform.

    Returns:
        List of command arguments for the audio player, or None if not found.
    """
    if sys.platform == "darwin":
        return ["afplay"]

    for player in [["mpv", "--no-terminal"], ["paplay"], ["aplay", "-q"]]:
        if shutil.which(player[0]):
            return player
    return None


def play_sound_async(audio_file: Path | str | None) -> subprocess.Popen | None:
    """Play sound without blocking (fire-and-forget).

    Args:
        audio_file: Path to the audio file to play.

    Returns:
        The subprocess, or None if playback failed.
    """
    player = get_player()
    if not player or not audio_file:
        return None
    try:
        return subprocess.Popen(
            player + [str(audio_file)],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as e:
        log.warning(f"Failed to play {audio_file}: {e}")
        return None


class AudioPlayer:
    """Plays one audio file at a time and can stop it."""

    def __init__(self):
        self.current_process: subprocess.Popen | None = None
        self._current_audio_file: Path | None = None

    def is_playing(self) -> bool:
        """Check if audio is currently playing."""
        return self.current_process is not None and self.current_process.poll() is None

    def play(self, audio_file: Path) -> bool:
        """Start playing an audio file, stopping anything already playing.

        Args:
            audio_file: Path to the audio file.

        Returns:
            True if playback started, False otherwise.
        """
        self.stop()
        process = play_sound_async(audio_file)
        if process is None:
            return False

        self.current_process = process
        self._current_audio_file = audio_file
        return True

    def stop(self) -> Path | None:
        """Stop currently playing audio.

        Returns:
            Path to the audio file that was playing, for cleanup.
        """
        audio_file = self._current_audio_file

        if self.current_process and self.current_process.poll() is None:
            self.current_process.terminate()
            try:
                self.current_process.wait(timeout=0.1)
            except subprocess.TimeoutExpired:
                self.current_process.kill()

        self.current_process = None
        self._current_audio_file = None

        return audio_file

    def check_finished(self) -> Path | None:
        """Check if playback finished and return the file for cleanup.

        Returns:
            Path to the finished audio file if playback ended, None otherwise.
        """
        if self.current_process and self.current_process.poll() is not None:
            audio_file = self._current_audio_file
            self.current_process = None
            self._current_audio_file = None
            return audio_file
        return None
