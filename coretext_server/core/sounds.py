"""Feedback tones played when a summary completes or fails."""

import os
import tempfile
from pathlib import Path

import numpy as np
import soundfile as sf


def _make_note(freq: float, duration: float, sample_rate: int, amplitude: float = 0.25) -> np.ndarray:
    t = np.linspace(0, duration, int(sample_rate * duration), False)
    # Fundamental + harmonics
    note = amplitude * np.sin(2 * np.pi * freq * t)
    note += amplitude * 0.3 * np.sin(2 * np.pi * freq * 2 * t)
    note += amplitude * 0.1 * np.sin(2 * np.pi * freq * 3 * t)
    envelope = np.exp(-t * 6)
    attack = max(int(len(t) * 0.05), 1)
    envelope[:attack] *= np.linspace(0, 1, attack)
    return note * envelope


def _fade_out(audio: np.ndarray, sample_rate: int, seconds: float) -> np.ndarray:
    fade = min(int(sample_rate * seconds), len(audio))
    if fade > 0:
        audio[-fade:] *= np.linspace(1, 0, fade)
    return audio


def generate_success_chime(sample_rate: int = 24000) -> np.ndarray:
    """Generate a rising three-note arpeggio (C5 -> E5 -> G5).

    Returns:
        Audio as float32 numpy array.
    """
    gap = np.zeros(int(sample_rate * 0.02))
    notes = [_make_note(freq, 0.09, sample_rate) for freq in (523, 659, 784)]
    chime = np.concatenate([notes[0], gap, notes[1], gap, notes[2]])
    return _fade_out(chime, sample_rate, 0.03).astype(np.float32)


def generate_failure_tone(sample_rate: int = 24000) -> np.ndarray:
    """Generate a soft falling two-note tone (E4 -> C4).

    Returns:
        Audio as float32 numpy array.
    """
    gap = np.zeros(int(sample_rate * 0.04))
    high = _make_note(330, 0.12, sample_rate, amplitude=0.22)
    low = _make_note(262, 0.18, sample_rate, amplitude=0.22)
    tone = np.concatenate([high, gap, low])
    return _fade_out(tone, sample_rate, 0.04).astype(np.float32)


def save_audio(audio: np.ndarray, sample_rate: int = 24000) -> Path:
    """Save audio to a temporary WAV file.

    Args:
        audio: Audio data as numpy array.
        sample_rate: Sample rate in Hz.

    Returns:
        Path to the temporary file.
    """
    with tempfile.NamedTemporaryFile(suffix=".wav", delete=False) as f:
        path = Path(f.name)
    sf.write(path, audio, sample_rate)
    return path


class SoundManager:
    """Owns the generated feedback sound files."""

    def __init__(self, sample_rate: int = 24000):
        self.sample_rate = sample_rate
        self.success_file: Path | None = None
        self.failure_file: Path | None = None

    def init_sounds(self) -> None:
        """Generate and save sound effect files."""
        self.success_file = save_audio(generate_success_chime(self.sample_rate), self.sample_rate)
        self.failure_file = save_audio(generate_failure_tone(self.sample_rate), self.sample_rate)

    def cleanup(self) -> None:
        """Delete sound effect files."""
        for f in [self.success_file, self.failure_file]:
            if f and f.exists():
                try:
                    os.unlink(f)
                except OSError:
                    pass
        self.success_file = None
        self.failure_file = None
