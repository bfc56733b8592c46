"""TTS backend interface and text preparation for spoken summaries."""

import re
from abc import ABC, abstractmethod

import numpy as np

_FENCE = re.compile(r"^[ \t]*(```|~~~).*$", re.MULTILINE)
_HEADING = re.compile(r"^[ \t]{0,3}#{1,6}[ \t]+(.*?)[ \t]*#*[ \t]*$", re.MULTILINE)
_BULLET = re.compile(r"^[ \t]*(?:[-*+•]|\d+[.)])[ \t]+", re.MULTILINE)
_LINK = re.compile(r"\[([^\]]+)\]\([^)]*\)")
_EMPHASIS = re.compile(r"(\*\*|__|\*|`)(?=\S)(.+?)(?<=\S)\1")
_SENTENCE_END = re.compile(r"[.!?:;]$")


def clean_for_speech(text: str) -> str:
    """Turn markdown-ish summary text into plain sentences for a TTS engine.

    Headings, bullets and numbered items become separate sentences, and
    emphasis, inline code and link markup are dropped so the engine does not
    read the symbols aloud.

    Args:
        text: Summary text as returned by the model.

    Returns:
        Plain text, one sentence per non-empty line, joined by spaces.
    """
    text = _FENCE.sub("", text)
    text = _HEADING.sub(r"\1", text)
    text = _BULLET.sub("", text)
    text = _LINK.sub(r"\1", text)
    text = _EMPHASIS.sub(r"\2", text)

    sentences = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        if not _SENTENCE_END.search(line):
            line += "."
        sentences.append(line)
    return " ".join(sentences)


class TTSInterface(ABC):
    """Abstract base class for text-to-speech backends."""

    @abstractmethod
    async def initialize(self) -> None:
        """Load models. Called once before the first synthesis."""
        pass

    @abstractmethod
    async def synthesize(self, text: str) -> np.ndarray | None:
        """Synthesize speech for a summary.

        Args:
            text: Summary text; backends clean markdown before speaking it.

        Returns:
            Mono float32 audio, or None if synthesis failed.
        """
        pass

    @abstractmethod
    def get_sample_rate(self) -> int:
        pass

    @abstractmethod
    async def cleanup(self) -> None:
        pass
