"""Backend selection."""

from ..config import SummarizerConfig
from .base import GenerationBackend


def create_backend(config: SummarizerConfig) -> GenerationBackend:
    """Create the generation backend named by ``config.backend``.

    Raises:
        ValueError: If the backend name is unknown.
    """
    if config.backend == "groq":
        from .groq import GroqSummarizer

        return GroqSummarizer(config)
    if config.backend == "ollama":
        from .ollama import OllamaSummarizer

        return OllamaSummarizer(config)
    raise ValueError(f"Unknown summarizer backend: {config.backend!r} (expected 'groq' or 'ollama')")
