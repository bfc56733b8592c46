"""Abstract base class for generation backends and their error taxonomy."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto

from .tones import Tone


class GenerationErrorKind(Enum):
    """Failure categories a backend can report."""

    GUARDRAIL_VIOLATION = auto()  # Refused for safety reasons
    ASSETS_UNAVAILABLE = auto()  # Model missing or not downloaded
    OTHER = auto()


class GenerationError(Exception):
    """Categorized failure reported by a generation backend."""

    kind = GenerationErrorKind.OTHER

    def __init__(self, description: str, kind: GenerationErrorKind | None = None):
        super().__init__(description)
        self.description = description
        if kind is not None:
            self.kind = kind


class GuardrailViolation(GenerationError):
    """The backend refused the content due to its safety policy."""

    kind = GenerationErrorKind.GUARDRAIL_VIOLATION


class AssetsUnavailable(GenerationError):
    """The backend's model is not available."""

    kind = GenerationErrorKind.ASSETS_UNAVAILABLE


@dataclass
class GenerationResult:
    """Text produced by a backend."""

    text: str
    model_used: str
    tokens_used: int | None = None


class GenerationBackend(ABC):
    """Abstract base class for text-generation backends."""

    @abstractmethod
    async def generate(self, prompt: str, *, tone: Tone | None = None) -> GenerationResult:
        """Generate text for a prompt.

        Args:
            prompt: The full per-request prompt.
            tone: The tone the prompt was built for, used to pick sampling
                parameters.

        Returns:
            GenerationResult with the generated text.

        Raises:
            GenerationError: For failures the backend can categorize.
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the backend is available."""
        pass

    async def close(self) -> None:
        """Release backend resources."""
        pass
