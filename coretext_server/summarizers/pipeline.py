"""Summarization request pipeline.

Turns (source text, tone) into a single backend call and converts whatever
happens into a :class:`SummaryResult`. Backend failures never escape
:meth:`SummaryPipeline.summarize`.
"""

import time
from dataclasses import dataclass
from enum import Enum, auto

from ..core.context import request_context, sanitize_for_log
from ..core.logging import get_logger
from .base import GenerationBackend, GenerationError, GenerationErrorKind
from .prompts import build_prompt
from .tones import Tone

log = get_logger()

GUARDRAIL_MESSAGE = "The model blocked this text due to safety rules."
ASSETS_UNAVAILABLE_MESSAGE = "The model assets aren't available on this device."
GENERATION_FAILED_MESSAGE = "The model couldn't generate a summary."


class ErrorKind(Enum):
    """User-facing failure categories."""

    EMPTY_INPUT = auto()  # Guarded, never reported as a result
    GUARDRAIL_VIOLATION = auto()
    ASSETS_UNAVAILABLE = auto()
    GENERATION_FAILED = auto()
    TRANSPORT_OR_UNKNOWN = auto()


@dataclass(frozen=True)
class SummaryRequest:
    """A validated summarization request."""

    source_text: str
    tone: Tone


@dataclass(frozen=True)
class SummaryResult:
    """Outcome of one request: either ``text`` or ``error_kind`` + ``message``."""

    text: str | None = None
    error_kind: ErrorKind | None = None
    message: str | None = None
    model_used: str | None = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, text: str, model_used: str | None = None) -> "SummaryResult":
        return cls(text=text, model_used=model_used)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "SummaryResult":
        return cls(error_kind=kind, message=message)


def make_request(source_text: str, tone: Tone) -> SummaryRequest | None:
    """Trim the source text; return None when nothing is left."""
    trimmed = source_text.strip()
    if not trimmed:
        return None
    return SummaryRequest(source_text=trimmed, tone=tone)


def result_for_error(error: Exception) -> SummaryResult:
    """Map a backend failure to a user-facing result."""
    if isinstance(error, GenerationError):
        if error.kind == GenerationErrorKind.GUARDRAIL_VIOLATION:
            return SummaryResult.failure(ErrorKind.GUARDRAIL_VIOLATION, GUARDRAIL_MESSAGE)
        if error.kind == GenerationErrorKind.ASSETS_UNAVAILABLE:
            return SummaryResult.failure(ErrorKind.ASSETS_UNAVAILABLE, ASSETS_UNAVAILABLE_MESSAGE)
        return SummaryResult.failure(ErrorKind.GENERATION_FAILED, GENERATION_FAILED_MESSAGE)
    return SummaryResult.failure(
        ErrorKind.TRANSPORT_OR_UNKNOWN,
        f"Failed to summarize: {error}",
    )


class SummaryPipeline:
    """Runs one summarization request against a generation backend."""

    def __init__(self, backend: GenerationBackend):
        self.backend = backend

    async def summarize(self, source_text: str, tone: Tone) -> SummaryResult | None:
        """Summarize ``source_text`` in the given tone.

        Whitespace-only input is ignored: no backend call is made and None
        is returned.

        Args:
            source_text: Raw user text.
            tone: Summary style.

        Returns:
            SummaryResult, or None if the input was empty.
        """
        request = make_request(source_text, tone)
        if request is None:
            log.debug("Ignoring empty summary request")
            return None

        with request_context():
            return await self._run(request)

    async def _run(self, request: SummaryRequest) -> SummaryResult:
        prompt = build_prompt(request.source_text, request.tone)
        log.info(
            f"Summarizing {len(request.source_text)} chars, tone={request.tone.value}: "
            f"{sanitize_for_log(request.source_text)}"
        )
        log.trace(f"Prompt: {sanitize_for_log(prompt, max_len=200)}")

        start = time.perf_counter()
        try:
            generated = await self.backend.generate(prompt, tone=request.tone)
        except Exception as e:
            elapsed = time.perf_counter() - start
            result = result_for_error(e)
            log.warning(f"Summary failed after {elapsed:.2f}s ({result.error_kind.name}): {e}")
            return result

        elapsed = time.perf_counter() - start
        log.info(
            f"Summary ready in {elapsed:.2f}s: model={generated.model_used} "
            f"tokens={generated.tokens_used}"
        )
        return SummaryResult.success(generated.text, model_used=generated.model_used)
