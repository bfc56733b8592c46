"""Summary session state machine.

The session goes ``IDLE -> LOADING -> SUCCEEDED | FAILED`` and back to
``IDLE`` on reset. Transitions are computed by :func:`reduce`, a pure
function returning the new state plus the side effects to run. Every submit
and reset bumps ``generation``; a completion tagged with an older
generation is dropped, so a result arriving after a reset never
repopulates a cleared session.
"""

import asyncio
from dataclasses import dataclass, replace
from enum import Enum

from .core.logging import get_logger
from .summarizers.pipeline import SummaryPipeline, SummaryResult
from .summarizers.tones import DEFAULT_TONE, Tone

log = get_logger()


class Status(Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class SessionState:
    status: Status = Status.IDLE
    source_text: str = ""
    tone: Tone = DEFAULT_TONE
    summary: str | None = None
    error_message: str | None = None
    generation: int = 0

    @property
    def is_loading(self) -> bool:
        return self.status == Status.LOADING

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "source_text": self.source_text,
            "tone": self.tone.value,
            "summary": self.summary,
            "error_message": self.error_message,
            "is_loading": self.is_loading,
        }


# Events


@dataclass(frozen=True)
class Submit:
    text: str
    tone: Tone = DEFAULT_TONE


@dataclass(frozen=True)
class Completed:
    generation: int
    result: SummaryResult | None


@dataclass(frozen=True)
class Reset:
    pass


# Effects


@dataclass(frozen=True)
class InvokePipeline:
    generation: int
    text: str
    tone: Tone


@dataclass(frozen=True)
class NotifySuccess:
    text: str


@dataclass(frozen=True)
class NotifyFailure:
    message: str


@dataclass(frozen=True)
class StopSpeech:
    pass


Event = Submit | Completed | Reset
Effect = InvokePipeline | NotifySuccess | NotifyFailure | StopSpeech


def reduce(state: SessionState, event: Event) -> tuple[SessionState, list[Effect]]:
    """Apply ``event`` to ``state``.

    Returns:
        Tuple of (new state, effects the caller must run).
    """
    if isinstance(event, Submit):
        trimmed = event.text.strip()
        if not trimmed:
            return state, []
        generation = state.generation + 1
        new_state = SessionState(
            status=Status.LOADING,
            source_text=event.text,
            tone=event.tone,
            generation=generation,
        )
        return new_state, [InvokePipeline(generation, trimmed, event.tone)]

    if isinstance(event, Completed):
        if event.generation != state.generation or state.status != Status.LOADING:
            return state, []
        result = event.result
        if result is None:
            return replace(state, status=Status.IDLE), []
        if result.ok:
            return (
                replace(state, status=Status.SUCCEEDED, summary=result.text, error_message=None),
                [NotifySuccess(result.text)],
            )
        return (
            replace(state, status=Status.FAILED, summary=None, error_message=result.message),
            [NotifyFailure(result.message)],
        )

    if isinstance(event, Reset):
        return (
            SessionState(tone=state.tone, generation=state.generation + 1),
            [StopSpeech()],
        )

    raise TypeError(f"Unknown session event: {event!r}")


class SummarySession:
    """Owns one SessionState and runs the effects its transitions produce.

    Only one request is expected in flight; if a second submit arrives while
    the first is loading, the newest request wins and the older result is
    discarded.
    """

    def __init__(self, pipeline: SummaryPipeline, notifier=None, speech=None):
        self.pipeline = pipeline
        self.notifier = notifier
        self.speech = speech
        self._state = SessionState()

    @property
    def state(self) -> SessionState:
        return self._state

    async def submit(self, text: str, tone: Tone = DEFAULT_TONE) -> SessionState:
        """Summarize ``text`` and return the state once the request resolves."""
        effects = self._dispatch(Submit(text, tone))
        for effect in effects:
            if isinstance(effect, InvokePipeline):
                try:
                    result = await self.pipeline.summarize(effect.text, effect.tone)
                except asyncio.CancelledError:
                    log.debug(f"Request for generation {effect.generation} cancelled")
                    self._dispatch(Completed(effect.generation, None))
                    raise
                self._run(self._dispatch(Completed(effect.generation, result)))
        return self._state

    def reset(self) -> SessionState:
        """Return to idle, clearing text and result."""
        self._run(self._dispatch(Reset()))
        return self._state

    def _dispatch(self, event: Event) -> list[Effect]:
        previous = self._state
        self._state, effects = reduce(previous, event)
        if self._state is previous and isinstance(event, Completed):
            log.debug(f"Discarding stale result for generation {event.generation}")
        elif self._state.status != previous.status:
            log.debug(f"Session {previous.status.value} -> {self._state.status.value}")
        return effects

    def _run(self, effects: list[Effect]) -> None:
        for effect in effects:
            if isinstance(effect, NotifySuccess):
                if self.notifier is not None:
                    self.notifier.notify_success()
            elif isinstance(effect, NotifyFailure):
                if self.notifier is not None:
                    self.notifier.notify_failure(effect.message)
            elif isinstance(effect, StopSpeech):
                if self.speech is not None:
                    self.speech.stop()
