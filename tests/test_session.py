"""Tests for the session state machine."""

import asyncio

import pytest

from coretext_server.session import (
    Completed,
    InvokePipeline,
    NotifyFailure,
    NotifySuccess,
    Reset,
    SessionState,
    Status,
    StopSpeech,
    Submit,
    SummarySession,
    reduce,
)
from coretext_server.summarizers.base import GenerationResult
from coretext_server.summarizers.pipeline import ErrorKind, SummaryResult
from coretext_server.summarizers.tones import Tone


def loading_state(generation: int = 1) -> SessionState:
    return SessionState(status=Status.LOADING, source_text="Hello", tone=Tone.CONCISE, generation=generation)


class TestReduce:
    """Tests for the pure transition function."""

    def test_initial_state(self):
        state = SessionState()
        assert state.status == Status.IDLE
        assert state.summary is None
        assert state.error_message is None
        assert not state.is_loading

    @pytest.mark.parametrize(
        "start",
        [
            SessionState(),
            SessionState(status=Status.SUCCEEDED, summary="old", generation=3),
            SessionState(status=Status.FAILED, error_message="old", generation=3),
        ],
    )
    def test_submit_enters_loading(self, start):
        state, effects = reduce(start, Submit("  Hello world ", Tone.CONCISE))

        assert state.status == Status.LOADING
        assert state.is_loading
        assert state.summary is None
        assert state.error_message is None
        assert state.generation == start.generation + 1
        assert effects == [InvokePipeline(state.generation, "Hello world", Tone.CONCISE)]

    def test_submit_empty_is_ignored(self):
        start = SessionState()
        state, effects = reduce(start, Submit("   "))

        assert state is start
        assert effects == []

    def test_success(self):
        result = SummaryResult.success("Short summary.")
        state, effects = reduce(loading_state(), Completed(1, result))

        assert state.status == Status.SUCCEEDED
        assert state.summary == "Short summary."
        assert effects == [NotifySuccess("Short summary.")]

    def test_failure(self):
        result = SummaryResult.failure(ErrorKind.GENERATION_FAILED, "nope")
        state, effects = reduce(loading_state(), Completed(1, result))

        assert state.status == Status.FAILED
        assert state.error_message == "nope"
        assert state.summary is None
        assert effects == [NotifyFailure("nope")]

    def test_stale_completion_is_discarded(self):
        start = loading_state(generation=2)
        state, effects = reduce(start, Completed(1, SummaryResult.success("late")))

        assert state is start
        assert effects == []

    def test_completion_after_reset_is_discarded(self):
        state, _ = reduce(loading_state(), Reset())
        after, effects = reduce(state, Completed(1, SummaryResult.success("late")))

        assert after.status == Status.IDLE
        assert after.summary is None
        assert effects == []

    def test_reset_clears_everything(self):
        start = SessionState(status=Status.SUCCEEDED, source_text="Hello", summary="s", generation=4)
        state, effects = reduce(start, Reset())

        assert state.status == Status.IDLE
        assert state.source_text == ""
        assert state.summary is None
        assert state.error_message is None
        assert effects == [StopSpeech()]

    def test_reset_twice(self):
        once, _ = reduce(SessionState(status=Status.FAILED, error_message="x"), Reset())
        twice, effects = reduce(once, Reset())

        assert once.status == twice.status == Status.IDLE
        assert once.to_dict() == twice.to_dict()
        assert not any(isinstance(effect, InvokePipeline) for effect in effects)

    def test_unknown_event(self):
        with pytest.raises(TypeError):
            reduce(SessionState(), object())


class TestSummarySession:
    """Tests for the session controller."""

    @pytest.mark.asyncio
    async def test_success_scenario(self, pipeline, mock_backend, mock_notifier):
        mock_backend.generate.return_value = GenerationResult(text="Short summary.", model_used="m")
        session = SummarySession(pipeline, notifier=mock_notifier)

        state = await session.submit("Hello world", Tone.CONCISE)

        assert state.status == Status.SUCCEEDED
        assert state.summary == "Short summary."
        assert state.tone is Tone.CONCISE
        mock_notifier.notify_success.assert_called_once()
        mock_notifier.notify_failure.assert_not_called()

    @pytest.mark.asyncio
    async def test_whitespace_scenario(self, pipeline, mock_backend, mock_notifier):
        session = SummarySession(pipeline, notifier=mock_notifier)

        state = await session.submit("   ", Tone.BALANCED)

        assert state.status == Status.IDLE
        mock_backend.generate.assert_not_awaited()
        mock_notifier.notify_success.assert_not_called()

    @pytest.mark.asyncio
    async def test_timeout_scenario(self, pipeline, mock_backend, mock_notifier):
        mock_backend.generate.side_effect = TimeoutError("timeout")
        session = SummarySession(pipeline, notifier=mock_notifier)

        state = await session.submit("Hello")

        assert state.status == Status.FAILED
        assert "timeout" in state.error_message
        mock_notifier.notify_failure.assert_called_once_with(state.error_message)

    @pytest.mark.asyncio
    async def test_loading_while_in_flight(self, pipeline, mock_backend):
        release = asyncio.Event()

        async def slow_generate(prompt, *, tone=None):
            await release.wait()
            return GenerationResult(text="done", model_used="m")

        mock_backend.generate.side_effect = slow_generate
        session = SummarySession(pipeline)

        task = asyncio.create_task(session.submit("Hello"))
        await asyncio.sleep(0)
        assert session.state.is_loading

        release.set()
        state = await task
        assert state.status == Status.SUCCEEDED

    @pytest.mark.asyncio
    async def test_reset_discards_late_result(self, pipeline, mock_backend, mock_notifier, mock_speech):
        release = asyncio.Event()

        async def slow_generate(prompt, *, tone=None):
            await release.wait()
            return GenerationResult(text="late summary", model_used="m")

        mock_backend.generate.side_effect = slow_generate
        session = SummarySession(pipeline, notifier=mock_notifier, speech=mock_speech)

        task = asyncio.create_task(session.submit("Hello"))
        await asyncio.sleep(0)
        assert session.state.is_loading

        session.reset()
        release.set()
        state = await task

        assert state.status == Status.IDLE
        assert state.summary is None
        assert state.source_text == ""
        mock_notifier.notify_success.assert_not_called()
        mock_speech.stop.assert_called_once()

    @pytest.mark.asyncio
    async def test_cancelled_submit_returns_to_idle(self, pipeline, mock_backend, mock_notifier):
        async def hanging_generate(prompt, *, tone=None):
            await asyncio.Event().wait()

        mock_backend.generate.side_effect = hanging_generate
        session = SummarySession(pipeline, notifier=mock_notifier)

        task = asyncio.create_task(session.submit("Hello"))
        await asyncio.sleep(0)
        assert session.state.is_loading

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert session.state.status == Status.IDLE
        assert not session.state.is_loading
        mock_notifier.notify_success.assert_not_called()
        mock_notifier.notify_failure.assert_not_called()

    @pytest.mark.asyncio
    async def test_cancelled_stale_submit_keeps_newer_result(self, pipeline, mock_backend):
        calls = []

        async def generate(prompt, *, tone=None):
            calls.append(prompt)
            if len(calls) == 1:
                await asyncio.Event().wait()
            return GenerationResult(text="second", model_used="m")

        mock_backend.generate.side_effect = generate
        session = SummarySession(pipeline)

        first = asyncio.create_task(session.submit("First text"))
        await asyncio.sleep(0)
        await session.submit("Second text")

        first.cancel()
        with pytest.raises(asyncio.CancelledError):
            await first

        assert session.state.status == Status.SUCCEEDED
        assert session.state.summary == "second"

    @pytest.mark.asyncio
    async def test_newer_request_wins(self, pipeline, mock_backend):
        first_release = asyncio.Event()
        calls = []

        async def generate(prompt, *, tone=None):
            calls.append(prompt)
            if len(calls) == 1:
                await first_release.wait()
                return GenerationResult(text="first", model_used="m")
            return GenerationResult(text="second", model_used="m")

        mock_backend.generate.side_effect = generate
        session = SummarySession(pipeline)

        first = asyncio.create_task(session.submit("First text"))
        await asyncio.sleep(0)
        await session.submit("Second text")
        first_release.set()
        await first

        assert session.state.status == Status.SUCCEEDED
        assert session.state.summary == "second"

    @pytest.mark.asyncio
    async def test_resubmit_after_failure(self, pipeline, mock_backend):
        mock_backend.generate.side_effect = [
            RuntimeError("boom"),
            GenerationResult(text="ok", model_used="m"),
        ]
        session = SummarySession(pipeline)

        failed = await session.submit("Hello")
        assert failed.status == Status.FAILED

        succeeded = await session.submit("Hello")
        assert succeeded.status == Status.SUCCEEDED
        assert succeeded.error_message is None
        assert succeeded.summary == "ok"

    def test_reset_twice_without_backend_call(self, pipeline, mock_backend):
        session = SummarySession(pipeline)

        assert session.reset().status == Status.IDLE
        assert session.reset().status == Status.IDLE
        mock_backend.generate.assert_not_called()
