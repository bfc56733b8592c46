"""HTTP API for the summary server."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .config import ServerConfig
from .core.export import SaveAction, copy_text, export_file
from .core.feedback import create_notifier
from .core.logging import get_logger
from .session import SummarySession
from .summarizers.base import GenerationBackend
from .summarizers.factory import create_backend
from .summarizers.pipeline import SummaryPipeline
from .summarizers.tones import DEFAULT_TONE, Tone
from .tts.speech import SpeechService

log = get_logger()


class SummarizeBody(BaseModel):
    text: str
    tone: str = DEFAULT_TONE.value


class ExportBody(BaseModel):
    action: str = SaveAction.AS_FILE.value


class SpeechBody(BaseModel):
    text: str | None = None  # Defaults to the current summary


def _parse_tone(value: str) -> Tone:
    try:
        return Tone.parse(value)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None


def _parse_action(value: str) -> SaveAction:
    for action in SaveAction:
        if value in (action.value, action.name, action.name.lower()):
            return action
    valid = ", ".join(action.value for action in SaveAction)
    raise HTTPException(status_code=422, detail=f"Unknown action {value!r} (expected one of: {valid})")


def create_app(
    config: ServerConfig | None = None,
    backend: GenerationBackend | None = None,
    speech: SpeechService | None = None,
    notifier=None,
) -> FastAPI:
    """Build the FastAPI application.

    Collaborators not passed in are created from ``config``. Speech is
    optional; without it the speech endpoints answer 503.
    """
    config = config or ServerConfig()
    backend = backend or create_backend(config.summarizer)
    notifier = notifier or create_notifier(config.feedback)
    session = SummarySession(SummaryPipeline(backend), notifier=notifier, speech=speech)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info(f"Summary server ready (backend={config.summarizer.backend})")
        yield
        if speech is not None:
            await speech.cleanup()
        notifier.cleanup()
        await backend.close()
        log.info("Summary server stopped")

    app = FastAPI(title="CoreText Summary Server", lifespan=lifespan)
    app.state.session = session
    app.state.config = config

    def require_speech() -> SpeechService:
        if speech is None:
            raise HTTPException(status_code=503, detail="Speech is not enabled")
        return speech

    @app.get("/health")
    async def health():
        return {"status": "ok", "backend": await backend.health_check()}

    @app.get("/tones")
    async def tones():
        return [
            {
                "id": tone.value,
                "display_name": tone.display_name,
                "color": tone.color,
                "instruction": tone.instruction,
            }
            for tone in Tone
        ]

    @app.get("/session")
    async def get_session():
        return session.state.to_dict()

    @app.post("/summarize")
    async def summarize(body: SummarizeBody):
        tone = _parse_tone(body.tone)
        state = await session.submit(body.text, tone)
        return state.to_dict()

    @app.post("/session/reset")
    async def reset_session():
        return session.reset().to_dict()

    @app.post("/export")
    async def export(body: ExportBody):
        action = _parse_action(body.action)
        summary = session.state.summary
        if summary is None:
            raise HTTPException(status_code=409, detail="No summary to export")

        if action.extension is None:
            return {"action": action.value, "copied": copy_text(summary)}

        path = export_file(summary, action.extension, config.export_dir)
        if path is None:
            raise HTTPException(status_code=500, detail="Could not write summary file")
        return {"action": action.value, "path": str(path)}

    @app.get("/speech")
    async def speech_status():
        return {"enabled": speech is not None, "speaking": speech is not None and speech.is_speaking}

    @app.post("/speech/read")
    async def speech_read(body: SpeechBody):
        service = require_speech()
        text = body.text if body.text is not None else session.state.summary
        if not text:
            raise HTTPException(status_code=409, detail="Nothing to read")
        return {"speaking": await service.read(text)}

    @app.post("/speech/stop")
    async def speech_stop():
        require_speech().stop()
        return {"speaking": False}

    return app
