"""Command-line entry point.

Usage:
    python -m coretext_server serve [--host 127.0.0.1] [--port 20303] [--backend groq]
    python -m coretext_server summarize [--tone concise] "text to summarize"
    cat notes.txt | python -m coretext_server summarize --tone bulletPoints -
"""

import argparse
import asyncio
import sys

from .config import ServerConfig
from .core.feedback import create_notifier
from .core.logging import setup_logging
from .session import Status, SummarySession
from .summarizers.factory import create_backend
from .summarizers.pipeline import SummaryPipeline
from .summarizers.tones import DEFAULT_TONE, Tone


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="coretext_server", description="Tone-aware text summarizer")
    parser.add_argument("--log-level", default=None, help="Log level (TRACE, DEBUG, INFO, ...)")
    parser.add_argument("--backend", choices=["groq", "ollama"], default=None, help="Generation backend")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--host", default=None, help="Host to bind")
    serve.add_argument("--port", type=int, default=None, help="Port to listen on")
    serve.add_argument("--speech", action="store_true", help="Enable reading summaries aloud")

    summarize = sub.add_parser("summarize", help="Summarize text once and print the result")
    summarize.add_argument("text", nargs="?", default="-", help="Text to summarize, or - for stdin")
    summarize.add_argument(
        "--tone",
        type=Tone.parse,
        default=DEFAULT_TONE,
        help=f"One of: {', '.join(tone.value for tone in Tone)} (default: {DEFAULT_TONE.value})",
    )
    summarize.add_argument("--no-sound", action="store_true", help="Disable feedback sounds")
    return parser


async def run_summarize(config: ServerConfig, text: str, tone: Tone) -> int:
    backend = create_backend(config.summarizer)
    notifier = create_notifier(config.feedback)
    session = SummarySession(SummaryPipeline(backend), notifier=notifier)
    try:
        state = await session.submit(text, tone)
    finally:
        await backend.close()

    if state.status == Status.SUCCEEDED:
        print(state.summary)
        return 0
    if state.status == Status.FAILED:
        print(state.error_message, file=sys.stderr)
        return 1
    print("Nothing to summarize.", file=sys.stderr)
    return 2


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = ServerConfig.from_env()
    if args.log_level:
        config.log_level = args.log_level.upper()
    if args.backend:
        config.summarizer.backend = args.backend
    setup_logging(config.log_level)

    if args.command == "summarize":
        if args.no_sound:
            config.feedback.enabled = False
        text = sys.stdin.read() if args.text == "-" else args.text
        return asyncio.run(run_summarize(config, text, args.tone))

    import uvicorn

    from .server import create_app
    from .tts.speech import create_speech_service

    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port
    speech = create_speech_service(config.tts) if args.speech else None
    app = create_app(config, speech=speech)
    # uvicorn has no TRACE level
    uvicorn_level = "debug" if config.log_level == "TRACE" else config.log_level.lower()
    uvicorn.run(app, host=config.host, port=config.port, log_level=uvicorn_level)
    return 0


if __name__ == "__main__":
    sys.exit(main())
