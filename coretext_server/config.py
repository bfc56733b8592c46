"""Configuration for the summary server.

Every section is a plain dataclass with defaults suitable for local use.
``from_env`` reads overrides from environment variables so the server can be
configured without a config file.
"""

import os
from dataclasses import dataclass, field


def _env_str(name: str, default: str | None) -> str | None:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _env_float(name: str, default: float) -> float:
    value = _env_str(name, None)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


def _env_int(name: str, default: int) -> int:
    value = _env_str(name, None)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def _env_bool(name: str, default: bool) -> bool:
    value = _env_str(name, None)
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes", "on")


@dataclass
class SummarizerConfig:
    """Generation backend settings."""

    backend: str = "groq"  # "groq" or "ollama"
    timeout: float = 30.0  # Groq request timeout

    # Groq
    groq_api_key: str | None = None
    groq_model: str = "llama-3.1-8b-instant"

    # Ollama
    ollama_url: str = "http://localhost:11434"
    ollama_model: str = "qwen3:4b-instruct-2507-q4_K_M"
    ollama_timeout: float = 60.0  # local inference is slower than hosted APIs

    @classmethod
    def from_env(cls) -> "SummarizerConfig":
        defaults = cls()
        return cls(
            backend=_env_str("SUMMARY_BACKEND", defaults.backend).lower(),
            timeout=_env_float("SUMMARY_TIMEOUT", defaults.timeout),
            groq_api_key=_env_str("SUMMARY_GROQ_API_KEY", None),
            groq_model=_env_str("SUMMARY_GROQ_MODEL", defaults.groq_model),
            ollama_url=_env_str("SUMMARY_OLLAMA_URL", defaults.ollama_url),
            ollama_model=_env_str("SUMMARY_OLLAMA_MODEL", defaults.ollama_model),
            ollama_timeout=_env_float("SUMMARY_OLLAMA_TIMEOUT", defaults.ollama_timeout),
        )


@dataclass
class TTSConfig:
    """Text-to-speech settings for reading summaries aloud."""

    backend: str = "kokoro"
    kokoro_voice: str = "af_heart"
    kokoro_lang: str = "a"
    kokoro_speed: float = 1.0

    @classmethod
    def from_env(cls) -> "TTSConfig":
        defaults = cls()
        return cls(
            backend=_env_str("TTS_BACKEND", defaults.backend).lower(),
            kokoro_voice=_env_str("TTS_KOKORO_VOICE", defaults.kokoro_voice),
            kokoro_lang=_env_str("TTS_KOKORO_LANG", defaults.kokoro_lang),
            kokoro_speed=_env_float("TTS_KOKORO_SPEED", defaults.kokoro_speed),
        )


@dataclass
class FeedbackConfig:
    """Sound feedback played when a summary finishes or fails."""

    enabled: bool = True
    success_sound: bool = True
    failure_sound: bool = True
    sample_rate: int = 24000

    @classmethod
    def from_env(cls) -> "FeedbackConfig":
        defaults = cls()
        return cls(
            enabled=_env_bool("FEEDBACK_ENABLED", defaults.enabled),
            success_sound=_env_bool("FEEDBACK_SUCCESS_SOUND", defaults.success_sound),
            failure_sound=_env_bool("FEEDBACK_FAILURE_SOUND", defaults.failure_sound),
            sample_rate=_env_int("FEEDBACK_SAMPLE_RATE", defaults.sample_rate),
        )


@dataclass
class ServerConfig:
    """Top-level server configuration."""

    host: str = "127.0.0.1"
    port: int = 20303
    log_level: str = "INFO"
    export_dir: str | None = None  # None means the system temp directory
    tts: TTSConfig = field(default_factory=TTSConfig)
    summarizer: SummarizerConfig = field(default_factory=SummarizerConfig)
    feedback: FeedbackConfig = field(default_factory=FeedbackConfig)

    @classmethod
    def from_env(cls) -> "ServerConfig":
        defaults = cls()
        return cls(
            host=_env_str("SERVER_HOST", defaults.host),
            port=_env_int("SERVER_PORT", defaults.port),
            log_level=_env_str("SERVER_LOG_LEVEL", defaults.log_level).upper(),
            export_dir=_env_str("SERVER_EXPORT_DIR", None),
            tts=TTSConfig.from_env(),
            summarizer=SummarizerConfig.from_env(),
            feedback=FeedbackConfig.from_env(),
        )
