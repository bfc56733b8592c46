"""Pytest fixtures for the summary server tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from coretext_server.config import FeedbackConfig, ServerConfig, SummarizerConfig, TTSConfig
from coretext_server.summarizers.base import GenerationBackend, GenerationResult
from coretext_server.summarizers.pipeline import SummaryPipeline


@pytest.fixture
def mock_backend():
    """Create a mock generation backend that returns a fixed summary."""
    backend = AsyncMock(spec=GenerationBackend)
    backend.generate.return_value = GenerationResult(
        text="Test summary",
        model_used="test-model",
        tokens_used=100,
    )
    backend.health_check.return_value = True
    return backend


@pytest.fixture
def pipeline(mock_backend):
    """Create a pipeline around the mock backend."""
    return SummaryPipeline(mock_backend)


@pytest.fixture
def mock_notifier():
    """Create a mock notification collaborator."""
    return MagicMock(spec=["notify_success", "notify_failure", "cleanup"])


@pytest.fixture
def mock_speech():
    """Create a mock speech service."""
    speech = MagicMock()
    speech.read = AsyncMock(return_value=True)
    speech.cleanup = AsyncMock()
    speech.is_speaking = False
    return speech


@pytest.fixture
def summarizer_config():
    """Create default summarizer config."""
    return SummarizerConfig(
        backend="groq",
        groq_api_key="test-key",
        groq_model="test-model",
    )


@pytest.fixture
def ollama_config():
    """Create Ollama config."""
    return SummarizerConfig(
        backend="ollama",
        ollama_url="http://localhost:11434",
        ollama_model="qwen3:4b-instruct-2507-q4_K_M",
    )


@pytest.fixture
def feedback_config():
    """Feedback config with sounds disabled for testing."""
    return FeedbackConfig(enabled=False)


@pytest.fixture
def server_config(summarizer_config, feedback_config, tmp_path):
    """Create default server config."""
    return ServerConfig(
        host="127.0.0.1",
        port=20303,
        log_level="WARNING",
        export_dir=str(tmp_path),
        tts=TTSConfig(),
        summarizer=summarizer_config,
        feedback=feedback_config,
    )
