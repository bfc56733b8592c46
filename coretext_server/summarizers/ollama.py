"""Ollama generation backend."""

import httpx

from ..config import SummarizerConfig
from ..core.logging import get_logger
from .base import GenerationBackend, GenerationResult
from .openai_compat import check_response, parse_completion
from .prompts import SESSION_INSTRUCTIONS, get_generation_params
from .tones import Tone

log = get_logger()


class OllamaSummarizer(GenerationBackend):
    """Ollama-based generation backend for local LLM inference."""

    def __init__(self, config: SummarizerConfig):
        self.config = config
        self.base_url = config.ollama_url.rstrip("/")
        self.client = httpx.AsyncClient(timeout=config.ollama_timeout)

    async def generate(self, prompt: str, *, tone: Tone | None = None) -> GenerationResult:
        """Generate a summary using the Ollama API.

        Args:
            prompt: The per-request prompt.
            tone: Tone used to pick sampling parameters.

        Returns:
            GenerationResult with the generated text.

        Raises:
            AssetsUnavailable: If the model has not been pulled.
            GenerationError: If the API rejects the request.
            httpx.TransportError: If Ollama is not running.
        """
        temperature, max_tokens = get_generation_params(tone)
        model = self.config.ollama_model

        # Use Ollama's OpenAI-compatible endpoint
        response = await self.client.post(
            f"{self.base_url}/v1/chat/completions",
            json={
                "model": model,
                "messages": [
                    {"role": "system", "content": SESSION_INSTRUCTIONS},
                    {"role": "user", "content": prompt},
                ],
                "temperature": temperature,
                "max_tokens": max_tokens,
                "stream": False,
            },
        )
        check_response(response, "Ollama")
        return parse_completion(response.json(), model, "Ollama")

    async def health_check(self) -> bool:
        """Check if Ollama is accessible.

        Returns:
            True if Ollama is accessible, False otherwise.
        """
        try:
            response = await self.client.get(
                f"{self.base_url}/api/tags",
                timeout=2.0,
            )
            return response.status_code == 200
        except httpx.HTTPError as e:
            log.debug(f"Ollama health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()
