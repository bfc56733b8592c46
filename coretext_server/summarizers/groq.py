"""Groq generation backend."""

import httpx

from ..config import SummarizerConfig
from ..core.logging import get_logger
from .base import GenerationBackend, GenerationResult
from .openai_compat import check_response, parse_completion
from .prompts import SESSION_INSTRUCTIONS, get_generation_params
from .tones import Tone

log = get_logger()


class GroqSummarizer(GenerationBackend):
    """Groq-based generation backend."""

    BASE_URL = "https://api.groq.com/openai/v1/chat/completions"
    MODELS_URL = "https://api.groq.com/openai/v1/models"

    def __init__(self, config: SummarizerConfig):
        self.config = config
        self.client = httpx.AsyncClient(timeout=config.timeout)

    async def generate(self, prompt: str, *, tone: Tone | None = None) -> GenerationResult:
        """Generate a summary using the Groq API.

        Args:
            prompt: The per-request prompt.
            tone: Tone used to pick sampling parameters.

        Returns:
            GenerationResult with the generated text.

        Raises:
            GenerationError: If the API rejects the request.
            httpx.TransportError: If the API cannot be reached.
            ValueError: If the API key is not configured.
        """
        if not self.config.groq_api_key:
            raise ValueError("SUMMARY_GROQ_API_KEY not configured")

        temperature, max_tokens = get_generation_params(tone)
        model = self.config.groq_model
        log.trace(f"Groq request: model={model} temperature={temperature}")

        response = await self.client.post(
            self.BASE_URL,
            headers={"Authorization": f"Bearer {self.config.groq_api_key}"},
            json={
                "model": model,
                "messages": [
                    {"role": "system", "content": SESSION_INSTRUCTIONS},
                    {"role": "user", "content": prompt},
                ],
                "temperature": temperature,
                "max_tokens": max_tokens,
            },
        )
        check_response(response, "Groq")
        return parse_completion(response.json(), model, "Groq")

    async def health_check(self) -> bool:
        """Check if Groq API is accessible.

        Returns:
            True if the API is accessible, False otherwise.
        """
        if not self.config.groq_api_key:
            return False

        try:
            response = await self.client.get(
                self.MODELS_URL,
                headers={"Authorization": f"Bearer {self.config.groq_api_key}"},
                timeout=2.0,
            )
            return response.status_code == 200
        except httpx.HTTPError as e:
            log.debug(f"Groq health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()
