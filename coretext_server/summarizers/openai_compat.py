"""Response handling shared by OpenAI-compatible chat completion APIs."""

import httpx

from .base import AssetsUnavailable, GenerationError, GenerationResult, GuardrailViolation

# Matched against the error's machine-readable code/type only
_GUARDRAIL_CODES = ("content_filter", "content_policy", "moderation", "safety")
_MISSING_MODEL_CODES = ("model_not_found", "model_decommissioned")

# Matched against the human-readable message; phrases, not single words
_GUARDRAIL_PHRASES = ("content policy", "content filter", "flagged by moderation", "safety policy")
_MISSING_MODEL_PHRASES = ("model not found", "does not exist", "has been decommissioned", "try pulling it")


def _error_details(response: httpx.Response) -> tuple[str, str]:
    """Extract (code and type, message) from an error response body, if any."""
    try:
        data = response.json()
    except ValueError:
        return "", response.text.strip()
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict):
        codes = " ".join(str(error.get(key)) for key in ("code", "type") if error.get(key))
        return codes, str(error.get("message", ""))
    if isinstance(error, str):
        return "", error
    return "", response.text.strip()


def check_response(response: httpx.Response, provider: str) -> None:
    """Raise a categorized GenerationError for a failed HTTP response.

    Raises:
        GuardrailViolation: The provider refused the content.
        AssetsUnavailable: The requested model does not exist on the provider.
        GenerationError: Any other error status.
    """
    if response.is_success:
        return

    codes, message = _error_details(response)
    codes, lowered = codes.lower(), message.lower()
    description = f"{provider} API error ({response.status_code}): {message or 'Unknown error'}"

    if response.status_code == 404 or any(code in codes for code in _MISSING_MODEL_CODES):
        raise AssetsUnavailable(description)
    if any(code in codes for code in _GUARDRAIL_CODES) or any(p in lowered for p in _GUARDRAIL_PHRASES):
        raise GuardrailViolation(description)
    if any(p in lowered for p in _MISSING_MODEL_PHRASES):
        raise AssetsUnavailable(description)
    raise GenerationError(description)


def parse_completion(data: dict, model: str, provider: str) -> GenerationResult:
    """Turn a chat completion payload into a GenerationResult.

    Raises:
        GuardrailViolation: The completion was stopped by a content filter.
        GenerationError: The payload carries an error or no choices.
    """
    if "error" in data:
        error = data["error"]
        message = error.get("message", "Unknown error") if isinstance(error, dict) else str(error)
        raise GenerationError(f"{provider} API error: {message}")

    choices = data.get("choices") or []
    if not choices:
        raise GenerationError(f"{provider} API returned no choices")

    choice = choices[0]
    if choice.get("finish_reason") == "content_filter":
        raise GuardrailViolation(f"{provider} content filter stopped the response")

    text = (choice.get("message") or {}).get("content")
    if text is None:
        raise GenerationError(f"{provider} API returned an empty message")

    return GenerationResult(
        text=text,
        model_used=data.get("model") or model,
        tokens_used=(data.get("usage") or {}).get("total_tokens"),
    )
