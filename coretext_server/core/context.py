"""Request context and log sanitizing."""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


def sanitize_for_log(text: str, max_len: int = 60) -> str:
    """Collapse user text onto one line and truncate it for logging.

    Args:
        text: Text to sanitize.
        max_len: Maximum length before truncation.

    Returns:
        Single-line text, at most ``max_len`` characters plus an ellipsis.
    """
    text = text.replace("\r", "").replace("\n", "\\n")
    if len(text) > max_len:
        return text[:max_len] + "..."
    return text


def get_request_id() -> str | None:
    """Get the current request ID."""
    return request_id_var.get()


@contextmanager
def request_context(request_id: str | None = None) -> Iterator[str]:
    """Run a block under a request ID, restoring the previous one afterwards."""
    if request_id is None:
        request_id = uuid.uuid4().hex[:8]
    token = request_id_var.set(request_id)
    try:
        yield request_id
    finally:
        request_id_var.reset(token)
