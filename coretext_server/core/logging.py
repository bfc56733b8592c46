"""Logging configuration with TRACE level support."""

import logging
import sys

from .context import get_request_id

LOGGER_NAME = "coretext"

# Define TRACE log level (below DEBUG)
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def _trace(self, message, *args, **kwargs):
    """Log at TRACE level."""
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)


# Add trace method to Logger class
logging.Logger.trace = _trace


class RequestIdFilter(logging.Filter):
    """Attach the current request ID to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get a logger with TRACE support."""
    return logging.getLogger(name)


def setup_logging(level: str | int = "INFO") -> logging.Logger:
    """Configure the server logger to write to stderr.

    Calling this more than once replaces the previous handler.
    """
    log = get_logger()
    if isinstance(level, str):
        level = TRACE if level.upper() == "TRACE" else logging.getLevelName(level.upper())
    log.setLevel(level)

    for handler in list(log.handlers):
        log.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s [%(request_id)s] %(message)s")
    )
    log.addHandler(handler)
    log.propagate = False
    return log
