"""Logging configuration for the application."""

import logging
import sys

from concierge.core.config import get_settings
from concierge.core.request_context import get_company_id, get_request_id

LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[company=%(company_id)s request=%(request_id)s] %(message)s"
)


class RequestContextFilter(logging.Filter):
    """Attach company_id and request_id from the request context to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.company_id = get_company_id() or "-"
        record.request_id = get_request_id() or "-"
        return True


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise settings.log_level.
    Output goes to stdout. Safe to call more than once.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else getattr(
        logging, settings.log_level.upper(), logging.INFO
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[handler],
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
