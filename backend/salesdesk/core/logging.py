import logging

from salesdesk.core.config import settings

_LOGGING_CONFIGURED = False


def configure_logging() -> None:
    """Configure process-wide logging from settings. Safe to call more than once."""
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=level, format=settings.LOG_FORMAT)
    _LOGGING_CONFIGURED = True
