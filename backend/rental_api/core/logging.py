"""Process-wide logging configuration."""

from __future__ import annotations

import logging
import logging.config

from rental_api.core.config import Settings
from rental_api.security.logging_filters import SensitiveFilter

_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    """Install handlers that redact secrets and tag lines with the request id."""
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {
                "correlation_id": {
                    "()": "asgi_correlation_id.CorrelationIdFilter",
                    "uuid_length": 32,
                    "default_value": "-",
                },
                "sensitive": {"()": SensitiveFilter},
            },
            "formatters": {"default": {"format": _FORMAT}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "filters": ["correlation_id", "sensitive"],
                },
            },
            "root": {"handlers": ["console"], "level": settings.log_level.upper()},
        }
    )

    for logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        logger = logging.getLogger(logger_name)
        if not any(isinstance(flt, SensitiveFilter) for flt in logger.filters):
            logger.addFilter(SensitiveFilter())
