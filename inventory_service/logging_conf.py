# inventory_service/logging_conf.py
from __future__ import annotations
import logging
import logging.config

from inventory_service.config import settings

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "correlation": {"()": "inventory_service.middleware.correlation.CorrelationIdFilter"},
    },
    "formatters": {
        "basic": {
            "format": "%(asctime)s | %(levelname)-7s | %(name)s | %(correlation_id)s | %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "basic",
            "filters": ["correlation"],
            "level": "DEBUG",
        },
    },
    "loggers": {
        "": {"handlers": ["console"], "level": "INFO"},
        "uvicorn": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "uvicorn.error": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "uvicorn.access": {"handlers": ["console"], "level": "WARNING", "propagate": False},
        "inventory": {"handlers": ["console"], "level": settings.log_level, "propagate": False},
    },
}


def setup_logging() -> None:
    logging.config.dictConfig(LOGGING_CONFIG)
