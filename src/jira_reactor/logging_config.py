"""Structured logging configuration.

Configures Python stdlib logging to emit JSON with GCP-compatible field names
(``severity``, ``timestamp``, ``logger``), or plain text lines for local runs.

Usage:
    from jira_reactor.logging_config import configure_logging
    configure_logging("DEBUG", "text")
"""

import copy
import logging
import logging.config

LOG_FORMATS = ("json", "text")

LOGGING_CONFIG: dict = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(funcName)s %(message)s",
            "rename_fields": {
                "levelname": "severity",
                "asctime": "timestamp",
                "name": "logger",
            },
            "static_fields": {
                "service": "jira-reactor",
            },
        },
        "text": {
            "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        },
    },
    "root": {
        "level": "INFO",
        "handlers": ["console"],
    },
}


def build_logging_config(level: str = "INFO", fmt: str = "json") -> dict:
    """Return a dictConfig mapping for the given level and output format.

    Unknown formats fall back to JSON, unknown levels to INFO.
    """
    config = copy.deepcopy(LOGGING_CONFIG)
    config["handlers"]["console"]["formatter"] = fmt if fmt in LOG_FORMATS else "json"
    level = level.upper()
    config["root"]["level"] = level if level in logging.getLevelNamesMapping() else "INFO"
    return config


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Apply the logging configuration.

    Call once at application startup (in the FastAPI lifespan). All subsequent
    ``logging.getLogger()`` calls emit through the configured console handler.
    """
    logging.config.dictConfig(build_logging_config(level, fmt))
    if fmt not in LOG_FORMATS:
        logging.getLogger(__name__).error("Unknown log format given: %s", fmt)
