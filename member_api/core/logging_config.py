"""Logging configuration shared by the app and the CLI helpers."""

from __future__ import annotations

import logging
import logging.config

LOGGER_NAME = "member_api"


def build_logging_config(level: str = "INFO") -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            LOGGER_NAME: {
                "level": level,
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(level: str | None = None) -> None:
    """Configure the package logger; unknown levels fall back to INFO."""
    name = (level or "INFO").upper()
    if not isinstance(logging.getLevelName(name), int):
        name = "INFO"
    logging.config.dictConfig(build_logging_config(name))
