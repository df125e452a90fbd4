# src/pinus_hybrid/utils/logging.py
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional
import logging
import logging.config

LOGGER_NAME = "pinus_hybrid"


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger with a console handler and an optional file.

    Library modules only call ``logging.getLogger(__name__)``; this is for
    applications such as the CLI.
    """
    level = level.upper()
    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {
                "format": "{asctime} {levelname:<7} {name} - {message}",
                "style": "{",
            },
            "console": {
                "format": "{levelname:<7} {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "console",
                "stream": "ext://sys.stderr",
                "level": level,
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

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        config["handlers"]["file"] = {
            "class": "logging.FileHandler",
            "formatter": "plain",
            "filename": str(log_file),
            "encoding": "utf-8",
            "mode": "w",
            "level": "DEBUG",
        }
        config["loggers"][LOGGER_NAME]["handlers"].append("file")
        config["loggers"][LOGGER_NAME]["level"] = "DEBUG"

    logging.config.dictConfig(config)
    return logging.getLogger(LOGGER_NAME)
