"""Central logging configuration for the survey app.

Sends every module logger to stdout at INFO so submissions and validation
errors show up in the console running ``streamlit run``. Streamlit reruns the
script on each interaction, so configuration happens at most once.
"""
from __future__ import annotations
import logging
from logging.config import dictConfig

_DICT_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s:%(name)s:%(message)s",
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "default",
            "stream": "ext://sys.stdout",
        }
    },
    "loggers": {
        "data_loader": {"level": "INFO", "handlers": ["console"]},
        "schema_builder": {"level": "INFO", "handlers": ["console"]},
        "submission": {"level": "INFO", "handlers": ["console"]},
        "survey_app": {"level": "INFO", "handlers": ["console"]},
    },
}

_configured = False


def configure_logging() -> None:
    """Configure the app loggers once per process."""
    global _configured
    if _configured:
        return
    dictConfig(_DICT_CONFIG)
    _configured = True
