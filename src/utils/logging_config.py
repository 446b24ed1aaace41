"""Structured logger setup shared across handlers and services."""

import logging
import os

from pythonjsonlogger.json import JsonFormatter

LOG_FORMAT = "%(levelname)s %(name)s %(message)s %(asctime)s"


def get_logger(name: str) -> logging.Logger:
    """
    Configure a JSON logger once and reuse it.

    Context goes through ``extra={...}`` so every field lands as a JSON key.
    ``LOG_LEVEL`` overrides the default INFO level.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(
        JsonFormatter(LOG_FORMAT, static_fields={"service": "celebration-tracker"})
    )
    logger.addHandler(handler)
    logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())
    logger.propagate = False
    return logger
