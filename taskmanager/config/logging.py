"""Structured JSON logging for the API process and its uvicorn server."""

import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

from taskmanager.config.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

# uvicorn is started with log_config=None; these must reach the root handler.
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

# Noisy at INFO; raised to WARNING regardless of LOG_LEVEL.
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool")


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Send every log record to stdout as one JSON object per line.

    Args:
        settings: Resolved configuration; ``settings.log_level`` picks the
                  root level, unknown names fall back to INFO

    Returns:
        The configured root logger
    """
    if settings is None:
        settings = get_settings()
    level = getattr(logging, settings.log_level, None)
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.setLevel(logging.NOTSET)
        uvicorn_logger.propagate = True

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger
