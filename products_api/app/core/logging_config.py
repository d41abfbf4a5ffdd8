"""
Basic logging configuration for the application.

The ``setup_logging`` function configures the root logger with a
console and optional file handler, using the level and log file from
``Settings`` unless told otherwise.  Every request is already logged
by the middleware in ``main``, so uvicorn's own access log is turned
down to warnings to avoid a second line per request.  Logging is set
up exactly once per process, even when ``create_app`` runs repeatedly
(as it does in the test suite).
"""

import logging
from pathlib import Path
from typing import Optional

from .config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers whose records duplicate the request log written by ``main``.
QUIET_LOGGERS = ("uvicorn.access",)


def setup_logging(level: Optional[str] = None, logfile: Optional[str] = None) -> None:
    """Configure root logger.

    Parameters
    ----------
    level : Optional[str]
        Logging level name (e.g. ``"DEBUG"``), case insensitive.
        Defaults to ``settings.log_level``; unknown names fall back to
        ``INFO``.
    logfile : Optional[str]
        Path of an extra log file.  Defaults to ``settings.log_file``;
        when neither is set only the console handler is attached.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    level = level or settings.log_level
    logfile = logfile or settings.log_file
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
