# app/utils/logger.py
"""
Logging setup shared by the API, the client and the scripts.
Console output plus a size-rotated file (settings.LOG_DIR / settings.LOG_FILE).
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from app.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "logs")

# httpx logs every request at INFO; SQL echo is switched on through the engine instead
QUIET_LOGGERS = {"httpx": logging.WARNING, "httpcore": logging.WARNING, "sqlalchemy.engine": logging.WARNING}

_handlers: list[logging.Handler] = []


def configure_logging(level: Optional[str] = None, log_dir: Optional[str] = None, force: bool = False) -> str:
    """
    Attach the console and rotating-file handlers to the root logger once.
    `force` replaces handlers installed by an earlier call. Returns the log file path.
    """
    if _handlers and not force:
        return _handlers[-1].baseFilename
    log_dir = log_dir or settings.LOG_DIR or DEFAULT_LOG_DIR
    log_path = os.path.join(log_dir, settings.LOG_FILE)

    root = logging.getLogger()
    for handler in _handlers:
        root.removeHandler(handler)
        handler.close()
    _handlers.clear()

    level = (level or settings.LOG_LEVEL).upper()
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    os.makedirs(log_dir, exist_ok=True)
    file_handler = RotatingFileHandler(
        filename=log_path,
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    for handler in (logging.StreamHandler(), file_handler):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)
        _handlers.append(handler)

    root.setLevel(level)
    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)
    return log_path


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Call this at the top of every module."""
    configure_logging()
    return logging.getLogger(name)
