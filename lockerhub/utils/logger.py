# lockerhub/utils/logger.py
"""
Logging for the engine, routers and scripts.
The root logger is configured once: console always, plus a rotating file
under /logs/ when LOG_TO_FILE is on. File name, size and rotation come from settings.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from lockerhub.config import settings

LOG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "logs")
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_configured = False


def build_file_handler(log_dir: str = LOG_DIR) -> RotatingFileHandler:
    """Rotating handler for settings.LOG_FILE_NAME inside log_dir."""
    os.makedirs(log_dir, exist_ok=True)
    return RotatingFileHandler(
        filename=os.path.join(log_dir, settings.LOG_FILE_NAME),
        maxBytes=settings.LOG_FILE_MAX_MB * 1024 * 1024,
        backupCount=settings.LOG_FILE_BACKUPS,
        encoding="utf-8",
    )


def build_handlers(log_dir: str = LOG_DIR) -> list:
    handlers = [logging.StreamHandler()]
    if settings.LOG_TO_FILE:
        handlers.append(build_file_handler(log_dir))

    level = settings.LOG_LEVEL.upper()
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(fmt)
    return handlers


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL.upper())
    for handler in build_handlers():
        root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Call this at the top of every module."""
    _configure_root_logger()
    return logging.getLogger(name)
