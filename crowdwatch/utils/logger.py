# crowdwatch/utils/logger.py
"""
Logging setup shared by every module.

get_logger(__name__) attaches a console handler and a size-rotated file
(LOG_DIR/crowdwatch.log) to the root logger the first time it is called.
SQLAlchemy engine chatter is held at WARNING unless LOG_LEVEL is DEBUG.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from crowdwatch.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_FILE = "crowdwatch.log"
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 5

_configured = False


def _build_handlers(level: str) -> list[logging.Handler]:
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if settings.LOG_DIR:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        handlers.append(RotatingFileHandler(
            filename=os.path.join(settings.LOG_DIR, LOG_FILE),
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUPS,
            encoding="utf-8",
        ))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def _configure():
    global _configured
    if _configured:
        return
    _configured = True

    level = settings.LOG_LEVEL.upper()
    root = logging.getLogger()
    root.setLevel(level)
    for handler in _build_handlers(level):
        root.addHandler(handler)

    if level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    _configure()
    return logging.getLogger(name)
