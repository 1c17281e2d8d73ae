# app/core/logging_config.py
from __future__ import annotations

import logging
import sys

from app.core.config import settings

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def setup_logging() -> None:
    """
    Console handler always; file handler when LOG_FILE is set.
    Safe to call more than once.
    """
    global _configured
    if _configured:
        return

    level = getattr(logging, (settings.LOG_LEVEL or "INFO").upper(),
                    logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    root = logging.getLogger("app")
    root.setLevel(level)

    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level)
    ch.setFormatter(formatter)
    root.addHandler(ch)

    if settings.LOG_FILE:
        fh = logging.FileHandler(settings.LOG_FILE, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

    _configured = True
