from __future__ import annotations

import logging
import os
from typing import Optional

from .config import get_config

_CONFIGURED = False

LOG_LEVEL_ENV = "JAX_FRAMES_LOG_LEVEL"


def setup_logging(level: Optional[str] = None) -> None:
    """Opt-in console logging for applications; the library never calls this."""
    global _CONFIGURED
    if _CONFIGURED:
        return
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, get_config().log_level)
    lvl = getattr(logging, level.upper(), logging.INFO)
    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    logging.basicConfig(level=lvl, format=fmt)
    _CONFIGURED = True


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger
