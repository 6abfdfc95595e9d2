from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "MOODKEEPER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_log_level(level: str | None = None) -> int:
    name = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").strip().upper()
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise SystemExit(f"Unknown log level {name!r}")
    return value


def setup_logging(level: str | None = None) -> logging.Logger:
    logger = logging.getLogger("moodkeeper")
    logger.setLevel(resolve_log_level(level))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
