from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

LOGGER_NAME = "mdexport"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def setup_logging(
    verbosity: int = 0,
    *,
    level: str | None = None,
    log_file: Path | None = None,
) -> logging.Logger:
    """
    Configure the package logger.

    An explicit level wins over verbosity (0=WARNING, 1=INFO, 2+=DEBUG).
    Handlers are replaced on every call so repeated setup does not duplicate output.
    """
    if level:
        name = level.strip().upper()
        if name not in LOG_LEVELS:
            raise ValueError(f"Invalid log level '{level}'. Must be one of: {sorted(LOG_LEVELS)}")
        log_level = getattr(logging, name)
    elif verbosity >= 2:
        log_level = logging.DEBUG
    elif verbosity >= 1:
        log_level = logging.INFO
    else:
        log_level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(log_level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        logger.addHandler(fh)
        logger.info("Logging to file: %s", log_file)

    return logger
