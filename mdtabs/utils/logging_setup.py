"""Application logging utilities."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

from mdtabs.utils.constants import APP_NAME

_LOG_FILE_NAME = "mdtabs.log"


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def configure_logging(
    level: str | int = logging.INFO, log_dir: Path | None = None
) -> logging.Logger:
    """Configure a rotating log file in the user log directory plus stderr output."""
    logger = logging.getLogger("mdtabs")
    if logger.handlers:
        return logger

    logger.setLevel(_resolve_level(level))
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    directory = log_dir or Path(user_log_dir(APP_NAME))
    try:
        directory.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            directory / _LOG_FILE_NAME,
            maxBytes=1_048_576,
            backupCount=5,
            encoding="utf-8",
        )
    except OSError as e:
        # Read-only home or sandbox: stderr only.
        logger.warning("File logging disabled: %s", e)
        return logger

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.info("Logger initialised; logs available at %s", handler.baseFilename)
    return logger
