"""Logging setup for astatine.

Sends the ``astatine`` logger to a rotating file under the platform log
directory, plus stderr for non-interactive commands. ``ASTATINE_LOG_LEVEL``
overrides the level passed in by the caller.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FILENAME = "astatine.log"
LOG_LEVEL_ENV = "ASTATINE_LOG_LEVEL"


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def setup_logging(
    level_name: str | None = None,
    *,
    stream: bool = False,
    log_path: Path | None = None,
) -> logging.Logger:
    """Configure the ``astatine`` logger.

    The environment variable wins over ``level_name``. Logs go to a rotating
    file; a stderr handler is added only when ``stream`` is set, since the
    interactive UI owns the terminal.
    """
    level_name = (os.environ.get(LOG_LEVEL_ENV) or level_name or "INFO").upper().strip()
    level = getattr(logging, level_name, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    logger = logging.getLogger(APP_NAME)
    logger.setLevel(level)

    if stream and not any(type(h) is logging.StreamHandler for h in logger.handlers):
        sh = logging.StreamHandler()
        sh.setLevel(level)
        sh.setFormatter(fmt)
        logger.addHandler(sh)

    target = log_path if log_path is not None else default_log_path()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        if not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
            fh = RotatingFileHandler(
                str(target),
                maxBytes=1_000_000,
                backupCount=3,
                encoding="utf-8",
            )
            fh.setLevel(level)
            fh.setFormatter(fmt)
            logger.addHandler(fh)
    except OSError:
        # Read-only home: keep running without a log file.
        pass

    return logger
