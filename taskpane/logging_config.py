"""Logging setup for TaskPane.

Every module logs through ``get_logger(__name__)``. ``setup_logging`` is
called once by the entry point and sends records either to a rotating file
under ``~/.taskpane/logs`` or, in dev mode, to the Textual console.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


LOG_DIR = Path.home() / ".taskpane" / "logs"
LOG_FILE = LOG_DIR / "taskpane.log"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_BYTES = 5 * 1024 * 1024  # 5MB
BACKUP_COUNT = 3

LEVEL_ENV_VAR = "TASKPANE_LOG_LEVEL"


def _resolve_level(log_level: Optional[str]) -> tuple[str, int]:
    """Return the level name and number, falling back to INFO."""
    name = (log_level or os.getenv(LEVEL_ENV_VAR) or "INFO").upper()
    number = getattr(logging, name, None)
    if not isinstance(number, int):
        return "INFO", logging.INFO
    return name, number


def _build_handler(use_textual_handler: bool) -> logging.Handler:
    if use_textual_handler:
        from textual.logging import TextualHandler

        return TextualHandler()

    LOG_DIR.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        LOG_FILE,
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8"
    )


def setup_logging(
    log_level: Optional[str] = None,
    use_textual_handler: bool = False
) -> None:
    """Configure the root logger.

    Calling it again replaces the previous handler.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL. When None the
                  TASKPANE_LOG_LEVEL environment variable is used. Unknown
                  names fall back to INFO.
        use_textual_handler: Log to the Textual dev console instead of the
                            log file.
    """
    level_name, level = _resolve_level(log_level)

    handler = _build_handler(use_textual_handler)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    for old_handler in root_logger.handlers[:]:
        root_logger.removeHandler(old_handler)
        old_handler.close()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    logging.getLogger(__name__).info(
        f"Logging initialized: level={level_name}, "
        f"target={'textual' if use_textual_handler else LOG_FILE}"
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger named after the calling module.

    Args:
        name: Module name, typically __name__

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
