"""Where: platform/logging/config.py
What: Build the ``mbws`` logger with a Rich console handler and an optional rotating file.
Why: Library callers see only warnings on stderr unless they opt into a log file.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final

from rich.console import Console

from mbws.config.paths import configured_log_file

from .handlers import WS2RichHandler


LOGGER_NAME: Final[str] = "mbws"
FILE_FORMAT: Final[str] = "%(asctime)s %(levelname)-8s %(name)s [%(ws2_event)s] %(message)s"
_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_BACKUPS: Final[int] = 3


class _EventDefaultFilter(logging.Filter):
    """Give records without a ``ws2_event`` extra a placeholder for the file format."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "ws2_event"):
            record.ws2_event = "-"
        return True


def _file_handler(path: Path, level: int) -> RotatingFileHandler:
    target = Path(path).expanduser().resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(target, maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8")
    handler.setLevel(level)
    handler.addFilter(_EventDefaultFilter())
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def setup_logger(
    log_file: Path | None = None,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """(Re)configure the package logger.

    Existing handlers are closed first, so calling this again replaces the
    previous setup instead of stacking handlers.

    Args:
        log_file: Rotating log destination; ``None`` keeps output on the console.
        console_level: Threshold for the stderr Rich handler.
        file_level: Threshold for the file handler.
    """
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(logging.DEBUG)
    while package_logger.handlers:
        stale = package_logger.handlers.pop()
        stale.close()

    console_handler = WS2RichHandler(console=Console(stderr=True, soft_wrap=True))
    console_handler.setLevel(console_level)
    package_logger.addHandler(console_handler)

    if log_file is not None:
        package_logger.addHandler(_file_handler(log_file, file_level))
    return package_logger


logger: Final[logging.Logger] = setup_logger(log_file=configured_log_file())


__all__ = ["LOGGER_NAME", "setup_logger", "logger"]
