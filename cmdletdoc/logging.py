"""Logging utilities for cmdletdoc runs.

Besides the logger setup this module owns the layout of the warning report
printed at the end of a run: one ``Warning: <member>`` header per documented
member followed by its indented warning texts.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

_LOGGER_NAME = "cmdletdoc"
_CONSOLE_FORMAT = "[cmdletdoc] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

WARNING_HEADER = "Warning: %s"
WARNING_DETAIL = "    %s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the cmdletdoc hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send cmdletdoc records to stderr and, optionally, to ``log_file``.

    Verbose runs log at DEBUG so discovered cmdlet types and assembly steps
    become visible; the warning report is emitted at WARNING either way.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_handler(logging.StreamHandler(), level, _CONSOLE_FORMAT))
    if log_file is not None:
        logger.addHandler(_handler(logging.FileHandler(log_file, encoding="utf-8"), level, _FILE_FORMAT))
    return logger


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def log_warning_group(logger: logging.Logger, name: str, texts: Iterable[str]) -> None:
    """Log one member's warnings in report layout."""
    logger.warning(WARNING_HEADER, name)
    for text in texts:
        logger.warning(WARNING_DETAIL, text)


__all__ = [
    "WARNING_DETAIL",
    "WARNING_HEADER",
    "configure_logging",
    "get_logger",
    "log_warning_group",
]
