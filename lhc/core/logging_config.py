# lhc/core/logging_config.py
"""Logging configuration for the LHC service."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from lhc.core.exceptions import LHCException

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"


class StructuredFormatter(logging.Formatter):
    """Formatter that exposes ``LHCException.context`` as ``ctx_*`` record attributes."""

    def format(self, record: logging.LogRecord) -> str:
        if record.exc_info and isinstance(record.exc_info[1], LHCException):
            exc = record.exc_info[1]
            for key, value in exc.context.items():
                setattr(record, f"ctx_{key}", value)
        return super().format(record)


def configure_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
) -> None:
    """Configure the root logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for a second, UTF-8 encoded handler
        format_string: Custom format string (uses ``DEFAULT_FORMAT`` if None)
    """
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    numeric_level = getattr(logging, str(level).upper(), logging.INFO)
    root.setLevel(numeric_level)

    formatter = StructuredFormatter(format_string or DEFAULT_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(numeric_level)
    root.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(numeric_level)
        root.addHandler(file_handler)


__all__ = ["DEFAULT_FORMAT", "StructuredFormatter", "configure_logging"]
