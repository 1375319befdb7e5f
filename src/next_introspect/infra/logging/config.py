from __future__ import annotations

"""
Logging Configuration Models.

Settings consumed by the logging bootstrap. The CLI builds one of these
from its flags; library callers may build their own or leave logging
entirely to the host application.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

# Accepted level names (case-insensitive) -> numeric levels
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable logging bootstrap settings.

    Attributes:
        level: Minimum severity captured by every handler.
        console: Emit records on stderr. Stdout is reserved for rendered output.
        log_file: Optional path of a rotating diagnostic log.
        max_bytes: Size threshold before the log file rotates.
        backup_count: Rotated files kept on disk.
        console_fmt: Record layout on stderr.
        file_fmt: Record layout in the log file.
        datefmt: Timestamp layout in the log file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024  # 1MB
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
