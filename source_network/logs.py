"""
Logging setup on top of Loguru.

Library modules just `from loguru import logger` and emit; the CLI calls
configure_logging() once to pick the level and an optional log file.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"


def configure_logging(level: str = "INFO", log_file: Optional[Union[str, Path]] = None):
    """Replace loguru's default sink with a console sink and, optionally, a file."""
    logger.remove()
    level = level.upper()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)
    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, format=FILE_FORMAT, level=level, rotation="10 MB", encoding="utf-8")
    return logger
