"""Loguru setup for the CLI.

The library itself only emits records through ``loguru.logger``; this module
decides where they go: a stderr sink (text or JSON lines) and, when a
directory is configured, a size-rotated log file.
"""

import sys
from pathlib import Path

from loguru import logger

_TEXT_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level:<7}</level> | {name}:{line} | {message}"
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<7} | {name}:{function}:{line} | {message}"

LOG_FILE_NAME = "blockpalettes.log"


def setup_logging(log_level: str = "INFO", log_dir: str | None = None, *, json_logs: bool = False) -> None:
    """Replace Loguru's default sink with the client's sinks.

    Args:
        log_level: Minimum level to emit, case-insensitive.
        log_dir: Optional directory for ``blockpalettes.log``; the file is
            rotated at 10 MB and the last 3 files are kept.
        json_logs: Serialize stderr records as JSON lines.
    """
    level = log_level.upper()
    logger.remove()
    if json_logs:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=_TEXT_FORMAT, colorize=None)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / LOG_FILE_NAME,
            level=level,
            format=_FILE_FORMAT,
            rotation="10 MB",
            retention=3,
            encoding="utf-8",
        )
