"""Logging setup. The default stderr sink would draw over the terminal UI."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

DEFAULT_LOG_FILE = Path.home() / ".bucketstui.log"
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Route loguru output to a rotating log file."""
    logger.remove()
    if log_file == "-":
        logger.add(sys.stderr, level=level, format=LOG_FORMAT)
        return

    path = Path(log_file).expanduser() if log_file else DEFAULT_LOG_FILE
    logger.add(path, level=level, format=LOG_FORMAT, rotation="5 MB", retention=3)
