"""Universal debug/logging utility for renamer.

Provides setup_logger() and debug() for consistent logging. Debug output is
controlled by the RENAMER_DEBUG environment variable. Logs go to stderr;
user-facing output goes through the Rich console instead.
"""

import logging
import os
from typing import Optional

DEBUG_ON = os.getenv("RENAMER_DEBUG", "0") == "1"

_logger: Optional[logging.Logger] = None


def setup_logger() -> logging.Logger:
    global _logger
    if _logger is not None:
        return _logger
    logger = logging.getLogger("renamer")
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(levelname)s] %(asctime)s %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if DEBUG_ON else logging.WARNING)
    _logger = logger
    return logger


def debug(msg: str) -> None:
    """Log a debug message if debugging is enabled."""
    if DEBUG_ON:
        setup_logger().debug(msg)
