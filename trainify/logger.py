# trainify/logger.py

"""
Logger configuration for Trainify AI.

Image and playback messages are bound to the action key they concern
(`workout-3`, `day-2`, ...). Both sinks print that key next to the source
location, so one block's history can be followed by grepping for its key.
Records logged without a key show `-`.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger


NO_ACTION_KEY = "-"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<magenta>{extra[action_key]}</magenta> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {extra[action_key]} - {message}"


def action_logger(key: str):
    """Returns a logger whose records carry `key` as their action key."""
    return logger.bind(action_key=key)


def setup_logger(
    level: str = "INFO",
    log_file: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Configure loguru with a console sink and an optional rotating file sink.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a log file. If None, only console logging.
        rotation: Log rotation size (e.g., "10 MB", "1 day")
        retention: Log retention period (e.g., "7 days", "1 month")
    """
    logger.remove()
    logger.configure(extra={"action_key": NO_ACTION_KEY})

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
        )

    logger.info(f"Logger initialized with level={level}")
