"""Logger setup for applications embedding the game core."""

import logging
from pathlib import Path
from typing import Optional

LOGGER_NAME = "chess_companion"
DEFAULT_LOG_DIR = Path.home() / ".chess_companion"


def setup_logger(debug: bool = False, log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        debug: If True, log at DEBUG level; otherwise INFO level
        log_file: File to log to. None logs to stderr; pass
            DEFAULT_LOG_DIR / "game.log" for the usual location.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    logger.handlers.clear()

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, mode='a')
    else:
        handler = logging.StreamHandler()

    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
