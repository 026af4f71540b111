"""
Logging for the sunshift command.

Progress and the per-tick diagnostics printed with -v go to stdout;
configuration and display errors go to stderr so they stay visible when
stdout is redirected. The level comes from LOG_LEVEL.
"""

import logging
import sys
from sunshift.config import LOG_LEVEL


class LevelFilter(logging.Filter):
    """Pass only records whose level lies in [level_min, level_max]."""

    def __init__(self, level_min: int, level_max: int):
        super().__init__()
        self.level_min = level_min
        self.level_max = level_max

    def filter(self, record: logging.LogRecord) -> bool:
        return self.level_min <= record.levelno <= self.level_max


def setup_logging(level: str = LOG_LEVEL) -> logging.Logger:
    """
    Configure the "sunshift" logger.

    Args:
        level: Logger level name (DEBUG, INFO, WARNING, ERROR)

    Returns:
        The configured logger
    """
    logger = logging.getLogger("sunshift")
    logger.setLevel(level)
    logger.propagate = False

    # Called again on config reload, start from a clean handler list
    logger.handlers.clear()

    # Adjustment progress and -v diagnostics
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(LevelFilter(logging.DEBUG, logging.INFO))

    # Configuration, clock and backend failures
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)

    # "2025-01-15 14:30:45 - sunshift - INFO - Color temperature: 5500K"
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    stdout_handler.setFormatter(formatter)
    stderr_handler.setFormatter(formatter)

    logger.addHandler(stdout_handler)
    logger.addHandler(stderr_handler)

    return logger


def enable_verbose(logger: logging.Logger) -> None:
    """Lower the level to INFO so -v diagnostics show even with LOG_LEVEL=WARNING."""
    if logger.level > logging.INFO:
        logger.setLevel(logging.INFO)


logger = setup_logging()
