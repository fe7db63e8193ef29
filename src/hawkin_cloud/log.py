"""
Logging setup for the hawkin_cloud package.

Modules log through logging.getLogger(__name__); configure_logging()
attaches console and/or rotating file handlers to the package logger.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler

from hawkin_cloud.sdk.exceptions import ConfigError

PACKAGE_LOGGER = "hawkin_cloud"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s - %(message)s"
LOG_MAX_BYTES = 10485760  # 10MB
LOG_BACKUP_COUNT = 5

OUTPUTS = ("stdout", "file", "both")

# TRACE sits below DEBUG; FATAL and WARN are the usual aliases
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LEVELS = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "FATAL": logging.CRITICAL,
    "CRITICAL": logging.CRITICAL,
}


def parse_level(level) -> int:
    """Level name (case-insensitive) or number to a logging level."""
    if isinstance(level, int) and not isinstance(level, bool):
        return level
    try:
        return LEVELS[str(level).upper()]
    except KeyError:
        raise ConfigError(
            f"Invalid log level {level!r}. Must be one of: {', '.join(LEVELS)}"
        )


def configure_logging(
    output: str = "stdout",
    stdout_level="INFO",
    log_file: str = "hawkin_cloud.log",
    file_level="INFO",
) -> logging.Logger:
    """
    Route package logs to the console, a rotating file, or both.

    Calling it again replaces the handlers set by the previous call.

    Args:
        output: "stdout", "file" or "both"
        stdout_level: Threshold for console output
        log_file: Path of the log file (rotated at 10MB, 5 backups)
        file_level: Threshold for file output

    Returns:
        The package logger
    """
    if output not in OUTPUTS:
        raise ConfigError(f"Invalid log output {output!r}. Must be one of: {', '.join(OUTPUTS)}")

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    levels = []
    if output in ("stdout", "both"):
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(parse_level(stdout_level))
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console)
        levels.append(console.level)

    if output in ("file", "both"):
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(parse_level(file_level))
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)
        levels.append(file_handler.level)

    logger.setLevel(min(levels))
    logger.propagate = False
    return logger
