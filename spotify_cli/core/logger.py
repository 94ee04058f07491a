"""
Logging configuration for spotify-cli.

This module sets up the logging system with two outputs:
    - Console: Colored, compact messages at the configured level
    - Log file: Every event (DEBUG and above) with timestamps,
      rotated when it grows past LOG_MAX_BYTES

Command results are printed with click.echo; logging only carries
diagnostics, so the console level defaults to WARNING and --verbose
lowers it to DEBUG.

Usage:
    from spotify_cli.core.logger import setup_logging, get_logger

    setup_logging(config.logging.file, config.logging.level)  # Call once at startup
    logger = get_logger(__name__)  # Get logger for each module

    logger.debug("Fetching current playback")
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import TextIO

import colorama
from colorama import Fore, Style
from tqdm import tqdm


# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 3

# Chatty third-party loggers, capped at WARNING
EXTERNAL_LOGGERS = ("spotipy", "urllib3", "requests")


class ColoredConsoleFormatter(logging.Formatter):
    """
    Formatter that adds colors to console output.

    Colors:
        - DEBUG: Blue
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bright Red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Fore.BLUE,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Style.BRIGHT + Fore.RED,
    }

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record as "LEVEL: message".

        Args:
            record: The log record to format.

        Returns:
            Formatted string, with the level name colored when enabled.
        """
        if self.use_colors:
            color = self.LEVEL_COLORS.get(record.levelno, Fore.WHITE)
            levelname = f"{color}{record.levelname}{Style.RESET_ALL}"
        else:
            levelname = record.levelname

        message = f"{levelname}: {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes through tqdm.write().

    tqdm.write() resolves the target stream at emit time, so console
    diagnostics follow sys.stderr even when it is swapped after setup
    (as click's test runner does).

    Attributes:
        stream: The output stream (defaults to sys.stderr).
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        """
        Initialize the tqdm-compatible handler.

        Args:
            stream: Output stream for log messages. Defaults to the
                    current sys.stderr at emit time.
        """
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream or sys.stderr)
        except Exception:
            self.handleError(record)


def setup_logging(
    log_file: Path | None,
    level: str = "WARNING",
    colored: bool = True
) -> None:
    """
    Configure the logging system for the application.

    This function should be called ONCE at application startup, after
    the configuration is loaded but before any other operations.

    Args:
        log_file: Path of the rotating log file, or None to disable
                  file logging. Parent directories are created.
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        colored: Whether console output uses colors.

    Behavior:
        1. Configure root logger level to DEBUG and drop old handlers
        2. Add console handler (TqdmLoggingHandler) at the given level
        3. Add RotatingFileHandler at DEBUG when log_file is given
        4. Cap third-party loggers at WARNING
    """
    colorama.just_fix_windows_console()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    console_handler = TqdmLoggingHandler()
    console_handler.setLevel(getattr(logging, level.upper(), logging.WARNING))
    console_handler.setFormatter(ColoredConsoleFormatter(use_colors=colored))
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
        root_logger.addHandler(file_handler)

    for name in EXTERNAL_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        f"Logging initialized - Level: {level.upper()}, File: {log_file}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Loggers obtained before setup_logging() is called have no handlers
    of their own and only reach whatever the root logger has.

    Example:
        logger = get_logger(__name__)
        logger.info("Module initialized")
    """
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """
    Flush, close and remove all root logger handlers.

    Called at CLI exit. After calling this function, logging produces
    no output until setup_logging() runs again.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        try:
            handler.flush()
            handler.close()
        except (OSError, ValueError):
            pass
        root_logger.removeHandler(handler)
