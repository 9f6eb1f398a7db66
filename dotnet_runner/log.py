"""
Logging configuration for dotnet-runner.

This module handles the centralized logging configuration including:
- Console and rotating file output handlers
- Logger retrieval with consistent formatting
- The append-only command log that records every command handed to the runner
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Union

# Global debug flag
_DEBUG_MODE = False

# Default log format with detailed context
_DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s.%(funcName)s:%(lineno)d | %(message)s"

# Simplified format for console in normal mode
_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Command log lines: timestamp, label, command text
_COMMAND_FORMAT = "%(asctime)s | %(label)s | %(message)s"

COMMAND_LOGGER_NAME = "dotnet_runner.commands"
COMMAND_LOG_FILE = "commands.log"

# Color formatting for console output
_LOG_COLORS = {
    "DEBUG": "\033[94m",  # Blue
    "INFO": "\033[92m",  # Green
    "WARNING": "\033[93m",  # Yellow
    "ERROR": "\033[91m",  # Red
    "CRITICAL": "\033[91m\033[1m",  # Bold Red
    "RESET": "\033[0m",  # Reset
}


class ColorFormatter(logging.Formatter):
    """Formatter that adds colors to log levels for console output."""

    def format(self, record):
        levelname = record.levelname
        if levelname in _LOG_COLORS:
            record.levelname = (
                f"{_LOG_COLORS[levelname]}{levelname}{_LOG_COLORS['RESET']}"
            )
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.

    Args:
        name: Logger name, typically __name__ of the calling module

    Returns:
        A logger instance
    """
    return logging.getLogger(name)


def set_debug_mode(enabled: bool) -> None:
    """
    Set the global debug mode flag.

    Args:
        enabled: True to enable debug mode, False to disable
    """
    global _DEBUG_MODE
    _DEBUG_MODE = enabled
    logging.getLogger("dotnet_runner").setLevel(
        logging.DEBUG if enabled else logging.INFO
    )


def is_debug_mode() -> bool:
    """Check if debug mode is currently enabled."""
    return _DEBUG_MODE


def configure_logging(
    log_dir: Optional[Union[str, Path]] = None,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    debug: bool = False,
) -> None:
    """
    Configure the central logging system with console and file outputs.

    The console stays quiet by default because command output is streamed to
    the same terminal; the file handler captures everything.

    Args:
        log_dir: Directory to store log files; console only when omitted
        console_level: Logging level for console output
        file_level: Logging level for file output
        max_file_size_mb: Maximum size of each log file in MB before rotation
        backup_count: Number of backup log files to keep
        debug: Enable debug mode (DEBUG level for the package logger)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all logs and let handlers filter

    # Clear any existing handlers to avoid duplicates if reconfigured
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    set_debug_mode(debug)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if debug else console_level)
    console_handler.setFormatter(ColorFormatter(_CONSOLE_FORMAT))
    root_logger.addHandler(console_handler)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(exist_ok=True, parents=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_path / "dotnet-runner.log",
            maxBytes=max_file_size_mb * 1024 * 1024,  # Convert MB to bytes
            backupCount=backup_count,
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        root_logger.addHandler(file_handler)

    logging.getLogger("dotnet_runner").debug(
        f"Logging initialized (console: {logging.getLevelName(console_handler.level)}, "
        f"files: {log_dir or 'disabled'})"
    )


def get_command_logger(log_dir: Union[str, Path]) -> logging.Logger:
    """
    Get the append-only command log writing to ``<log_dir>/commands.log``.

    Records are written with a ``label`` extra, e.g.
    ``logger.info(command, extra={"label": "build"})``. The handler is
    attached once, so repeated calls are safe. Pointing the logger at a
    different directory replaces the previous file handler.

    Args:
        log_dir: Directory holding the command log

    Returns:
        The command logger
    """
    log_path = Path(log_dir)
    log_path.mkdir(exist_ok=True, parents=True)
    log_file = (log_path / COMMAND_LOG_FILE).resolve()

    logger = logging.getLogger(COMMAND_LOGGER_NAME)
    logger.setLevel(logging.INFO)
    logger.propagate = False

    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.FileHandler):
            continue
        if Path(handler.baseFilename) == log_file:
            return logger
        logger.removeHandler(handler)
        handler.close()

    handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(_COMMAND_FORMAT))
    logger.addHandler(handler)
    return logger
