# typedconf/core/utils/logger.py

"""
Logging configuration and utilities for typedconf.

This module provides the diagnostics sink used by the configuration core.
Registries, the section store and the exit hook report what they do through
the helpers defined here, so every message shares the same format and ends
up on the same handlers.

The logging system is designed to provide:
- Consistent log formatting across all modules
- Console output with optional file output
- Structured messages tagged with the emitting module
- Configuration change and store operation tracking

Key Features:
- Global logger instance with lazy initialization
- Default level taken from the TYPEDCONF_LOG_LEVEL environment variable
- Standardized "[MODULE] message | Context: ..." format
"""

import logging
import os
import sys
from typing import Any

# Global logger instance for singleton pattern
# This ensures all modules use the same logger configuration
_logger: logging.Logger | None = None

LOGGER_NAME = "typedconf"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _default_level() -> str:
    return os.getenv("TYPEDCONF_LOG_LEVEL", DEFAULT_LOG_LEVEL)


class _StderrHandler(logging.StreamHandler):
    """Stream handler bound to whatever ``sys.stderr`` is when a record is emitted."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, _value) -> None:
        pass


def setup_logging(
    level: str | None = None,
    log_file: str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """
    Set up logging configuration for typedconf.

    This function initializes the global logging system with console and
    optional file output. It creates a singleton logger instance that
    can be used throughout the package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Falls
               back to TYPEDCONF_LOG_LEVEL, then INFO.
        log_file: Path to log file (optional). If provided, logs will be
                 written to both console and file.
        format_string: Custom log format string (optional). Uses default
                      format if not provided.

    Returns:
        Configured logger instance

    Note:
        Calling this again replaces the handlers of the existing logger,
        so it can be used to reconfigure the sink at runtime.
    """
    global _logger

    resolved_level = getattr(logging, (level or _default_level()).upper())

    logger = logging.getLogger(LOGGER_NAME)
    logger.disabled = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(resolved_level)

    formatter = logging.Formatter(format_string or DEFAULT_LOG_FORMAT)

    console_handler = _StderrHandler()
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(resolved_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """
    Get the global logger instance.

    If the logger hasn't been initialized yet, it will be set up
    with default configuration.

    Returns:
        The global logger instance
    """
    if _logger is None:
        return setup_logging()
    return _logger


def _format(module: str, message: str, context: str) -> str:
    formatted = f"[{module.upper()}] {message}"
    if context:
        formatted += f" | Context: {context}"
    return formatted


def log_error(
    module: str, error: str, context: str = "", exception: Exception | None = None
) -> None:
    """
    Log a standardized error message.

    Args:
        module: Name of the module where the error occurred
        error: Error message describing what went wrong
        context: Additional context information (optional)
        exception: Exception object to include stack trace (optional)
    """
    logger = get_logger()
    message = _format(module, error, context)
    if exception is not None:
        logger.error(message, exc_info=exception)
    else:
        logger.error(message)
    for handler in logger.handlers:
        try:
            handler.flush()
        except Exception:
            continue


def log_warning(module: str, warning: str, context: str = "") -> None:
    """
    Log a standardized warning message.

    Args:
        module: Name of the module where the warning occurred
        warning: Warning message describing the potential issue
        context: Additional context information (optional)
    """
    get_logger().warning(_format(module, warning, context))


def log_info(module: str, message: str, context: str = "") -> None:
    """
    Log a standardized info message.

    Args:
        module: Name of the module where the info occurred
        message: Informational message
        context: Additional context information (optional)
    """
    get_logger().info(_format(module, message, context))


def log_debug(module: str, message: str, context: str = "") -> None:
    """
    Log a standardized debug message.

    Args:
        module: Name of the module where the debug occurred
        message: Debug message with detailed information
        context: Additional context information (optional)
    """
    get_logger().debug(_format(module, message, context))


def log_configuration_change(setting: str, old_value: Any, new_value: Any) -> None:
    """
    Log a configuration change.

    Args:
        setting: Name of the setting that changed
        old_value: Previous value of the setting
        new_value: New value of the setting
    """
    get_logger().info(f"Configuration changed: {setting} = {old_value!r} -> {new_value!r}")


def log_file_operation(
    operation: str, file_path: str, success: bool, error: str | None = None
) -> None:
    """
    Log a file operation.

    Args:
        operation: Type of operation (read, write, create, etc.)
        file_path: Path to the file being operated on
        success: Whether the operation was successful
        error: Error message if the operation failed (optional)
    """
    logger = get_logger()
    if success:
        logger.debug(f"File {operation}: {file_path}")
    else:
        logger.error(f"File {operation} failed: {file_path} - {error}")
