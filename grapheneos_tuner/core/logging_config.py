"""Logging configuration for GrapheneOS Tuner.

This module sets up structured logging with file rotation,
separate logs for different concerns (main, issues).
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from grapheneos_tuner.core.models import Issue

# Log format constants
DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DETAILED_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(filename)s:%(lineno)d | %(message)s"
SIMPLE_FORMAT = "%(levelname)s: %(message)s"

# Default settings
DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_BACKUP_COUNT = 5

ROOT_LOGGER_NAME = "grapheneos_tuner"


class TunerLogger:
    """Centralized logger management for GrapheneOS Tuner.

    Manages multiple log files for different concerns:
        - main.log: General application logging
        - issues.log: Every classified issue and per-run totals
    """

    _instance: Optional["TunerLogger"] = None
    _initialized: bool = False

    def __new__(cls) -> "TunerLogger":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if self._initialized:
            return

        self.logs_dir: Path | None = None
        self.log_level: int = DEFAULT_LOG_LEVEL
        self.loggers: dict[str, logging.Logger] = {}
        self._initialized = True

    def setup(
        self,
        logs_dir: Path,
        log_level: int = DEFAULT_LOG_LEVEL,
        console_output: bool = True,
    ) -> None:
        """Initialize logging with specified configuration.

        Args:
            logs_dir: Directory for log files.
            log_level: Logging level (e.g., logging.INFO).
            console_output: Whether to also log to console.
        """
        self.logs_dir = logs_dir
        self.log_level = log_level

        logs_dir.mkdir(parents=True, exist_ok=True)

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(log_level)

        # Clear any existing handlers
        for handler in list(root_logger.handlers):
            handler.close()
        root_logger.handlers.clear()

        main_handler = self._create_file_handler(
            logs_dir / "main.log",
            DETAILED_FORMAT,
        )
        root_logger.addHandler(main_handler)

        # Console output goes to stderr so reports on stdout stay parseable
        if console_output:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(log_level)
            console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))
            root_logger.addHandler(console_handler)

        self.loggers["main"] = root_logger

        self._setup_issue_logger(logs_dir)

    def _create_file_handler(
        self,
        log_path: Path,
        format_string: str,
        max_bytes: int = DEFAULT_MAX_BYTES,
        backup_count: int = DEFAULT_BACKUP_COUNT,
    ) -> RotatingFileHandler:
        """Create a rotating file handler.

        Args:
            log_path: Path to the log file.
            format_string: Log format string.
            max_bytes: Maximum file size before rotation.
            backup_count: Number of backup files to keep.

        Returns:
            Configured RotatingFileHandler.
        """
        handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        handler.setLevel(self.log_level)
        handler.setFormatter(logging.Formatter(format_string))
        return handler

    def _setup_issue_logger(self, logs_dir: Path) -> None:
        """Setup the issue-specific logger."""
        logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.issues")
        logger.setLevel(self.log_level)
        logger.propagate = False  # Don't also log to main

        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

        handler = self._create_file_handler(
            logs_dir / "issues.log",
            "%(asctime)s | %(levelname)-8s | ISSUE | %(message)s",
        )
        logger.addHandler(handler)
        self.loggers["issues"] = logger

    def get_logger(self, name: str = "main") -> logging.Logger:
        """Get a logger by name.

        Args:
            name: Logger name ("main", "issues").

        Returns:
            The requested logger, or a child of the main logger.
        """
        if name in self.loggers:
            return self.loggers[name]

        if name == "main":
            return logging.getLogger(ROOT_LOGGER_NAME)
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


# Global logger instance
_logger_manager = TunerLogger()


def setup_logging(
    logs_dir: Path,
    log_level: int = DEFAULT_LOG_LEVEL,
    console_output: bool = True,
) -> None:
    """Initialize the logging system.

    This should be called once at application startup.

    Args:
        logs_dir: Directory for log files.
        log_level: Logging level (default: INFO).
        console_output: Whether to also log to console (default: True).
    """
    _logger_manager.setup(logs_dir, log_level, console_output)


def get_logger(name: str = "main") -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name. Options:
            - "main": General application logging
            - "issues": Classified issue logging

    Returns:
        Logger instance.
    """
    return _logger_manager.get_logger(name)


def log_issue(issue: Issue) -> None:
    """Log a classified issue.

    Args:
        issue: The issue to record.
    """
    logger = get_logger("issues")
    logger.info(f"{issue.category.value} | {issue.summary} | {issue.source_line}")


def log_classification_result(
    source_name: str,
    line_count: int,
    issue_count: int,
    duration_ms: float,
) -> None:
    """Log the outcome of classifying one input.

    Args:
        source_name: Name of the input (file path or "<stdin>").
        line_count: Number of lines classified.
        issue_count: Number of issues found.
        duration_ms: Classification duration in milliseconds.
    """
    logger = get_logger("issues")
    logger.info(
        f"{source_name} | Found {issue_count} issues in {line_count} lines "
        f"in {duration_ms:.1f}ms"
    )
