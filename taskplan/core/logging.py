"""Structured logging configuration for the task planner.

This module wires the standard library logging package for both the CLI
runner and the HTTP service:
- JSON structured records for files and non-debug consoles
- Colored console output while debugging
- Rotating file handler (10MB max, 5 backups)
- Scoped structured context (dataset name, stage) via ``LogContext``

Algorithms attach counters to their records with
``extra={"context": {...}}`` so that a JSON log line carries the full
work profile of a run.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, ClassVar

from taskplan.core.config import settings


class LogLevel(str, Enum):
    """Log level enumeration for type-safe log level configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Merge scoped context (LogContext) with per-call ``extra`` context."""
    scope = getattr(record, "log_scope", None) or {}
    context = getattr(record, "context", None) or {}
    return {**scope, **context}


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Format:
        {
            "timestamp": "2025-01-12T10:30:45.123Z",
            "level": "DEBUG",
            "logger": "taskplan.services.planning.scc",
            "message": "SCC detection completed",
            "service": "Task Planner API",
            "version": "0.1.0",
            "context": {"components": 4, "dfs_visits": 16}
        }
    """

    def __init__(
        self,
        service_name: str = "TaskPlanner",
        service_version: str = "0.1.0",
    ) -> None:
        super().__init__()
        self.service_name = service_name
        self.service_version = service_version

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a single JSON line.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "version": self.service_version,
        }

        context = record_context(record)
        if context:
            log_entry["context"] = context

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        # Source location only matters once something went wrong
        if record.levelno >= logging.ERROR:
            log_entry["source"] = {
                "function": record.funcName,
                "line": record.lineno,
                "file": record.pathname,
            }

        return json.dumps(log_entry, default=str, ensure_ascii=False)


class ColoredConsoleFormatter(logging.Formatter):
    """Colored, human-readable console formatter for debugging sessions."""

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[41m",  # Red background
    }
    RESET: ClassVar[str] = "\033[0m"

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        log_color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{log_color}{record.levelname}{self.RESET}"

        context = record_context(record)
        if context:
            record.msg = f"{record.msg} | Context: {json.dumps(context, default=str)}"

        return super().format(record)


def setup_logging(
    log_level: str | None = None,
    log_file: str | None = None,
    service_name: str = "TaskPlanner",
    enable_json: bool = True,
    enable_console: bool = True,
) -> logging.Logger:
    """Configure root logging with file and console handlers.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                   Defaults to settings.LOG_LEVEL
        log_file: Path to log file. Defaults to logs/app.log
        service_name: Name of the service for log metadata
        enable_json: Enable JSON formatting for file handler
        enable_console: Enable console output handler

    Returns:
        Configured root logger instance

    Examples:
        >>> logger = setup_logging(log_level="INFO")
        >>> logger.info("Planner started", extra={"context": {"datasets": 9}})
    """
    if log_level is None:
        log_level = settings.LOG_LEVEL

    log_file_path: Path
    if log_file is None:
        log_dir = Path("logs")
        log_dir.mkdir(exist_ok=True)
        log_file_path = log_dir / "app.log"
    else:
        log_file_path = Path(log_file)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)

    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    file_handler = RotatingFileHandler(
        filename=str(log_file_path),
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)

    if enable_json:
        file_handler.setFormatter(JSONFormatter(service_name=service_name))
    else:
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    logger.addHandler(file_handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)

        if settings.DEBUG:
            console_handler.setFormatter(ColoredConsoleFormatter())
        else:
            console_handler.setFormatter(JSONFormatter(service_name=service_name))

        logger.addHandler(console_handler)

    logger.info(
        f"Logging initialized - Level: {log_level}, File: {log_file_path}",
        extra={
            "context": {
                "log_level": log_level,
                "log_file": str(log_file_path),
                "service": service_name,
            }
        },
    )

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Logger instance

    Examples:
        >>> from taskplan.core.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Processing dataset")
    """
    return logging.getLogger(name)


class LogContext:
    """Scope structured context onto every log record created inside it.

    Examples:
        >>> logger = get_logger(__name__)
        >>> with LogContext(logger, dataset="small_dag.json"):
        ...     logger.info("Building plan")
        # Record carries context {"dataset": "small_dag.json"}
    """

    def __init__(self, logger: logging.Logger, **context: Any) -> None:
        self.logger = logger
        self.context = context
        self.old_factory = logging.getLogRecordFactory()

    def __enter__(self) -> None:
        def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
            record = self.old_factory(*args, **kwargs)
            scope = getattr(record, "log_scope", {})
            record.log_scope = {**scope, **self.context}
            return record

        logging.setLogRecordFactory(record_factory)

    def __exit__(self, *args: Any) -> None:
        logging.setLogRecordFactory(self.old_factory)


__all__ = [
    "ColoredConsoleFormatter",
    "JSONFormatter",
    "LogContext",
    "LogLevel",
    "get_logger",
    "record_context",
    "setup_logging",
]
