"""
Logging setup for Oracle using Python's standard logging
with JSON formatting for structured logs.

Log destinations:
- Console (stderr): Human-readable format for debugging. stdout is never used,
  it carries the MCP stdio channel and CLI answers.
- $ORACLE_LOG_DIR/oracle.jsonl: JSON format for request lifecycle events
- $ORACLE_LOG_DIR/errors.jsonl: JSON format for error tracking
"""

from __future__ import annotations

import logging
import logging.handlers
import pathlib
import sys
import uuid

from typing import Any

from pythonjsonlogger import json as jsonlogger

from oracle_mcp.core.constants import (
    LOG_BACKUP_COUNT_ERRORS,
    LOG_BACKUP_COUNT_REQUESTS,
    LOG_MAX_SIZE,
    LOG_PREVIEW_LENGTH,
    RUN_ID_LENGTH,
)


class RequestFilter(logging.Filter):
    """Filter to allow INFO and above into the request log"""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.INFO


class ErrorFilter(logging.Filter):
    """Filter to only allow ERROR and CRITICAL logs"""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def setup_logging(
    name: str = "oracle",
    debug: bool = False,
    log_dir: str | pathlib.Path | None = None,
) -> logging.Logger:
    """
    Set up logging with a console handler and optional JSON file handlers.

    Args:
        name: Logger name
        debug: Enable debug logging
        log_dir: Directory for JSON log files, None for console only

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)  # Capture all, filter at handler level
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # --- Console Handler (Human-readable) ---
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)8s] %(name)s - %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logger.addHandler(console_handler)

    if not log_dir:
        return logger

    directory = pathlib.Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)

    # --- Request Log Handler (JSON) ---
    request_handler = logging.handlers.RotatingFileHandler(
        directory / "oracle.jsonl",
        maxBytes=LOG_MAX_SIZE,
        backupCount=LOG_BACKUP_COUNT_REQUESTS,
    )
    request_handler.setLevel(logging.INFO)
    request_handler.addFilter(RequestFilter())
    request_handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(timestamp)s %(levelname)s %(message)s %(run_id)s",
            timestamp=True,
        )
    )
    logger.addHandler(request_handler)

    # --- Error Log Handler (JSON) ---
    error_handler = logging.handlers.RotatingFileHandler(
        directory / "errors.jsonl",
        maxBytes=LOG_MAX_SIZE,
        backupCount=LOG_BACKUP_COUNT_ERRORS,
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.addFilter(ErrorFilter())
    error_handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(timestamp)s %(levelname)s %(name)s %(message)s",
            timestamp=True,
        )
    )
    logger.addHandler(error_handler)

    return logger


def _preview(value: Any, limit: int = LOG_PREVIEW_LENGTH) -> str:
    text = str(value).replace("\n", " ")
    if len(text) > limit:
        return text[:limit] + "..."
    return text


class OracleLogger:
    """
    High-level logging interface for Oracle.
    Wraps standard Python logging with convenience methods.
    """

    def __init__(self, name: str = "oracle"):
        self.logger = setup_logging(name)
        self.run_id = str(uuid.uuid4())[:RUN_ID_LENGTH]

    def configure(self, debug: bool = False, log_dir: str | pathlib.Path | None = None) -> None:
        """Rebuild handlers once settings are known."""
        self.logger = setup_logging(self.logger.name, debug=debug, log_dir=log_dir)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Debug level logging"""
        kwargs["run_id"] = self.run_id
        self.logger.debug(message, extra=kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Info level logging"""
        kwargs["run_id"] = self.run_id
        self.logger.info(message, extra=kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Warning level logging"""
        kwargs["run_id"] = self.run_id
        self.logger.warning(message, extra=kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        """Error level logging with optional exception info"""
        kwargs["run_id"] = self.run_id
        self.logger.error(message, extra=kwargs, exc_info=exc_info)

    def log_tool_call(self, tool_name: str, args: dict[str, Any], result: Any) -> None:
        """
        Log a tool call with concise argument and result previews.

        Args:
            tool_name: Name of the tool called
            args: Arguments passed to the tool
            result: Result returned by the tool
        """
        args_parts = []
        for key, value in args.items():
            value_str = str(value)
            if len(value_str) > 20:
                value_str = value_str[:20] + "..."
            args_parts.append(f"{key}={value_str}")

        args_summary = ", ".join(args_parts)
        self.info(f"Tool: {tool_name}({args_summary}) → {_preview(result)}", tool=tool_name)


# Global logger instance
logger = OracleLogger()
