"""Logging configuration for MCP Linear."""

import contextvars
import logging
import os
import sys
import time
import types
import uuid
from collections.abc import Mapping
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, cast

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] [%(context)s] %(message)s"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_DIRECTORY = "logs"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 5

# Shared by every ContextualLogger; each asyncio task sees its own copy.
_log_context: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar(
    "mcp_linear_log_context", default={}
)


def _get_context_str() -> str:
    """Get the current context string."""
    context_data = _log_context.get()
    if not context_data:
        return "no-context"

    # Format context as: operation=X,trace_id=Y,...
    return ",".join(f"{k}={v}" for k, v in context_data.items())


class ContextFilter(logging.Filter):
    """Adds the context string to records emitted by plain loggers."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "context"):
            record.context = _get_context_str()
        return True


class ContextualLogger(logging.Logger):
    """Logger that maintains context between related operations."""

    def _get_context_str(self) -> str:
        return _get_context_str()

    def _log(
        self,
        level: int,
        msg: object,
        args: tuple[object, ...] | Mapping[str, object],
        exc_info: Any = None,
        extra: Mapping[str, object] | None = None,
        stack_info: bool = False,
        stacklevel: int = 1,
    ) -> None:
        """Overrides _log method to include context."""
        extra = dict(extra or {})
        extra.setdefault("context", self._get_context_str())
        super()._log(level, msg, args, exc_info, extra, stack_info, stacklevel + 1)


class LoggingContextManager:
    """Context manager for logging with tracking."""

    def __init__(
        self,
        logger: logging.Logger,
        operation: str,
        *,
        expected: tuple[type[BaseException], ...] = (),
        **context: Any,
    ) -> None:
        """
        Initializes the logging context manager.

        Args:
            logger: Logger to report through
            operation: Name of the operation being executed
            expected: Exception types that end the operation normally for the
                caller (reported at INFO, without a traceback)
            **context: Additional context data
        """
        self.logger = logger
        self.operation = operation
        self.expected = expected
        self.context = context.copy()
        self.trace_id = context.get("trace_id", str(uuid.uuid4())[:8])
        self.start_time = 0.0
        self._token: contextvars.Token | None = None

    @property
    def duration(self) -> float:
        """Seconds elapsed since the operation started."""
        return time.monotonic() - self.start_time

    def __enter__(self) -> "LoggingContextManager":
        """Starts the logging context."""
        self.start_time = time.monotonic()
        self.context["operation"] = self.operation
        self.context["trace_id"] = self.trace_id
        self._token = _log_context.set({**_log_context.get(), **self.context})

        self.logger.info(f"Operation started: {self.operation}")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        """Finalizes the logging context."""
        if exc_type and issubclass(exc_type, self.expected):
            self.logger.info(
                f"Operation ended: {self.operation} after {self.duration:.3f}s - {exc_val}"
            )
        elif exc_type:
            self.logger.error(
                f"Operation failed: {self.operation} after {self.duration:.3f}s - {exc_val}",
                exc_info=(
                    (exc_type, exc_val, exc_tb)
                    if issubclass(exc_type, Exception)
                    else None
                ),
            )
        else:
            self.logger.debug(
                f"Operation completed: {self.operation} in {self.duration:.3f}s"
            )

        if self._token is not None:
            _log_context.reset(self._token)
            self._token = None


def setup_logger(
    name: str = "mcp-linear",
    level: str | None = None,
    log_to_file: bool = False,
    log_dir: str | None = None,
    log_format: str | None = None,
) -> ContextualLogger:
    """
    Configures and returns a contextual logger.

    Console output goes to stderr because stdout carries the stdio
    protocol stream.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, etc.)
        log_to_file: If True, logs to file
        log_dir: Directory to store log files
        log_format: Log format

    Returns:
        Configured contextual logger
    """
    logging.setLoggerClass(ContextualLogger)
    logger = logging.getLogger(name)

    log_level = level or os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    formatter = logging.Formatter(log_format or os.getenv("LOG_FORMAT", DEFAULT_FORMAT))

    # Reconfiguring replaces the handlers installed by a previous call
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(ContextFilter())
    logger.addHandler(console_handler)

    if log_to_file:
        log_directory = Path(log_dir or os.getenv("LOG_DIR", DEFAULT_LOG_DIRECTORY))
        log_directory.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_directory / f"{name}.log",
            maxBytes=MAX_LOG_SIZE,
            backupCount=LOG_BACKUP_COUNT,
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(ContextFilter())
        logger.addHandler(file_handler)

    logger.propagate = False

    return cast(ContextualLogger, logger)


def log_operation(
    logger: logging.Logger,
    operation: str,
    *,
    expected: tuple[type[BaseException], ...] = (),
    **context: Any,
) -> LoggingContextManager:
    """
    Creates a context manager for operation logging.

    Args:
        logger: Logger to report through
        operation: Name of the operation
        expected: Exception types logged at INFO instead of ERROR
        **context: Additional context data

    Returns:
        Context manager configured for operation logging
    """
    return LoggingContextManager(logger, operation, expected=expected, **context)
