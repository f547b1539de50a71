"""
Structured logging utilities with JSON formatting for cloud environments.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_LOG_KWARGS = ("exc_info", "stack_info", "stacklevel")


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging in cloud environments."""

    def __init__(self, service_name: str = "delivery-analytics"):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "severity": record.levelname,
            "message": record.getMessage(),
            "service": self.service_name,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Context passed as keyword arguments to StructuredLogger
        if hasattr(record, "extra_fields"):
            log_entry.update(record.extra_fields)

        if hasattr(record, "trace_id"):
            log_entry["logging.googleapis.com/trace"] = record.trace_id

        return json.dumps(log_entry, default=str)


class StructuredLogger(logging.Logger):
    """Logger that supports structured logging with extra fields."""

    def _log_with_context(
        self,
        level: int,
        msg: str,
        *args,
        trace_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        """Log a message with keyword context fields."""
        if not self.isEnabledFor(level):
            return

        extra = kwargs.pop("extra", {})
        if trace_id:
            extra["trace_id"] = trace_id

        extra_fields = {k: v for k, v in kwargs.items() if k not in _LOG_KWARGS}
        if extra_fields:
            extra["extra_fields"] = extra_fields

        log_kwargs = {k: v for k, v in kwargs.items() if k in _LOG_KWARGS}
        log_kwargs["extra"] = extra

        super()._log(level, msg, args, **log_kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        """Log an info message."""
        self._log_with_context(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        """Log a warning message."""
        self._log_with_context(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        """Log an error message."""
        self._log_with_context(logging.ERROR, msg, *args, **kwargs)

    def exception(self, msg: str, *args, exc_info: Any = True, **kwargs) -> None:
        """Log an error message with the active exception attached."""
        self._log_with_context(logging.ERROR, msg, *args, exc_info=exc_info, **kwargs)

    def debug(self, msg: str, *args, **kwargs) -> None:
        """Log a debug message."""
        self._log_with_context(logging.DEBUG, msg, *args, **kwargs)

    def critical(self, msg: str, *args, **kwargs) -> None:
        """Log a critical message."""
        self._log_with_context(logging.CRITICAL, msg, *args, **kwargs)


# Module loggers are created at import time, before setup_logging runs
logging.setLoggerClass(StructuredLogger)


def setup_logging(
    service_name: str = "delivery-analytics",
    log_level: str = "INFO",
    use_json: bool = True,
) -> None:
    """
    Set up logging configuration.

    Args:
        service_name: Name of the service for log entries
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_json: Whether to use JSON formatting (True for cloud, False for local dev)
    """
    logging.setLoggerClass(StructuredLogger)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, log_level.upper()))

    if use_json:
        formatter = JSONFormatter(service_name=service_name)
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Suppress noisy loggers
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        StructuredLogger instance
    """
    return logging.getLogger(name)  # type: ignore
