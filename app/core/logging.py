"""
app/core/logging.py

Purpose: Logging configuration

- JSON lines in production, colored single lines elsewhere
- Request context (mobile, user_id, order_id) stamped on every record
  emitted inside a LogContext block
- Context lives in a ContextVar, so concurrent requests never see
  each other's values
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.core.config import Settings, settings as default_settings

CONTEXT_FIELDS = ("mobile", "user_id", "order_id")

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET = "\033[0m"

_log_context: ContextVar[Dict[str, Any]] = ContextVar("pickupdesk_log_context", default={})
_base_record_factory = logging.getLogRecordFactory()


def _context_record_factory(*args, **kwargs) -> logging.LogRecord:
    record = _base_record_factory(*args, **kwargs)
    for key, value in _log_context.get().items():
        setattr(record, key, value)
    return record


def context_of(record: logging.LogRecord) -> Dict[str, str]:
    """Context fields present on a record, in a stable order."""
    return {
        field: str(getattr(record, field))
        for field in CONTEXT_FIELDS
        if getattr(record, field, None) is not None
    }


class StructuredFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        payload.update(context_of(record))

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload)


class DevelopmentFormatter(logging.Formatter):
    """Readable, colored output for a terminal."""

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelname, RESET)
        clock = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        line = f"{color}[{clock}] {record.levelname:<8}{RESET} {record.name}: {record.getMessage()}"

        context = context_of(record)
        if context:
            line += " [" + ", ".join(f"{k}={v}" for k, v in context.items()) + "]"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


def setup_logging(config: Optional[Settings] = None) -> logging.Logger:
    """
    Configures the root logger for the given settings.

    Safe to call more than once; the handler is replaced and the
    context-aware record factory is installed a single time.
    """
    config = config or default_settings

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter() if config.is_production else DevelopmentFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    logging.setLogRecordFactory(_context_record_factory)

    # Quiet chatty dependencies
    for noisy in ("httpx", "motor", "pymongo", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger = logging.getLogger("pickupdesk")
    logger.info(f"Logging configured ({config.ENVIRONMENT}, level {config.LOG_LEVEL})")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger under the "pickupdesk" namespace."""
    return logging.getLogger(f"pickupdesk.{name}")


class LogContext:
    """
    Adds fields to every record logged inside the block.

    Nested blocks merge with the enclosing one. Values are scoped to the
    current task, so interleaved requests keep their own context.

    Usage:
        with LogContext(mobile="9999999999"):
            logger.info("Issuing OTP")
    """

    def __init__(self, **fields):
        self.fields = fields
        self._token = None

    def __enter__(self):
        self._token = _log_context.set({**_log_context.get(), **self.fields})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _log_context.reset(self._token)
        self._token = None
