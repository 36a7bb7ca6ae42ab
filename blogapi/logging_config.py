"""
Blog API Logging Configuration
Structured logs on stdout: one JSON object per line, or key=value text
when BLOGAPI_LOG_FORMAT=text.
"""
import json
import logging
import os
import sys
import time
import traceback
import uuid
from datetime import datetime, timezone
from functools import wraps
from typing import Optional

LOG_LEVEL = os.environ.get("BLOGAPI_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.environ.get("BLOGAPI_LOG_FORMAT", "json")  # json or text


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, context keys merged in."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": _timestamp(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(getattr(record, "context", {}))
        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """`HH:MM:SS LEVEL logger: message key=value ...` for local runs."""

    def format(self, record: logging.LogRecord) -> str:
        context = getattr(record, "context", {})
        pairs = " ".join(f"{k}={v}" for k, v in context.items() if k != "traceback")
        line = f"{_timestamp()[11:19]} {record.levelname:<7} {record.name}: {record.getMessage()}"
        if pairs:
            line = f"{line} {pairs}"
        if "traceback" in context:
            line = f"{line}\n{context['traceback']}"
        return line


class StructuredLogger:
    """Thin wrapper that takes context as keyword arguments."""

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
        self.logger.propagate = False
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(StructuredFormatter() if LOG_FORMAT == "json" else TextFormatter())
            self.logger.addHandler(handler)

    def _log(self, level: int, message: str, context: dict):
        self.logger.log(level, message, extra={"context": context})

    def debug(self, message: str, **context):
        self._log(logging.DEBUG, message, context)

    def info(self, message: str, **context):
        self._log(logging.INFO, message, context)

    def warning(self, message: str, **context):
        self._log(logging.WARNING, message, context)

    def error(self, message: str, error: Optional[Exception] = None, **context):
        if error:
            context["error_type"] = type(error).__name__
            context["error_message"] = str(error)
            context["traceback"] = "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
        self._log(logging.ERROR, message, context)


def log_request(logger: StructuredLogger):
    """Middleware class that logs each request once, on completion."""
    from starlette.middleware.base import BaseHTTPMiddleware

    class RequestLoggingMiddleware(BaseHTTPMiddleware):
        async def dispatch(self, request, call_next):
            request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
            start = time.perf_counter()
            response = await call_next(request)
            duration_ms = round((time.perf_counter() - start) * 1000, 2)

            status = response.status_code
            log = logger.info if status < 400 else logger.warning if status < 500 else logger.error
            log(
                f"{request.method} {request.url.path} -> {status}",
                request_id=request_id,
                query=str(request.query_params),
                duration_ms=duration_ms,
            )
            response.headers["X-Request-ID"] = request_id
            return response

    return RequestLoggingMiddleware


def timed(logger: StructuredLogger, slow_ms: Optional[float] = None):
    """
    Log how long the wrapped call took: at debug normally, at warning once it
    exceeds `slow_ms`. Exceptions propagate untouched.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                duration_ms = round((time.perf_counter() - start) * 1000, 2)
                log = logger.warning if slow_ms is not None and duration_ms > slow_ms else logger.debug
                log(f"{func.__qualname__} took {duration_ms}ms", duration_ms=duration_ms)

        return wrapper

    return decorator


api_logger = StructuredLogger("blogapi.api")
db_logger = StructuredLogger("blogapi.db")
content_logger = StructuredLogger("blogapi.content")


def get_logger(name: str) -> StructuredLogger:
    """Logger under the blogapi namespace."""
    return StructuredLogger(f"blogapi.{name}")
