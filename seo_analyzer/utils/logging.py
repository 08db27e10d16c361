"""
Structured logging for the SEO content analyzer.

Production (ENVIRONMENT=production or LOG_FORMAT_JSON=true) emits one JSON
object per line; development gets colored, human-readable lines. Both
carry the request and correlation IDs of the request being served.

Analyzed content is never logged; only sizes, scores and timings are.
"""

import json
import logging
import os
import re
import sys
import time
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Pattern

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

DEFAULT_SERVICE_NAME = "seo-analyzer"

REDACTED = "[REDACTED]"

SENSITIVE_PATTERNS: List[Pattern] = [
    re.compile(r'api[_-]?key["\']?\s*[:=]\s*["\']?[\w-]+', re.IGNORECASE),
    re.compile(r'password["\']?\s*[:=]\s*["\']?[^\s,}]+', re.IGNORECASE),
    re.compile(r'secret["\']?\s*[:=]\s*["\']?[\w-]+', re.IGNORECASE),
    re.compile(r'bearer\s+[\w.-]+', re.IGNORECASE),
    # Sentry DSNs embed the project key
    re.compile(r'https://\w+@[\w.]+sentry\.io/\d+', re.IGNORECASE),
]

# LogRecord attributes that are not user-supplied extras
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime", "request_id", "correlation_id", "taskName"}


def redact_sensitive_data(message: str) -> str:
    """Replace credentials in a log message with [REDACTED]."""
    if not message:
        return message
    for pattern in SENSITIVE_PATTERNS:
        message = pattern.sub(REDACTED, message)
    return message


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class RequestContextFilter(logging.Filter):
    """Stamp each record with the current request and correlation IDs."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        record.correlation_id = correlation_id_var.get() or "-"
        return True


class SensitiveDataFilter(logging.Filter):
    """Redact credentials from the message and its arguments."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.msg:
            record.msg = redact_sensitive_data(str(record.msg))
        if isinstance(record.args, dict):
            record.args = {
                key: redact_sensitive_data(value) if isinstance(value, str) else value
                for key, value in record.args.items()
            }
        elif record.args:
            record.args = tuple(
                redact_sensitive_data(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )
        return True


class JSONFormatter(logging.Formatter):
    """
    Single-line JSON output for log aggregation.

    Example:
        {"timestamp": "...", "level": "INFO", "logger": "app.routes.analysis",
         "message": "Analyzed 812 words, overall score 64",
         "service": "seo-analyzer-api", "request_id": "...",
         "correlation_id": "-", "extra": {"word_count": 812}}
    """

    def __init__(self, service_name: str = DEFAULT_SERVICE_NAME):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "request_id": getattr(record, "request_id", "-"),
            "correlation_id": getattr(record, "correlation_id", "-"),
        }

        if record.levelno >= logging.ERROR:
            entry["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        extra = _extra_fields(record)
        if extra:
            entry["extra"] = extra

        return json.dumps(entry, default=str, ensure_ascii=False)


class DevelopmentFormatter(logging.Formatter):
    """Colored output: [time] LEVEL [req_id] logger - message {extras}"""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"
    DIM = "\033[2m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        request_id = getattr(record, "request_id", "-")
        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]

        line = (
            f"{self.DIM}[{timestamp}]{self.RESET} "
            f"{color}{record.levelname:8}{self.RESET} "
            f"{self.DIM}[{request_id[:8]:>8}]{self.RESET} "
            f"{record.name} - {record.getMessage()}"
        )

        extra = _extra_fields(record)
        if extra:
            line += f" {self.DIM}{extra}{self.RESET}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def get_log_level() -> int:
    """Log level from LOG_LEVEL, INFO when unset or unknown."""
    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), None)
    return level if isinstance(level, int) else logging.INFO


def should_use_json_format() -> bool:
    if os.environ.get("LOG_FORMAT_JSON", "").lower() in ("true", "1", "yes"):
        return True
    return os.environ.get("ENVIRONMENT", "development").lower() in ("production", "prod")


def setup_logging(
    service_name: str = DEFAULT_SERVICE_NAME,
    log_level: Optional[int] = None,
    force_json: bool = False,
    stream=None,
) -> logging.Logger:
    """
    Configure the root logger.

    Call once at startup, before modules that log are imported. Existing
    root handlers are replaced so repeated calls do not duplicate output.

    Args:
        service_name: Service name stamped on JSON records
        log_level: Override for LOG_LEVEL
        force_json: Emit JSON even in development
        stream: Output stream (defaults to stdout)

    Returns:
        The configured root logger
    """
    level = log_level if log_level is not None else get_log_level()
    use_json = force_json or should_use_json_format()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.addFilter(RequestContextFilter())
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JSONFormatter(service_name) if use_json else DevelopmentFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    for noisy in ("uvicorn.access", "httpx", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    root_logger.debug(
        "Logging configured",
        extra={"format": "json" if use_json else "development", "service": service_name},
    )
    return root_logger


def set_request_context(
    request_id: Optional[str] = None,
    correlation_id: Optional[str] = None,
) -> None:
    """Bind request identifiers to the current async context."""
    if request_id is not None:
        request_id_var.set(request_id)
    if correlation_id is not None:
        correlation_id_var.set(correlation_id)


def clear_request_context() -> None:
    request_id_var.set(None)
    correlation_id_var.set(None)


def get_request_id() -> Optional[str]:
    return request_id_var.get()


def get_correlation_id() -> Optional[str]:
    return correlation_id_var.get()


class Timer:
    """
    Context manager that measures a block and optionally logs the duration.

    Usage:
        with Timer("analyze_text", logger) as timer:
            report = analyze_text(content)
        timer.elapsed_ms
    """

    def __init__(
        self,
        name: str,
        logger: Optional[logging.Logger] = None,
        log_level: int = logging.DEBUG,
    ):
        self.name = name
        self.logger = logger
        self.log_level = log_level
        self.elapsed_ms: float = 0.0
        self._started: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._started is not None:
            self.elapsed_ms = (time.perf_counter() - self._started) * 1000

        if self.logger:
            self.logger.log(
                self.log_level,
                f"{self.name} completed in {self.elapsed_ms:.2f}ms",
                extra={
                    "operation": self.name,
                    "duration_ms": round(self.elapsed_ms, 2),
                    "success": exc_type is None,
                },
            )
