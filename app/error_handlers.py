"""
Exception handlers for the SEO analyzer API.

Every error leaves the API in one shape:

    {"success": false, "error": "...", "error_code": "...", "details": {...}}

Messages are scrubbed of credentials, paths, IPs and IDs, details are
reduced to a whitelist, and unexpected exceptions are reported to Sentry
with a short reference the client can quote.
"""

import logging
import os
import re
import uuid
from typing import Any, Dict, List, Optional

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from seo_analyzer.utils.logging import get_correlation_id, get_request_id

from .exceptions import ErrorCode, SEOAnalyzerException

logger = logging.getLogger(__name__)

SENSITIVE_REGEX = re.compile(
    r"api[_-]?key|secret|password|token|credential|bearer|dsn"
    r"|/home/|/Users/|/var/|/etc/",
    re.IGNORECASE,
)
_PATH_RE = re.compile(r"[/\\][\w./\\-]+\.\w+")
_IP_RE = re.compile(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b")
_UUID_RE = re.compile(
    r"\b[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}\b",
    re.IGNORECASE,
)

GENERIC_MESSAGE = "An error occurred while processing your request"
MAX_MESSAGE_LENGTH = 500
MAX_LISTED_ERRORS = 10

SAFE_DETAIL_KEYS = frozenset({
    "field",
    "value",
    "limit",
    "content_type",
    "errors",
    "error_reference",
    "sentry_event_id",
})

STATUS_CODE_MAPPING = {
    400: ErrorCode.VALIDATION_ERROR,
    404: ErrorCode.RESOURCE_NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
    413: ErrorCode.PAYLOAD_TOO_LARGE,
    415: ErrorCode.UNSUPPORTED_MEDIA_TYPE,
    422: ErrorCode.VALIDATION_ERROR,
    500: ErrorCode.INTERNAL_ERROR,
}

# Client-facing messages for common pydantic error types
PYDANTIC_MESSAGES = {
    "missing": "Field '{field}' is required",
    "string_type": "Field '{field}' must be a string",
    "string_too_short": "Field '{field}' must not be empty",
    "json_invalid": "Request body is not valid JSON",
}


def sanitize_error_message(message: str) -> str:
    """
    Make an error message safe to return to clients.

    Messages mentioning credentials are replaced outright; file paths,
    IP addresses and UUIDs are masked, and long messages are truncated.
    """
    if not message:
        return message

    if SENSITIVE_REGEX.search(message):
        return GENERIC_MESSAGE

    message = _PATH_RE.sub("[path]", message)
    message = _IP_RE.sub("[ip]", message)
    message = _UUID_RE.sub("[id]", message)

    if len(message) > MAX_MESSAGE_LENGTH:
        message = message[:MAX_MESSAGE_LENGTH] + "..."
    return message


def sanitize_details(details: Dict[str, Any]) -> Dict[str, Any]:
    """Drop non-whitelisted keys and non-primitive values from error details."""
    sanitized: Dict[str, Any] = {}
    for key, value in (details or {}).items():
        if key not in SAFE_DETAIL_KEYS:
            continue
        if isinstance(value, str):
            sanitized[key] = sanitize_error_message(value)
        elif isinstance(value, (bool, int, float)):
            sanitized[key] = value
        elif isinstance(value, list):
            sanitized[key] = [
                item for item in value
                if isinstance(item, (str, bool, int, float, dict))
            ][:MAX_LISTED_ERRORS]
    return sanitized


def format_pydantic_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """
    Turn pydantic error dicts into [{"field": ..., "message": ...}].

    The "body" prefix is dropped from locations; errors on the body as a
    whole are reported against "request".
    """
    formatted = []
    for error in errors[:MAX_LISTED_ERRORS]:
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        field = field or "request"

        template = PYDANTIC_MESSAGES.get(error.get("type", ""))
        if template:
            message = template.format(field=field)
        else:
            message = sanitize_error_message(error.get("msg", "Invalid value"))

        formatted.append({"field": field, "message": message})
    return formatted


def create_error_response(
    status_code: int,
    error: str,
    error_code: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Build a JSONResponse in the standard error shape."""
    content: Dict[str, Any] = {
        "success": False,
        "error": sanitize_error_message(error),
        "error_code": error_code,
    }
    safe_details = sanitize_details(details or {})
    if safe_details:
        content["details"] = safe_details

    return JSONResponse(status_code=status_code, content=content, headers=headers)


def error_response_from_exception(exc: SEOAnalyzerException) -> JSONResponse:
    return create_error_response(
        status_code=exc.status_code,
        error=exc.message,
        error_code=exc.error_code.value,
        details=exc.details,
    )


def report_to_sentry(
    exc: Exception,
    request: Optional[Request] = None,
    extra_context: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Capture an exception in Sentry, tagged with the request ID.

    Returns:
        The Sentry event ID, or None when Sentry is not active.
    """
    if not sentry_sdk.get_client().is_active():
        return None

    try:
        with sentry_sdk.new_scope() as scope:
            request_id = get_request_id()
            if request is not None:
                # Method and path only; request bodies hold user content
                scope.set_context("request", {
                    "method": request.method,
                    "path": request.url.path,
                })
                # Set by RequestLoggingMiddleware; outlives the logging context
                request_id = getattr(request.state, "request_id", None) or request_id
            if request_id:
                scope.set_tag("request_id", request_id)
            correlation_id = get_correlation_id()
            if correlation_id:
                scope.set_tag("correlation_id", correlation_id)
            if extra_context:
                scope.set_context("extra", extra_context)
            return sentry_sdk.capture_exception(exc)
    except Exception as e:
        logger.warning(f"Failed to report exception to Sentry: {e}")
        return None


def _validation_failure(status_code: int, request: Request, raw_errors) -> JSONResponse:
    errors = format_pydantic_errors(raw_errors)
    logger.warning(
        f"Validation failed on {request.method} {request.url.path}: {len(errors)} error(s)"
    )
    message = (
        errors[0]["message"] if len(errors) == 1
        else f"Validation failed with {len(errors)} error(s)"
    )
    return create_error_response(
        status_code=status_code,
        error=message,
        error_code=ErrorCode.VALIDATION_ERROR.value,
        details={"errors": errors},
    )


# =============================================================================
# Handlers
# =============================================================================

async def seo_analyzer_exception_handler(
    request: Request,
    exc: SEOAnalyzerException,
) -> JSONResponse:
    log_message = f"{type(exc).__name__}: {exc.message}"
    if exc.internal_message:
        log_message += f" | Internal: {exc.internal_message}"

    if exc.status_code >= 500:
        logger.error(log_message, exc_info=True)
        report_to_sentry(exc, request)
    else:
        logger.warning(log_message)

    return error_response_from_exception(exc)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Request bodies FastAPI could not parse into the endpoint's model."""
    return _validation_failure(422, request, exc.errors())


async def pydantic_validation_handler(
    request: Request,
    exc: PydanticValidationError,
) -> JSONResponse:
    """Model validation that failed inside a handler, outside request parsing."""
    return _validation_failure(400, request, exc.errors())


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Routing errors (404, 405) and explicit HTTPExceptions."""
    error_code = STATUS_CODE_MAPPING.get(exc.status_code, ErrorCode.UNKNOWN_ERROR)
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)

    log = logger.error if exc.status_code >= 500 else logger.warning
    log(f"HTTP {exc.status_code} on {request.method} {request.url.path}: {detail}")

    headers = None
    if exc.headers and "Allow" in exc.headers:
        headers = {"Allow": exc.headers["Allow"]}

    return create_error_response(
        status_code=exc.status_code,
        error=detail,
        error_code=error_code.value,
        headers=headers,
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Catch-all for bugs.

    The exception text is logged, never returned. Clients get a generic
    message and an eight-character reference to quote to support.
    """
    error_reference = uuid.uuid4().hex[:8]

    logger.error(
        f"Unhandled exception [ref:{error_reference}] on "
        f"{request.method} {request.url.path}: {exc}",
        exc_info=True,
    )
    event_id = report_to_sentry(exc, request, {"error_reference": error_reference})

    details: Dict[str, Any] = {"error_reference": error_reference}
    if os.environ.get("ENVIRONMENT", "development").lower() == "production":
        error = "An unexpected error occurred. Please try again later."
    else:
        error = f"Internal server error: {type(exc).__name__}"
        if event_id:
            details["sentry_event_id"] = event_id

    return create_error_response(
        status_code=500,
        error=error,
        error_code=ErrorCode.INTERNAL_ERROR.value,
        details=details,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all handlers above to the application."""
    app.add_exception_handler(SEOAnalyzerException, seo_analyzer_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PydanticValidationError, pydantic_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    logger.debug("Exception handlers registered")
