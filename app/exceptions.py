"""
Exceptions the SEO analyzer API raises for requests it refuses.

The scoring engine itself is total and never raises; every error here
describes a request that was not analyzed. Each class carries its HTTP
status and default error code, and one handler renders them all:

    SEOAnalyzerException (500)
    ├── ValidationError (400)
    ├── PayloadTooLargeError (413)
    └── UnsupportedMediaTypeError (415)
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Machine-readable codes returned in the error_code field."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"

    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"


MAX_ECHOED_VALUE_LENGTH = 100


def _merge_details(details: Optional[Dict[str, Any]], **values: Any) -> Dict[str, Any]:
    merged = dict(details or {})
    merged.update({key: value for key, value in values.items() if value is not None})
    return merged


class SEOAnalyzerException(Exception):
    """
    Base class for API errors.

    Attributes:
        message: Client-facing message; sanitized again before it is sent.
        error_code: Value for the response's error_code field.
        details: Extra context; only whitelisted keys reach the client.
        internal_message: Logged server-side, never returned.
    """

    status_code: int = 500
    default_error_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        error_code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
        internal_message: Optional[str] = None,
    ):
        self.message = message or self.default_message
        self.error_code = error_code or self.default_error_code
        self.details = dict(details or {})
        self.internal_message = internal_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "success": False,
            "error": self.message,
            "error_code": self.error_code.value,
        }
        if self.details:
            body["details"] = self.details
        return body

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"error_code={self.error_code.value!r}, status_code={self.status_code})"
        )


class ValidationError(SEOAnalyzerException):
    """
    Content that parsed but cannot be analyzed: blank, or longer than
    the configured maximum. Also used for malformed request headers.
    """

    status_code = 400
    default_error_code = ErrorCode.VALIDATION_ERROR
    default_message = "Invalid request data"

    def __init__(
        self,
        message: Optional[str] = None,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        error_code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
        internal_message: Optional[str] = None,
    ):
        if value is not None:
            value = str(value)
            if len(value) > MAX_ECHOED_VALUE_LENGTH:
                value = value[:MAX_ECHOED_VALUE_LENGTH] + "..."

        super().__init__(
            message=message,
            error_code=error_code,
            details=_merge_details(details, field=field, value=value),
            internal_message=internal_message,
        )


class PayloadTooLargeError(SEOAnalyzerException):
    """Request body larger than the configured size limit."""

    status_code = 413
    default_error_code = ErrorCode.PAYLOAD_TOO_LARGE
    default_message = "Request body too large"

    def __init__(
        self,
        message: Optional[str] = None,
        limit: Optional[int] = None,
        error_code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
        internal_message: Optional[str] = None,
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            details=_merge_details(details, limit=limit),
            internal_message=internal_message,
        )


class UnsupportedMediaTypeError(SEOAnalyzerException):
    """Request body not sent as JSON."""

    status_code = 415
    default_error_code = ErrorCode.UNSUPPORTED_MEDIA_TYPE
    default_message = "Unsupported media type"

    def __init__(
        self,
        message: Optional[str] = None,
        content_type: Optional[str] = None,
        error_code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
        internal_message: Optional[str] = None,
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            details=_merge_details(details, content_type=content_type),
            internal_message=internal_message,
        )
