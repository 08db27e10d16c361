"""
SEO analyzer application package.

This package contains the FastAPI application components: routes,
middleware, exceptions and exception handlers.
"""

from .error_handlers import register_exception_handlers
from .exceptions import (
    ErrorCode,
    PayloadTooLargeError,
    SEOAnalyzerException,
    UnsupportedMediaTypeError,
    ValidationError,
)

__all__ = [
    "ErrorCode",
    "PayloadTooLargeError",
    "SEOAnalyzerException",
    "UnsupportedMediaTypeError",
    "ValidationError",
    "register_exception_handlers",
]
