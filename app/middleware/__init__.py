"""Middleware components for the SEO analyzer API."""

from .logging import RequestLoggingMiddleware
from .security import RequestValidationMiddleware

__all__ = [
    "RequestLoggingMiddleware",
    "RequestValidationMiddleware",
]
