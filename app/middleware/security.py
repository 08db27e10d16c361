"""
Request validation middleware for the SEO analyzer API.

Rejects request bodies that are too large or not JSON before they reach
the route handlers.
"""

import logging
from typing import Optional, Set

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..error_handlers import error_response_from_exception
from ..exceptions import (
    ErrorCode,
    PayloadTooLargeError,
    SEOAnalyzerException,
    UnsupportedMediaTypeError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class RequestValidationMiddleware(BaseHTTPMiddleware):
    """
    Middleware for validating incoming requests.

    Validates:
    - Request body size (Content-Length against max_body_size)
    - Content-Type header for POST/PUT/PATCH requests with a body

    Errors are returned directly in the standard error format, since
    exceptions raised from middleware bypass the app's exception handlers.
    """

    DEFAULT_MAX_BODY_SIZE = 1024 * 1024

    ALLOWED_CONTENT_TYPES = frozenset({"application/json"})

    BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

    def __init__(
        self,
        app,
        max_body_size: Optional[int] = None,
        validate_content_type: bool = True,
        allowed_content_types: Optional[Set[str]] = None,
        exclude_paths: Optional[Set[str]] = None,
    ):
        """
        Initialize the request validation middleware.

        Args:
            app: The FastAPI application.
            max_body_size: Maximum allowed body size in bytes. Default 1MB.
            validate_content_type: Whether to validate Content-Type headers.
            allowed_content_types: Set of allowed Content-Type values.
            exclude_paths: Paths to exclude from validation.
        """
        super().__init__(app)
        self.max_body_size = max_body_size or self.DEFAULT_MAX_BODY_SIZE
        self.validate_content_type = validate_content_type
        self.allowed_content_types = allowed_content_types or self.ALLOWED_CONTENT_TYPES
        self.exclude_paths = exclude_paths or {
            "/health",
            "/docs",
            "/openapi.json",
            "/redoc",
        }

    def _is_valid_content_type(self, content_type: Optional[str]) -> bool:
        if not content_type:
            return False

        # Ignore parameters such as charset
        base_type = content_type.split(";")[0].strip().lower()
        return base_type in self.allowed_content_types

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        try:
            self._validate(request)
        except SEOAnalyzerException as exc:
            logger.warning(
                f"Rejected {request.method} {request.url.path}: {exc.message}"
            )
            return error_response_from_exception(exc)

        return await call_next(request)

    def _validate(self, request: Request) -> None:
        """
        Check body size and Content-Type headers.

        Raises:
            ValidationError: If Content-Length is not an integer.
            PayloadTooLargeError: If the body exceeds max_body_size.
            UnsupportedMediaTypeError: If a body is not JSON.
        """
        content_length = request.headers.get("Content-Length")
        body_size = 0
        if content_length:
            try:
                body_size = int(content_length)
            except ValueError:
                raise ValidationError(
                    message="Invalid Content-Length header",
                    error_code=ErrorCode.INVALID_INPUT,
                    internal_message=f"Content-Length: {content_length!r}",
                )

        if body_size > self.max_body_size:
            raise PayloadTooLargeError(
                message=f"Request body too large. Maximum size: {self.max_body_size} bytes",
                limit=self.max_body_size,
                internal_message=f"{body_size} bytes",
            )

        if (
            self.validate_content_type
            and request.method in self.BODY_METHODS
            and body_size > 0
        ):
            content_type = request.headers.get("Content-Type")
            if not self._is_valid_content_type(content_type):
                raise UnsupportedMediaTypeError(
                    message=(
                        "Unsupported media type. Allowed types: "
                        f"{', '.join(sorted(self.allowed_content_types))}"
                    ),
                    content_type=content_type or "",
                )
