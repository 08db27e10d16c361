"""
Request logging middleware for the SEO analyzer API.

Every response gets X-Request-ID and X-Response-Time headers. Requests
are logged with their size and timing, never with the submitted content.
"""

import logging
import time
import uuid
from typing import Callable, FrozenSet, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from seo_analyzer.utils.logging import (
    clear_request_context,
    set_request_context,
)

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_ID_HEADER = "X-Correlation-ID"
RESPONSE_TIME_HEADER = "X-Response-Time"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Assigns request IDs and logs one line per analysis request.

    Root, docs and schema requests are never logged; health checks are
    logged only when they fail.
    """

    QUIET_PATHS: FrozenSet[str] = frozenset({
        "/",
        "/docs",
        "/openapi.json",
        "/redoc",
        "/favicon.ico",
    })

    ERROR_ONLY_PATHS: FrozenSet[str] = frozenset({"/health"})

    def __init__(
        self,
        app,
        quiet_paths: Optional[FrozenSet[str]] = None,
        error_only_paths: Optional[FrozenSet[str]] = None,
    ):
        super().__init__(app)
        self.quiet_paths = quiet_paths or self.QUIET_PATHS
        self.error_only_paths = error_only_paths or self.ERROR_ONLY_PATHS

    def _should_log(self, path: str, status_code: int) -> bool:
        if path in self.quiet_paths:
            return False
        if path in self.error_only_paths:
            return status_code >= 400
        return True

    @staticmethod
    def _level_for(status_code: int) -> int:
        if status_code >= 500:
            return logging.ERROR
        if status_code >= 400:
            return logging.WARNING
        return logging.INFO

    @staticmethod
    def _client_ip(request: Request) -> str:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        correlation_id = request.headers.get(CORRELATION_ID_HEADER)

        set_request_context(request_id=request_id, correlation_id=correlation_id)
        request.state.request_id = request_id

        started = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000

            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers[RESPONSE_TIME_HEADER] = f"{elapsed_ms:.2f}ms"
            if correlation_id:
                response.headers[CORRELATION_ID_HEADER] = correlation_id

            if self._should_log(request.url.path, response.status_code):
                logger.log(
                    self._level_for(response.status_code),
                    f"{request.method} {request.url.path} {response.status_code} "
                    f"({elapsed_ms:.2f}ms)",
                    extra={
                        "event": "http_request",
                        "http_status": response.status_code,
                        "duration_ms": round(elapsed_ms, 2),
                        # Size only; analyzed content never reaches the logs
                        "request_bytes": request.headers.get("Content-Length", "0"),
                        "client_ip": self._client_ip(request),
                    },
                )

            return response

        except Exception as e:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error(
                f"{request.method} {request.url.path} failed after {elapsed_ms:.2f}ms: "
                f"{type(e).__name__}",
                exc_info=True,
                extra={"event": "http_request_error", "duration_ms": round(elapsed_ms, 2)},
            )
            raise

        finally:
            clear_request_context()
