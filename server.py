"""
Backend server for the SEO content analyzer.
Provides API endpoints for scoring pasted articles.

This is the main entry point that assembles the modular components
from the app package.
"""

import logging
import sys
from typing import Optional

import sentry_sdk
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError as SettingsValidationError
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

# Configure structured logging FIRST, before other imports that use logging
from seo_analyzer.utils.logging import setup_logging

logger = setup_logging(service_name="seo-analyzer-api")

from seo_analyzer import __version__
from seo_analyzer.config import Settings, get_settings, log_config_summary

SERVICE_NAME = "seo-analyzer-api"


def configure_logging(settings: Settings) -> logging.Logger:
    """Reconfigure logging from validated settings, including values from .env."""
    return setup_logging(
        service_name=SERVICE_NAME,
        log_level=getattr(logging, settings.logging.log_level),
        force_json=settings.logging.log_format_json or settings.is_production,
    )


# =============================================================================
# Configuration Validation
# =============================================================================

try:
    settings: Settings = get_settings()
    logger = configure_logging(settings)
    log_config_summary(settings)
except SettingsValidationError as e:
    logger.critical(f"Configuration validation failed: {e}")
    logger.critical("Application cannot start due to configuration errors.")
    sys.exit(1)

from app.dependencies import get_app_settings
from app.error_handlers import register_exception_handlers
from app.middleware import RequestLoggingMiddleware, RequestValidationMiddleware
from app.routes import analysis_router, health_router

# =============================================================================
# Sentry Error Tracking Configuration
# =============================================================================


def init_sentry(settings: Settings) -> bool:
    """
    Initialize Sentry when a DSN is configured.

    Returns:
        True if Sentry was initialized.
    """
    if not settings.is_sentry_configured:
        logger.info("Sentry DSN not configured, error tracking disabled")
        return False

    sentry_settings = settings.sentry
    sentry_sdk.init(
        dsn=sentry_settings.sentry_dsn,
        environment=sentry_settings.sentry_environment,
        sample_rate=1.0,
        traces_sample_rate=sentry_settings.sentry_traces_sample_rate,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        # Analyzed content is user data; keep it out of events
        send_default_pii=False,
        max_request_body_size="never",
        attach_stacktrace=True,
        release=sentry_settings.sentry_release,
    )
    logger.info(f"Sentry initialized for environment: {sentry_settings.sentry_environment}")
    return True


# =============================================================================
# Initialize FastAPI App
# =============================================================================


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use; defaults to the cached environment settings.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="SEO Content Analyzer API",
        description="""
## Content Scoring API

Paste an article and get readability, keyword and structure scores with
actionable suggestions.

### Scores

- **Readability**: penalizes long sentences and long words
- **Keywords**: rewards lexical diversity, lists the five most frequent keywords
- **Structure**: checks for an H1 title and subheadings (markdown or HTML)
- **Overall**: rounded mean of the three
""",
        version=__version__,
        openapi_tags=[
            {"name": "health", "description": "Health checks and service info"},
            {"name": "analysis", "description": "Content scoring and suggestions"},
        ],
    )

    # Routes read settings through this dependency
    app.dependency_overrides[get_app_settings] = lambda: settings

    register_exception_handlers(app)

    security_settings = settings.security

    if security_settings.security_enabled:
        app.add_middleware(
            RequestValidationMiddleware,
            max_body_size=security_settings.security_max_body_size,
            validate_content_type=True,
        )
        logger.info(
            f"Request validation enabled (max body: {security_settings.security_max_body_size} bytes)"
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=security_settings.origins_list,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID", "X-Correlation-ID", "Accept"],
        expose_headers=["X-Request-ID", "X-Correlation-ID", "X-Response-Time"],
        max_age=600,
    )

    # Added last so it wraps every other middleware
    if settings.logging.request_logging_enabled:
        app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health_router)
    app.include_router(analysis_router)

    return app


init_sentry(settings)
app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run("server:app", host="0.0.0.0", port=8000, reload=False)
