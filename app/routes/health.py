"""
Health check and root endpoints.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

import sentry_sdk
from fastapi import APIRouter, Depends

from seo_analyzer import __version__
from seo_analyzer.config import Settings

from ..dependencies import get_app_settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


def get_sentry_status(settings: Settings) -> Dict[str, Any]:
    """Check whether Sentry error tracking is configured and active."""
    configured = settings.is_sentry_configured
    try:
        active = configured and sentry_sdk.get_client().is_active()
    except Exception as e:
        logger.warning(f"Sentry status check failed: {e}")
        active = False

    return {"configured": configured, "active": active}


@router.get(
    "/health",
    summary="Service health check",
    description="""
Health check endpoint for monitoring and load balancers.

The analyzer has no database or external dependencies, so the service is
healthy whenever it can answer. Sentry status is reported for visibility.
    """,
    responses={
        200: {
            "description": "Health status retrieved",
            "content": {
                "application/json": {
                    "example": {
                        "status": "healthy",
                        "timestamp": "2024-01-24T12:00:00+00:00",
                        "version": "1.0.0",
                        "environment": "production",
                        "services": {
                            "sentry": {"status": "up"},
                        },
                    }
                }
            },
        }
    },
)
async def health_check(settings: Settings = Depends(get_app_settings)) -> Dict[str, Any]:
    """Health check endpoint for monitoring and load balancers."""
    sentry_status = get_sentry_status(settings)

    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
        "environment": settings.security.environment,
        "services": {
            "sentry": {
                "status": "up" if sentry_status["active"] else (
                    "unconfigured" if not sentry_status["configured"] else "down"
                ),
            },
        },
    }


@router.get(
    "/",
    summary="API information",
    description="Root endpoint providing API information and documentation links.",
)
async def root() -> Dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "message": "Welcome to the SEO Content Analyzer API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "analyze": "/analyze",
    }
