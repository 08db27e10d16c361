"""
Configuration for the SEO content analyzer.

Settings are read from environment variables (and a .env file, when
present) with pydantic-settings, validated at startup, and grouped by
concern. Field names double as environment variable names, matched
case-insensitively:

    MAX_CONTENT_LENGTH=50000 ENVIRONMENT=production uvicorn server:app

Usage:
    from seo_analyzer.config import get_settings

    limit = get_settings().analyzer.max_content_length
"""

import logging
from functools import lru_cache
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class _EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class AnalyzerSettings(_EnvSettings):
    """Limits on content submitted for analysis."""

    max_content_length: int = Field(
        default=100_000,
        ge=1,
        description="Longest content, in characters, the API will analyze",
    )


class SecuritySettings(_EnvSettings):
    """Deployment environment, CORS and request validation."""

    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    allowed_origins: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000",
        description="Comma-separated CORS origins",
    )
    security_max_body_size: int = Field(
        default=1024 * 1024,
        ge=1024,
        description="Largest accepted request body, in bytes",
    )
    security_enabled: bool = Field(
        default=True,
        description="Reject oversized and non-JSON request bodies",
    )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


class LoggingSettings(_EnvSettings):
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format_json: bool = Field(
        default=False,
        description="Emit JSON logs outside production too",
    )
    request_logging_enabled: bool = Field(
        default=True,
        description="Log one line per request and add X-Request-ID headers",
    )


class SentrySettings(_EnvSettings):
    """Sentry error tracking. Disabled unless SENTRY_DSN is set."""

    sentry_dsn: Optional[str] = None
    sentry_environment: str = "development"
    sentry_traces_sample_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    sentry_release: Optional[str] = "seo-analyzer@1.0.0"

    @property
    def is_configured(self) -> bool:
        return bool(self.sentry_dsn)


class Settings(_EnvSettings):
    """All configuration groups."""

    analyzer: AnalyzerSettings = Field(default_factory=AnalyzerSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    sentry: SentrySettings = Field(default_factory=SentrySettings)

    @property
    def is_sentry_configured(self) -> bool:
        return self.sentry.is_configured

    @property
    def is_production(self) -> bool:
        return self.security.is_production

    def get_config_summary(self) -> Dict[str, Any]:
        """Feature flags and limits for startup logs. Contains no secrets."""
        return {
            "environment": self.security.environment,
            "log_level": self.logging.log_level,
            "max_content_length": self.analyzer.max_content_length,
            "max_body_size": self.security.security_max_body_size,
            "security_enabled": self.security.security_enabled,
            "request_logging_enabled": self.logging.request_logging_enabled,
            "sentry_configured": self.is_sentry_configured,
            "allowed_origins": self.security.origins_list,
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Load settings once and cache them.

    Raises:
        pydantic.ValidationError: If an environment value is invalid.
    """
    return Settings()


def reload_settings() -> Settings:
    """Drop the cached settings and read the environment again."""
    get_settings.cache_clear()
    return get_settings()


def _enabled(flag: bool) -> str:
    return "Enabled" if flag else "Disabled"


def log_config_summary(settings: Optional[Settings] = None) -> None:
    """Log the active configuration at startup."""
    summary = (settings or get_settings()).get_config_summary()

    logger.info("SEO Analyzer configuration:")
    logger.info(f"  Environment: {summary['environment']}")
    logger.info(f"  Log Level: {summary['log_level']}")
    logger.info(f"  Max Content Length: {summary['max_content_length']} characters")
    logger.info(f"  Max Body Size: {summary['max_body_size']} bytes")
    logger.info(f"  Request Validation: {_enabled(summary['security_enabled'])}")
    logger.info(f"  Request Logging: {_enabled(summary['request_logging_enabled'])}")
    logger.info(f"  Sentry Monitoring: {_enabled(summary['sentry_configured'])}")
    logger.info(f"  Allowed Origins: {len(summary['allowed_origins'])} configured")
