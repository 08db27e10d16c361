"""
Dependency injection utilities for the SEO analyzer API.
"""

from fastapi import Depends

from seo_analyzer.config import Settings, get_settings
from seo_analyzer.scoring import TextScorer


def get_app_settings() -> Settings:
    """Settings dependency; override in tests with app.dependency_overrides."""
    return get_settings()


def get_text_scorer(settings: Settings = Depends(get_app_settings)) -> TextScorer:
    """Build a scorer bound to the configured content length limit."""
    return TextScorer(max_content_length=settings.analyzer.max_content_length)
