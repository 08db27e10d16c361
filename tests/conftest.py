"""
Pytest configuration and shared fixtures for SEO analyzer tests.

Sets environment defaults before any application module is imported.
"""

import os
import sys

import pytest

# Environment setup before any imports
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("SENTRY_DSN", None)

# Ensure project root is in path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


@pytest.fixture
def client():
    """FastAPI test client fixture."""
    from fastapi.testclient import TestClient
    from server import app

    return TestClient(app)


@pytest.fixture
def sample_article():
    """A short markdown article with a title and one subheading."""
    return (
        "# Growing Tomatoes\n\n"
        "Tomatoes need sun. Water them every morning.\n\n"
        "## Soil\n\n"
        "Use rich soil. Add compost to the soil in spring."
    )
