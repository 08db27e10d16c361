"""
Tests for configuration loading.
"""

import logging
import os
import sys
import unittest
from unittest.mock import patch

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from pydantic import ValidationError

from seo_analyzer.config import (
    AnalyzerSettings,
    LoggingSettings,
    SecuritySettings,
    SentrySettings,
    Settings,
    get_settings,
    log_config_summary,
    reload_settings,
)

SENTRY_DSN = "https://publickey@o123.ingest.sentry.io/456"


class TestDefaults(unittest.TestCase):
    """Tests for default values."""

    def test_analyzer_defaults(self):
        self.assertEqual(AnalyzerSettings().max_content_length, 100_000)

    def test_security_defaults(self):
        security = SecuritySettings()
        self.assertEqual(security.security_max_body_size, 1024 * 1024)
        self.assertTrue(security.security_enabled)
        self.assertFalse(security.is_production)

    def test_sentry_unconfigured_by_default(self):
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("SENTRY_DSN", None)
            self.assertFalse(Settings().is_sentry_configured)


class TestEnvironmentOverrides(unittest.TestCase):
    """Tests for values read from environment variables."""

    def tearDown(self):
        get_settings.cache_clear()

    def test_max_content_length_from_env(self):
        with patch.dict(os.environ, {"MAX_CONTENT_LENGTH": "500"}):
            self.assertEqual(AnalyzerSettings().max_content_length, 500)

    def test_invalid_max_content_length(self):
        with patch.dict(os.environ, {"MAX_CONTENT_LENGTH": "0"}):
            with self.assertRaises(ValidationError):
                AnalyzerSettings()

    def test_invalid_environment(self):
        with patch.dict(os.environ, {"ENVIRONMENT": "moon"}):
            with self.assertRaises(ValidationError):
                SecuritySettings()

    def test_production(self):
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            self.assertTrue(Settings().is_production)

    def test_origins_list(self):
        with patch.dict(os.environ, {"ALLOWED_ORIGINS": "https://a.example, ,https://b.example"}):
            self.assertEqual(
                SecuritySettings().origins_list,
                ["https://a.example", "https://b.example"],
            )

    def test_reload_settings_picks_up_changes(self):
        first = get_settings()
        self.assertIs(first, get_settings())

        with patch.dict(os.environ, {"MAX_CONTENT_LENGTH": "42"}):
            reloaded = reload_settings()

        self.assertIsNot(first, reloaded)
        self.assertEqual(reloaded.analyzer.max_content_length, 42)


class TestConfigSummary(unittest.TestCase):
    """Tests for the startup configuration summary."""

    def setUp(self):
        self.settings = Settings(sentry=SentrySettings(sentry_dsn=SENTRY_DSN))

    def test_summary_reports_sentry_without_dsn(self):
        summary = self.settings.get_config_summary()
        self.assertTrue(summary["sentry_configured"])
        self.assertNotIn(SENTRY_DSN, str(summary))

    def test_summary_keys(self):
        summary = self.settings.get_config_summary()
        self.assertEqual(summary["max_content_length"], self.settings.analyzer.max_content_length)
        self.assertIn("allowed_origins", summary)

    def test_log_config_summary(self):
        with self.assertLogs("seo_analyzer.config", level="INFO") as captured:
            log_config_summary(self.settings)

        output = "\n".join(captured.output)
        self.assertIn("Sentry Monitoring: Enabled", output)
        self.assertNotIn(SENTRY_DSN, output)


class TestLoggingSettingsApplied(unittest.TestCase):
    """Logging settings reach setup_logging at startup."""

    def test_level_and_format_applied(self):
        import server

        settings = Settings(logging=LoggingSettings(log_level="ERROR", log_format_json=True))
        with patch("server.setup_logging") as setup:
            server.configure_logging(settings)

        setup.assert_called_once_with(
            service_name=server.SERVICE_NAME,
            log_level=logging.ERROR,
            force_json=True,
        )

    def test_production_forces_json(self):
        import server

        settings = Settings(
            security=SecuritySettings(environment="production"),
            logging=LoggingSettings(log_format_json=False),
        )
        with patch("server.setup_logging") as setup:
            server.configure_logging(settings)

        self.assertTrue(setup.call_args.kwargs["force_json"])
