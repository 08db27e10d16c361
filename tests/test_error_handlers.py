"""
Tests for error handlers.

Tests exception handling, error sanitization, and response formatting.
"""

import json
import os
import sys
import unittest
from unittest.mock import MagicMock, patch

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.error_handlers import (
    create_error_response,
    error_response_from_exception,
    format_pydantic_errors,
    report_to_sentry,
    sanitize_details,
    sanitize_error_message,
)
from app.exceptions import (
    ErrorCode,
    PayloadTooLargeError,
    SEOAnalyzerException,
    UnsupportedMediaTypeError,
    ValidationError,
)
from seo_analyzer.utils.logging import clear_request_context, set_request_context


class TestErrorMessageSanitization(unittest.TestCase):
    """Tests for error message sanitization."""

    def test_normal_message_unchanged(self):
        """Normal messages should pass through."""
        message = "Content must not be blank"
        self.assertEqual(sanitize_error_message(message), message)

    def test_credential_message_is_replaced(self):
        sanitized = sanitize_error_message("Invalid api_key: sk-abc123xyz")
        self.assertNotIn("sk-abc123xyz", sanitized)

    def test_sentry_dsn_is_replaced(self):
        sanitized = sanitize_error_message("bad dsn https://key@o1.ingest.sentry.io/1")
        self.assertNotIn("key@", sanitized)

    def test_file_path_is_redacted(self):
        sanitized = sanitize_error_message("Cannot open ./data/article.md")
        self.assertNotIn("article.md", sanitized)
        self.assertIn("[path]", sanitized)

    def test_ip_address_is_redacted(self):
        sanitized = sanitize_error_message("Connection failed to 192.168.1.100")
        self.assertNotIn("192.168.1.100", sanitized)

    def test_uuid_is_redacted(self):
        sanitized = sanitize_error_message(
            "Request abc12345-6789-0abc-def1-234567890abc failed"
        )
        self.assertIn("[id]", sanitized)

    def test_long_message_is_truncated(self):
        sanitized = sanitize_error_message("a" * 1000)
        self.assertEqual(len(sanitized), 503)  # 500 + "..."

    def test_empty_message_returns_empty(self):
        self.assertEqual(sanitize_error_message(""), "")


class TestErrorDetailsSanitization(unittest.TestCase):
    """Tests for error details sanitization."""

    def test_safe_keys_are_preserved(self):
        details = {"field": "content", "limit": 10, "content_type": "text/plain"}
        self.assertEqual(sanitize_details(details), details)

    def test_unsafe_keys_are_removed(self):
        details = {"field": "content", "internal_error": "stack trace...", "content": "x"}
        self.assertEqual(sanitize_details(details), {"field": "content"})

    def test_field_error_lists_are_kept(self):
        errors = [{"field": "content", "message": "Field 'content' is required"}]
        self.assertEqual(sanitize_details({"errors": errors}), {"errors": errors})

    def test_lists_are_capped(self):
        sanitized = sanitize_details({"errors": list(range(20))})
        self.assertEqual(len(sanitized["errors"]), 10)

    def test_empty_details_returns_empty(self):
        self.assertEqual(sanitize_details({}), {})


class TestFormatPydanticErrors(unittest.TestCase):
    """Tests for format_pydantic_errors."""

    def test_missing_field(self):
        errors = format_pydantic_errors([
            {"loc": ("body", "content"), "type": "missing", "msg": "Field required"},
        ])
        self.assertEqual(errors, [{"field": "content", "message": "Field 'content' is required"}])

    def test_empty_string(self):
        errors = format_pydantic_errors([
            {"loc": ("body", "content"), "type": "string_too_short", "msg": "too short"},
        ])
        self.assertEqual(errors[0]["message"], "Field 'content' must not be empty")

    def test_body_level_error(self):
        errors = format_pydantic_errors([
            {"loc": ("body",), "type": "json_invalid", "msg": "JSON decode error"},
        ])
        self.assertEqual(
            errors,
            [{"field": "request", "message": "Request body is not valid JSON"}],
        )

    def test_unknown_type_keeps_sanitized_message(self):
        errors = format_pydantic_errors([
            {"loc": ("body", "content"), "type": "value_error", "msg": "bad value"},
        ])
        self.assertEqual(errors[0]["message"], "bad value")

    def test_at_most_ten_errors(self):
        raw = [{"loc": ("body", f"f{i}"), "type": "missing"} for i in range(15)]
        self.assertEqual(len(format_pydantic_errors(raw)), 10)


class TestExceptions(unittest.TestCase):
    """Tests for exception classes and their responses."""

    def test_status_codes(self):
        self.assertEqual(SEOAnalyzerException().status_code, 500)
        self.assertEqual(ValidationError().status_code, 400)
        self.assertEqual(PayloadTooLargeError().status_code, 413)
        self.assertEqual(UnsupportedMediaTypeError().status_code, 415)

    def test_validation_error_details(self):
        exc = ValidationError("Bad", field="content", value="x" * 150)
        self.assertEqual(exc.details["field"], "content")
        self.assertEqual(len(exc.details["value"]), 103)

    def test_to_dict(self):
        exc = PayloadTooLargeError(limit=1024)
        self.assertEqual(
            exc.to_dict(),
            {
                "success": False,
                "error": "Request body too large",
                "error_code": "PAYLOAD_TOO_LARGE",
                "details": {"limit": 1024},
            },
        )

    def test_error_response_from_exception(self):
        exc = ValidationError(
            "Too long",
            error_code=ErrorCode.VALUE_OUT_OF_RANGE,
            details={"limit": 5},
            internal_message="length 99",
        )
        response = error_response_from_exception(exc)
        body = json.loads(response.body)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(body["error_code"], "VALUE_OUT_OF_RANGE")
        self.assertEqual(body["details"], {"limit": 5})
        self.assertNotIn("length 99", response.body.decode())

    def test_create_error_response_omits_empty_details(self):
        response = create_error_response(404, "Not Found", "RESOURCE_NOT_FOUND", {"x": 1})
        self.assertNotIn("details", json.loads(response.body))


class TestReportToSentry(unittest.TestCase):
    """Tests for report_to_sentry."""

    def test_inactive_client_returns_none(self):
        client = MagicMock()
        client.is_active.return_value = False
        with patch("app.error_handlers.sentry_sdk.get_client", return_value=client):
            self.assertIsNone(report_to_sentry(RuntimeError("boom")))

    def test_active_client_returns_event_id(self):
        client = MagicMock()
        client.is_active.return_value = True
        with patch("app.error_handlers.sentry_sdk.get_client", return_value=client), \
                patch("app.error_handlers.sentry_sdk.new_scope"), \
                patch("app.error_handlers.sentry_sdk.capture_exception", return_value="evt-1"):
            self.assertEqual(report_to_sentry(RuntimeError("boom")), "evt-1")

    def test_scope_tagged_with_logging_context(self):
        client = MagicMock()
        client.is_active.return_value = True
        set_request_context(request_id="req-9", correlation_id="corr-9")
        self.addCleanup(clear_request_context)

        with patch("app.error_handlers.sentry_sdk.get_client", return_value=client), \
                patch("app.error_handlers.sentry_sdk.new_scope") as new_scope, \
                patch("app.error_handlers.sentry_sdk.capture_exception", return_value="evt-2"):
            self.assertEqual(report_to_sentry(RuntimeError("boom")), "evt-2")

        scope = new_scope.return_value.__enter__.return_value
        scope.set_tag.assert_any_call("request_id", "req-9")
        scope.set_tag.assert_any_call("correlation_id", "corr-9")
