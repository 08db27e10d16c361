"""
Tests for structured logging utilities.
"""

import io
import json
import logging
import os
import sys
import unittest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from seo_analyzer.utils.logging import (
    JSONFormatter,
    RequestContextFilter,
    SensitiveDataFilter,
    Timer,
    clear_request_context,
    get_correlation_id,
    get_request_id,
    redact_sensitive_data,
    set_request_context,
)


def make_record(msg, args=None, level=logging.INFO, **extra):
    record = logging.LogRecord("seo_analyzer.test", level, __file__, 10, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestRedaction(unittest.TestCase):
    """Tests for credential redaction."""

    def test_api_key(self):
        self.assertNotIn("abc123", redact_sensitive_data("api_key=abc123"))

    def test_bearer_token(self):
        self.assertEqual(redact_sensitive_data("Bearer tok.en-1"), "[REDACTED]")

    def test_sentry_dsn(self):
        result = redact_sensitive_data("dsn https://key123@o1.ingest.sentry.io/42")
        self.assertNotIn("key123", result)

    def test_plain_message_unchanged(self):
        message = "Analyzed 120 words, overall score 64"
        self.assertEqual(redact_sensitive_data(message), message)

    def test_filter_redacts_args(self):
        record = make_record("value %s", ("password=hunter2",))
        SensitiveDataFilter().filter(record)
        self.assertNotIn("hunter2", record.getMessage())


class TestRequestContext(unittest.TestCase):
    """Tests for request context propagation."""

    def tearDown(self):
        clear_request_context()

    def test_set_and_clear(self):
        set_request_context(request_id="req-1", correlation_id="corr-1")
        self.assertEqual(get_request_id(), "req-1")
        self.assertEqual(get_correlation_id(), "corr-1")

        clear_request_context()
        self.assertIsNone(get_request_id())
        self.assertIsNone(get_correlation_id())

    def test_filter_adds_context(self):
        set_request_context(request_id="req-2")
        record = make_record("hello")
        RequestContextFilter().filter(record)
        self.assertEqual(record.request_id, "req-2")
        self.assertEqual(record.correlation_id, "-")


class TestJSONFormatter(unittest.TestCase):
    """Tests for JSONFormatter."""

    def test_output_is_single_line_json(self):
        record = make_record("scored %d words", (12,), request_id="req-3", word_count=12)
        output = JSONFormatter("seo-analyzer-test").format(record)

        self.assertNotIn("\n", output)
        data = json.loads(output)
        self.assertEqual(data["message"], "scored 12 words")
        self.assertEqual(data["service"], "seo-analyzer-test")
        self.assertEqual(data["request_id"], "req-3")
        self.assertEqual(data["extra"], {"word_count": 12})

    def test_errors_include_source(self):
        record = make_record("failed", level=logging.ERROR)
        data = json.loads(JSONFormatter().format(record))
        self.assertEqual(data["source"]["line"], 10)


class TestTimer(unittest.TestCase):
    """Tests for Timer."""

    def test_measures_elapsed_time(self):
        with Timer("noop") as timer:
            pass
        self.assertGreaterEqual(timer.elapsed_ms, 0)

    def test_logs_completion(self):
        logger = logging.getLogger("seo_analyzer.test.timer")
        with self.assertLogs(logger, level="DEBUG") as captured:
            with Timer("analyze_text", logger):
                pass
        self.assertIn("analyze_text completed in", captured.output[0])
        self.assertTrue(captured.records[0].success)
