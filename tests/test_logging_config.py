#!/usr/bin/env python3
"""Tests for structured logging setup."""
import io
import json
import logging
import sys
from datetime import datetime

from taxzone import Price, ValidationError
from taxzone.logging_config import (
    StructuredFormatter,
    configure_logging,
    get_logger,
)


def make_record(msg="passage recorded", exc_info=None, **extra):
    record = logging.LogRecord(
        "taxzone.service", logging.INFO, __file__, 1, msg, (), exc_info
    )
    for key, val in extra.items():
        setattr(record, key, val)
    return record


class TestStructuredFormatter:
    """Tests for StructuredFormatter."""

    def test_base_fields(self):
        payload = json.loads(StructuredFormatter().format(make_record()))
        assert payload["level"] == "INFO"
        assert payload["logger"] == "taxzone.service"
        assert payload["message"] == "passage recorded"
        assert "ts" in payload

    def test_extra_fields_serialized(self):
        record = make_record(
            passage_id="p1",
            charge=Price(8),
            timestamp=datetime(2025, 3, 4, 6, 15),
        )
        payload = json.loads(StructuredFormatter().format(record))
        assert payload["passage_id"] == "p1"
        assert payload["charge"] == "8.00"
        assert payload["timestamp"] == "2025-03-04T06:15:00"

    def test_exception_fields(self):
        try:
            raise ValidationError("bad amount", "amount")
        except ValidationError:
            record = make_record(msg="failed", exc_info=sys.exc_info())
        payload = json.loads(StructuredFormatter().format(record))
        assert payload["exc_type"] == "ValidationError"
        assert payload["exc_code"] == "VALIDATION_ERROR"
        assert "Traceback" in payload["traceback"]


class TestConfigureLogging:
    """Tests for configure_logging and get_logger."""

    def test_namespace(self):
        assert get_logger("service").name == "taxzone.service"

    def test_writes_json_lines(self):
        stream = io.StringIO()
        configure_logging(level=logging.INFO, stream=stream)
        get_logger("service").info("hello", extra={"vehicle_id": "ABC123"})
        payload = json.loads(stream.getvalue().strip())
        assert payload["message"] == "hello"
        assert payload["vehicle_id"] == "ABC123"

    def test_level_filters(self):
        stream = io.StringIO()
        configure_logging(level=logging.WARNING, stream=stream)
        get_logger("service").info("quiet")
        assert stream.getvalue() == ""

    def test_idempotent(self):
        first, second = io.StringIO(), io.StringIO()
        configure_logging(level=logging.INFO, stream=first)
        configure_logging(level=logging.INFO, stream=second)
        get_logger("service").info("once")
        assert first.getvalue().count("once") == 1
        assert second.getvalue() == ""
