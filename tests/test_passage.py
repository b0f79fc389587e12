#!/usr/bin/env python3
"""Tests for Passage class and timestamp validation."""
from datetime import date, datetime, timezone

import pytest
from taxzone import Passage, Price, ValidationError, parse_timestamp


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_datetime_passthrough(self):
        moment = datetime(2025, 3, 4, 6, 15)
        assert parse_timestamp(moment) is moment

    def test_iso_string(self):
        assert parse_timestamp("2025-03-04T06:15:00") == datetime(2025, 3, 4, 6, 15)

    def test_space_separator(self):
        assert parse_timestamp("2025-03-04 06:15:00") == datetime(2025, 3, 4, 6, 15)

    def test_impossible_date_rejected(self):
        with pytest.raises(ValidationError):
            parse_timestamp("2025-02-30T06:15:00")

    def test_impossible_time_rejected(self):
        with pytest.raises(ValidationError):
            parse_timestamp("2025-03-04T25:15:00")

    def test_utc_offset_rejected(self):
        """Passage times are local, like the rule windows they are matched to."""
        with pytest.raises(ValidationError):
            parse_timestamp("2025-03-05T06:15:00+01:00")
        with pytest.raises(ValidationError):
            parse_timestamp("2025-03-05T06:15:00Z")
        with pytest.raises(ValidationError):
            parse_timestamp(datetime(2025, 3, 5, 6, 15, tzinfo=timezone.utc))

    def test_date_only_rejected(self):
        with pytest.raises(ValidationError):
            parse_timestamp("2025-03-04")
        with pytest.raises(ValidationError):
            parse_timestamp(date(2025, 3, 4))

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError):
            parse_timestamp("yesterday morning")
        with pytest.raises(ValidationError):
            parse_timestamp("")
        with pytest.raises(ValidationError):
            parse_timestamp(None)


class TestPassage:
    """Tests for Passage class."""

    def test_attributes(self):
        passage = Passage("p1", "ABC123", "2025-03-04T06:15:00", Price(8))
        assert passage.passage_id == "p1"
        assert passage.vehicle_id == "ABC123"
        assert passage.timestamp == datetime(2025, 3, 4, 6, 15)
        assert passage.charge == Price(8)

    def test_invalid_timestamp_rejected(self):
        with pytest.raises(ValidationError):
            Passage("p1", "ABC123", "not a time", Price(8))

    def test_corrected_keeps_identity(self):
        passage = Passage("p1", "ABC123", "2025-03-04T06:15:00", Price(8))
        corrected = passage.corrected("2025-03-04T05:45:00", Price(0))
        assert corrected.passage_id == "p1"
        assert corrected.vehicle_id == "ABC123"
        assert corrected.timestamp == datetime(2025, 3, 4, 5, 45)
        assert corrected.charge == Price(0)

    def test_corrected_leaves_original(self):
        passage = Passage("p1", "ABC123", "2025-03-04T06:15:00", Price(8))
        passage.corrected("2025-03-04T05:45:00", Price(0))
        assert passage.timestamp == datetime(2025, 3, 4, 6, 15)
        assert passage.charge == Price(8)
