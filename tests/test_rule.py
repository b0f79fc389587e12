#!/usr/bin/env python3
"""Tests for TaxRule class."""
from datetime import time

from taxzone import Price, TaxRule, TimeWindow


class TestTaxRule:
    """Tests for TaxRule class."""

    def test_id_defaults_to_window_key(self):
        """Id is the window's natural key when not given."""
        rule = TaxRule(TimeWindow.parse("06:00", "06:30"), Price(8))
        assert rule.rule_id == "06:00:00-06:30:00"

    def test_explicit_id(self):
        rule = TaxRule(TimeWindow.parse("06:00", "06:30"), Price(8), "gbg", "morning")
        assert rule.rule_id == "morning"
        assert rule.city_id == "gbg"

    def test_start_and_end(self):
        rule = TaxRule(TimeWindow.parse("06:00", "06:30"), Price(8))
        assert rule.start == time(6, 0)
        assert rule.end == time(6, 30)

    def test_applies_at_inside(self):
        rule = TaxRule(TimeWindow.parse("06:00", "06:30"), Price(8))
        assert rule.applies_at(time(6, 0))
        assert rule.applies_at(time(6, 15))

    def test_applies_at_boundaries(self):
        """Start is inclusive, end is exclusive."""
        rule = TaxRule(TimeWindow.parse("06:00", "06:30"), Price(8))
        assert not rule.applies_at(time(5, 59, 59))
        assert rule.applies_at(time(6, 29, 59, 999999))
        assert not rule.applies_at(time(6, 30))
