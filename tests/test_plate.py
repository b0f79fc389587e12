#!/usr/bin/env python3
"""Tests for Plate value type."""
import dataclasses

import pytest
from taxzone import Plate, ValidationError


class TestPlate:
    """Tests for Plate validation."""

    def test_valid_plate(self):
        assert Plate("ABC123").value == "ABC123"

    def test_normalizes_case_and_whitespace(self):
        assert Plate(" abc123 ").value == "ABC123"
        assert Plate("abc123") == Plate("ABC123")

    @pytest.mark.parametrize(
        "value", ["AB123", "ABCD123", "ABC12", "ABC1234", "123ABC", "AB-123", "", "ÅBC123"]
    )
    def test_invalid_formats(self, value):
        with pytest.raises(ValidationError):
            Plate(value)

    def test_non_string_rejected(self):
        with pytest.raises(ValidationError):
            Plate(123456)

    def test_immutable(self):
        plate = Plate("ABC123")
        with pytest.raises(dataclasses.FrozenInstanceError):
            plate.value = "XYZ789"

    def test_str(self):
        assert str(Plate("xyz789")) == "XYZ789"
