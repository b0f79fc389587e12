#!/usr/bin/env python3
"""Tests for the Vehicle aggregate."""
from datetime import date

import pytest
from taxzone import (
    Passage,
    PassageNotFoundError,
    Plate,
    Price,
    ValidationError,
    Vehicle,
    VehicleClass,
)


def passage(passage_id, timestamp, charge, vehicle_id="ABC123"):
    return Passage(passage_id, vehicle_id, timestamp, Price(charge))


class TestVehicleConstruction:
    """Tests for Vehicle construction and defaults."""

    def test_defaults(self):
        vehicle = Vehicle("abc123", VehicleClass.TAXABLE, "gbg")
        assert vehicle.plate == Plate("ABC123")
        assert vehicle.vehicle_id == "ABC123"
        assert vehicle.total_accumulated == Price(0)
        assert vehicle.last_charge == Price(0)
        assert vehicle.passages == []
        assert vehicle.version == 0

    def test_class_parsed_from_string(self):
        vehicle = Vehicle("ABC123", "motorcycle")
        assert vehicle.vehicle_class is VehicleClass.MOTORCYCLE
        assert vehicle.is_exempt_class

    def test_invalid_plate_rejected(self):
        with pytest.raises(ValidationError):
            Vehicle("AB1234", VehicleClass.TAXABLE)

    def test_plate_is_read_only(self):
        vehicle = Vehicle("ABC123", VehicleClass.TAXABLE)
        with pytest.raises(AttributeError):
            vehicle.plate = Plate("XYZ789")

    def test_totals_computed_from_passages(self):
        """Without explicit totals, the ledger is rebuilt from passages."""
        vehicle = Vehicle(
            "ABC123",
            VehicleClass.TAXABLE,
            passages=[
                passage("p1", "2025-03-04T06:15:00", 8),
                passage("p2", "2025-03-04T16:05:00", 18),
            ],
        )
        assert vehicle.total_accumulated == Price(26)
        assert vehicle.last_charge == Price(18)

    def test_explicit_totals_take_precedence(self):
        vehicle = Vehicle(
            "ABC123",
            VehicleClass.TAXABLE,
            passages=[passage("p1", "2025-03-04T06:15:00", 8)],
            total_accumulated=Price(50),
            last_charge=Price(8),
        )
        assert vehicle.total_accumulated == Price(50)
        assert vehicle.recomputed_total == Price(8)

    def test_foreign_passage_rejected(self):
        with pytest.raises(ValidationError):
            Vehicle(
                "ABC123",
                VehicleClass.TAXABLE,
                passages=[passage("p1", "2025-03-04T06:15:00", 8, vehicle_id="XYZ789")],
            )


class TestVehiclePassages:
    """Tests for passage queries and updates."""

    @pytest.fixture
    def vehicle(self):
        return Vehicle(
            "ABC123",
            VehicleClass.TAXABLE,
            passages=[
                passage("p1", "2025-03-04T16:05:00", 18),
                passage("p2", "2025-03-04T06:15:00", 8),
                passage("p3", "2025-03-05T07:10:00", 18),
            ],
        )

    def test_last_passage_is_recording_order(self, vehicle):
        """Last passage is the last recorded, not the latest timestamp."""
        vehicle.append_passage(passage("p4", "2025-03-01T06:15:00", 8))
        assert vehicle.last_passage.passage_id == "p4"

    def test_get_passage(self, vehicle):
        assert vehicle.get_passage("p2").charge == Price(8)

    def test_get_passage_unknown(self, vehicle):
        with pytest.raises(PassageNotFoundError):
            vehicle.get_passage("nope")

    def test_passages_on(self, vehicle):
        on_day = vehicle.passages_on(date(2025, 3, 4))
        assert [p.passage_id for p in on_day] == ["p1", "p2"]

    def test_sorted_newest_first(self, vehicle):
        ids = [p.passage_id for p in vehicle.get_passages_sorted()]
        assert ids == ["p3", "p1", "p2"]

    def test_sorted_ascending(self, vehicle):
        ids = [p.passage_id for p in vehicle.get_passages_sorted(reverse=False)]
        assert ids == ["p2", "p1", "p3"]

    def test_append_duplicate_rejected(self, vehicle):
        with pytest.raises(ValidationError):
            vehicle.append_passage(passage("p1", "2025-03-06T06:15:00", 8))

    def test_append_foreign_rejected(self, vehicle):
        with pytest.raises(ValidationError):
            vehicle.append_passage(
                passage("p9", "2025-03-06T06:15:00", 8, vehicle_id="XYZ789")
            )

    def test_passages_returns_copy(self, vehicle):
        vehicle.passages.clear()
        assert len(vehicle.passages) == 3

    def test_replace_passage_keeps_position(self, vehicle):
        vehicle.replace_passage(passage("p2", "2025-03-04T05:45:00", 0))
        assert [p.passage_id for p in vehicle.passages] == ["p1", "p2", "p3"]
        assert vehicle.get_passage("p2").charge == Price(0)

    def test_replace_unknown_passage(self, vehicle):
        with pytest.raises(PassageNotFoundError):
            vehicle.replace_passage(passage("p9", "2025-03-04T05:45:00", 0))
