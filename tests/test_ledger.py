#!/usr/bin/env python3
"""Tests for ledger writes and the ledger audit."""
import pytest
from taxzone import (
    LedgerConsistencyError,
    Passage,
    Price,
    Vehicle,
    VehicleClass,
    apply_charge,
    reverse_charge,
    verify_ledger,
)


@pytest.fixture
def vehicle():
    return Vehicle(
        "ABC123",
        VehicleClass.TAXABLE,
        "gbg",
        passages=[Passage("p1", "ABC123", "2025-03-04T06:15:00", Price(8))],
    )


class TestApplyCharge:
    """Tests for apply_charge."""

    def test_adds_and_records_last(self, vehicle):
        apply_charge(vehicle, Price(13))
        assert vehicle.total_accumulated == Price(21)
        assert vehicle.last_charge == Price(13)
        assert vehicle.version == 1

    def test_zero_charge_still_recorded(self, vehicle):
        apply_charge(vehicle, Price(0))
        assert vehicle.total_accumulated == Price(8)
        assert vehicle.last_charge == Price(0)

    def test_without_recording_last(self, vehicle):
        apply_charge(vehicle, Price(13), record_last=False)
        assert vehicle.total_accumulated == Price(21)
        assert vehicle.last_charge == Price(8)


class TestReverseCharge:
    """Tests for reverse_charge."""

    def test_subtracts(self, vehicle):
        reverse_charge(vehicle, Price(8))
        assert vehicle.total_accumulated == Price(0)
        assert vehicle.version == 1

    def test_leaves_last_charge(self, vehicle):
        reverse_charge(vehicle, Price(8))
        assert vehicle.last_charge == Price(8)

    def test_overdraw_raises_and_leaves_vehicle(self, vehicle):
        with pytest.raises(LedgerConsistencyError) as excinfo:
            reverse_charge(vehicle, Price(18))
        assert excinfo.value.vehicle_id == "ABC123"
        assert vehicle.total_accumulated == Price(8)
        assert vehicle.version == 0


class TestVerifyLedger:
    """Tests for verify_ledger."""

    def test_consistent(self, vehicle):
        verify_ledger(vehicle)

    def test_mismatch(self, vehicle):
        vehicle.total_accumulated = Price(50)
        with pytest.raises(LedgerConsistencyError):
            verify_ledger(vehicle)
