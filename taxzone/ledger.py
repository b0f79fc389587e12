"""Ledger writes on a vehicle's running totals."""

from .errors import LedgerConsistencyError, ValidationError
from .price import Price
from .vehicle import Vehicle


def apply_charge(vehicle: Vehicle, charge: Price, record_last: bool = True) -> Vehicle:
    """
    Add a charge to the vehicle total.

    With ``record_last`` the charge also becomes ``last_charge``; corrections
    of older passages pass False so the latest recorded charge stays put.
    """
    new_total = vehicle.total_accumulated + charge
    vehicle.total_accumulated = new_total
    if record_last:
        vehicle.last_charge = charge
    vehicle.version += 1
    return vehicle


def reverse_charge(vehicle: Vehicle, old_charge: Price) -> Vehicle:
    """Take a previously applied charge back off the vehicle total."""
    try:
        new_total = vehicle.total_accumulated - old_charge
    except ValidationError:
        raise LedgerConsistencyError(
            f"Reversing {old_charge} from total {vehicle.total_accumulated} "
            f"of vehicle {vehicle.vehicle_id} would go negative",
            vehicle.vehicle_id,
        )
    vehicle.total_accumulated = new_total
    vehicle.version += 1
    return vehicle


def verify_ledger(vehicle: Vehicle) -> None:
    """Raise LedgerConsistencyError if the total and passage history disagree."""
    expected = vehicle.recomputed_total
    if vehicle.total_accumulated != expected:
        raise LedgerConsistencyError(
            f"Vehicle {vehicle.vehicle_id} total {vehicle.total_accumulated} "
            f"does not match its passages ({expected})",
            vehicle.vehicle_id,
        )
