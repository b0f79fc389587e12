"""VehicleClass enum and the fixed exemption table."""

from enum import Enum
from typing import Dict

from .errors import ValidationError

# Legal category labels, mapped to member values
CLASS_ALIASES: Dict[str, str] = {
    "standard": "taxable",
    "two-wheeled": "motorcycle",
    "agricultural": "tractor",
    "diplomatic": "diplomat",
    "foreign-registered": "foreign",
}


class VehicleClass(Enum):
    """Legal vehicle categories. Every class but TAXABLE is always exempt."""

    TAXABLE = "taxable"
    MOTORCYCLE = "motorcycle"  # two-wheeled
    TRACTOR = "tractor"  # agricultural
    EMERGENCY = "emergency"
    DIPLOMAT = "diplomat"
    FOREIGN = "foreign"
    MILITARY = "military"
    BUS = "bus"

    @classmethod
    def parse(cls, value) -> "VehicleClass":
        """Look up a class by value, member name or legal label, ignoring case."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            for member in cls:
                if text in (member.value, member.name.lower()):
                    return member
            if text in CLASS_ALIASES:
                return cls(CLASS_ALIASES[text])
        raise ValidationError(f"Unknown vehicle class: {value!r}", "vehicleClass", value)


EXEMPTION_TABLE: Dict[VehicleClass, bool] = {
    VehicleClass.TAXABLE: False,
    VehicleClass.MOTORCYCLE: True,
    VehicleClass.TRACTOR: True,
    VehicleClass.EMERGENCY: True,
    VehicleClass.DIPLOMAT: True,
    VehicleClass.FOREIGN: True,
    VehicleClass.MILITARY: True,
    VehicleClass.BUS: True,
}


def is_exempt_class(vehicle_class: VehicleClass) -> bool:
    """Check the fixed table; the answer depends on nothing but the class."""
    return EXEMPTION_TABLE[vehicle_class]
