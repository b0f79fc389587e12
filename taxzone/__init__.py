"""
Congestion tax charge resolution.

This package records vehicle passages through a city's tax zone and prices
each one:
- Price, TimeWindow, Plate: validated value types
- VehicleClass: vehicle categories and the fixed exemption table
- TaxRule, City, ExemptDate: a city's rule and exempt-date configuration
- Passage, Vehicle: recorded passages and the vehicle ledger aggregate
- resolve, is_exempt, evaluate_passage: pure charge evaluation
- apply_charge, reverse_charge, verify_ledger: ledger writes and audit
- CityRegistry, VehicleRegistry, TaxService: snapshots, locking, write operations
"""

from .errors import (
    TaxZoneError,
    ValidationError,
    AmbiguousRuleConfiguration,
    LedgerConsistencyError,
    NotFoundError,
    CityNotFoundError,
    VehicleNotFoundError,
    PassageNotFoundError,
    RuleNotFoundError,
    ExemptDateNotFoundError,
)
from .price import Price
from .time_window import TimeWindow
from .plate import Plate
from .vehicle_class import VehicleClass, EXEMPTION_TABLE, is_exempt_class
from .rule import TaxRule
from .city import City, ExemptDate
from .passage import Passage, parse_timestamp
from .vehicle import Vehicle
from .resolver import find_rule, resolve
from .exemption import is_exempt
from .evaluator import evaluate_passage
from .ledger import apply_charge, reverse_charge, verify_ledger
from .results import PassageCharge, PassageCorrection
from .registry import CityRegistry, VehicleRegistry
from .service import TaxService
from .loader import load_city, load_vehicles, load_registries

__all__ = [
    "TaxZoneError",
    "ValidationError",
    "AmbiguousRuleConfiguration",
    "LedgerConsistencyError",
    "NotFoundError",
    "CityNotFoundError",
    "VehicleNotFoundError",
    "PassageNotFoundError",
    "RuleNotFoundError",
    "ExemptDateNotFoundError",
    "Price",
    "TimeWindow",
    "Plate",
    "VehicleClass",
    "EXEMPTION_TABLE",
    "is_exempt_class",
    "TaxRule",
    "City",
    "ExemptDate",
    "Passage",
    "parse_timestamp",
    "Vehicle",
    "find_rule",
    "resolve",
    "is_exempt",
    "evaluate_passage",
    "apply_charge",
    "reverse_charge",
    "verify_ledger",
    "PassageCharge",
    "PassageCorrection",
    "CityRegistry",
    "VehicleRegistry",
    "TaxService",
    "load_city",
    "load_vehicles",
    "load_registries",
]
