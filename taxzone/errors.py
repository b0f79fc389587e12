"""
Typed exceptions for tax charge resolution.

Every error carries a machine-readable ``code`` plus the structured data
needed to act on it, so callers catch by type rather than by message.

    TaxZoneError
    +-- ValidationError              malformed price, window, plate, timestamp
    +-- AmbiguousRuleConfiguration   resolver tie-break exhausted
    +-- LedgerConsistencyError       ledger and passage history diverged
    +-- NotFoundError
        +-- CityNotFoundError
        +-- VehicleNotFoundError
        +-- PassageNotFoundError
        +-- RuleNotFoundError
        +-- ExemptDateNotFoundError
"""

from datetime import time
from typing import Iterable, Optional


class TaxZoneError(Exception):
    """Base class for all errors raised by the taxzone package."""

    code: str = "TAXZONE_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(TaxZoneError, ValueError):
    """A value failed validation at construction time."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None, value=None):
        self.field = field
        self.value = value
        super().__init__(message)


class AmbiguousRuleConfiguration(TaxZoneError):
    """More than one rule remains after the narrowest/earliest tie-break."""

    code = "AMBIGUOUS_RULE_CONFIGURATION"

    def __init__(self, time_of_day: time, rule_ids: Iterable[str]):
        self.time_of_day = time_of_day
        self.rule_ids = tuple(rule_ids)
        super().__init__(
            f"Rules {', '.join(self.rule_ids)} all match {time_of_day.isoformat()} "
            "with the same duration and start"
        )


class LedgerConsistencyError(TaxZoneError):
    """A ledger write would leave the vehicle total inconsistent."""

    code = "LEDGER_CONSISTENCY_ERROR"

    def __init__(self, message: str, vehicle_id: Optional[str] = None):
        self.vehicle_id = vehicle_id
        super().__init__(message)


class NotFoundError(TaxZoneError):
    """Lookup of an entity by id failed."""

    code = "NOT_FOUND"
    entity = "entity"

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f"Unknown {self.entity}: {entity_id}")


class CityNotFoundError(NotFoundError):
    code = "CITY_NOT_FOUND"
    entity = "city"


class VehicleNotFoundError(NotFoundError):
    code = "VEHICLE_NOT_FOUND"
    entity = "vehicle"


class PassageNotFoundError(NotFoundError):
    code = "PASSAGE_NOT_FOUND"
    entity = "passage"


class RuleNotFoundError(NotFoundError):
    code = "RULE_NOT_FOUND"
    entity = "rule"


class ExemptDateNotFoundError(NotFoundError):
    code = "EXEMPT_DATE_NOT_FOUND"
    entity = "exempt date"
