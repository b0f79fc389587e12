"""Plate value type for vehicle registration numbers."""

import re
from dataclasses import dataclass

from .errors import ValidationError

PLATE_PATTERN = re.compile(r"^[A-Z]{3}[0-9]{3}$")


@dataclass(frozen=True)
class Plate:
    """Registration plate: three letters followed by three digits."""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise ValidationError(f"Invalid plate: {self.value!r}", "plate", self.value)
        normalized = self.value.strip().upper()
        if not PLATE_PATTERN.match(normalized):
            raise ValidationError(
                f"Plate must be three letters followed by three digits: {self.value!r}",
                "plate",
                self.value,
            )
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
