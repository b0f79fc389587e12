"""Result records returned by the passage write operations."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .passage import Passage
    from .price import Price


@dataclass(frozen=True)
class PassageCharge:
    """Outcome of recording a passage."""

    passage: "Passage"
    charge: "Price"
    new_total: "Price"

    @property
    def is_charged(self) -> bool:
        return not self.charge.is_zero


@dataclass(frozen=True)
class PassageCorrection:
    """Outcome of moving a passage to a new timestamp."""

    passage: "Passage"
    old_charge: "Price"
    new_charge: "Price"
    new_total: "Price"

    @property
    def changed(self) -> bool:
        return self.old_charge != self.new_charge
