"""Vehicle class - the aggregate holding a vehicle's ledger and passages."""

from datetime import date
from functools import reduce
from operator import add
from typing import List, Optional

from .errors import PassageNotFoundError, ValidationError
from .passage import Passage
from .plate import Plate
from .price import Price
from .vehicle_class import VehicleClass, is_exempt_class


class Vehicle:
    """Registered vehicle with its exemption class, running totals and passages."""

    def __init__(
        self,
        plate: Plate,
        vehicle_class: VehicleClass,
        city_id: Optional[str] = None,
        vehicle_id: Optional[str] = None,
        passages: Optional[List[Passage]] = None,
        total_accumulated: Optional[Price] = None,
        last_charge: Optional[Price] = None,
    ):
        if not isinstance(plate, Plate):
            plate = Plate(plate)
        self._plate = plate
        self.vehicle_class = VehicleClass.parse(vehicle_class)
        self.city_id = city_id
        self.vehicle_id = vehicle_id or plate.value
        self._passages: List[Passage] = list(passages or [])
        for passage in self._passages:
            if passage.vehicle_id != self.vehicle_id:
                raise ValidationError(
                    f"Passage {passage.passage_id} belongs to {passage.vehicle_id}, "
                    f"not {self.vehicle_id}",
                    "passages",
                )
        if total_accumulated is None:
            total_accumulated = self.recomputed_total
        if last_charge is None:
            last = self.last_passage
            last_charge = last.charge if last else Price.zero()
        self.total_accumulated = total_accumulated
        self.last_charge = last_charge
        self.version = 0

    @property
    def plate(self) -> Plate:
        """Plate is fixed once validated."""
        return self._plate

    @property
    def is_exempt_class(self) -> bool:
        return is_exempt_class(self.vehicle_class)

    @property
    def passages(self) -> List[Passage]:
        """Passages in recording order (a copy)."""
        return list(self._passages)

    @property
    def last_passage(self) -> Optional[Passage]:
        """The most recently recorded passage, regardless of its timestamp."""
        if not self._passages:
            return None
        return self._passages[-1]

    @property
    def recomputed_total(self) -> Price:
        """Sum of the charges attributed to every passage."""
        return reduce(add, (p.charge for p in self._passages), Price.zero())

    def get_passage(self, passage_id: str) -> Passage:
        for passage in self._passages:
            if passage.passage_id == passage_id:
                return passage
        raise PassageNotFoundError(passage_id)

    def has_passage(self, passage_id: str) -> bool:
        return any(p.passage_id == passage_id for p in self._passages)

    def passages_on(self, day: date) -> List[Passage]:
        """All passages recorded for a calendar day."""
        return [p for p in self._passages if p.timestamp.date() == day]

    def get_passages_sorted(self, reverse: bool = True) -> List[Passage]:
        """Passages sorted by timestamp, newest first by default."""
        return sorted(self._passages, key=lambda p: p.timestamp, reverse=reverse)

    def append_passage(self, passage: Passage) -> None:
        """Append a passage; the collection is append-only."""
        if passage.vehicle_id != self.vehicle_id:
            raise ValidationError(
                f"Passage {passage.passage_id} belongs to {passage.vehicle_id}",
                "vehicle_id",
            )
        if self.has_passage(passage.passage_id):
            raise ValidationError(
                f"Duplicate passage id: {passage.passage_id}", "passage_id"
            )
        self._passages.append(passage)

    def replace_passage(self, passage: Passage) -> None:
        """Swap in a corrected passage, keeping its recording position."""
        for index, existing in enumerate(self._passages):
            if existing.passage_id == passage.passage_id:
                self._passages[index] = passage
                return
        raise PassageNotFoundError(passage.passage_id)

    def __repr__(self) -> str:
        return (
            f"Vehicle({self.vehicle_id!r}, {self._plate}, {self.vehicle_class.name}, "
            f"total={self.total_accumulated})"
        )
