"""TaxService - records passages and corrects their timestamps."""

import uuid
from typing import Optional

from .errors import AmbiguousRuleConfiguration, LedgerConsistencyError
from .evaluator import evaluate_passage
from .ledger import apply_charge, reverse_charge
from .logging_config import get_logger
from .passage import Passage, TimestampLike, parse_timestamp
from .price import Price
from .registry import CityRegistry, VehicleRegistry
from .results import PassageCharge, PassageCorrection
from .vehicle import Vehicle

logger = get_logger("service")


class TaxService:
    """
    Write operations over the registries.

    Each operation validates its input, evaluates the charge against the city
    snapshot current at the start, and only then touches the vehicle. An
    error at any step leaves the vehicle exactly as it was.
    """

    def __init__(self, cities: CityRegistry, vehicles: VehicleRegistry):
        self.cities = cities
        self.vehicles = vehicles

    def _evaluate(self, vehicle: Vehicle, timestamp) -> Price:
        city = self.cities.load_city(vehicle.city_id)
        try:
            return evaluate_passage(vehicle, city, timestamp)
        except AmbiguousRuleConfiguration as exc:
            logger.warning(
                "ambiguous rule configuration",
                extra={
                    "city_id": city.city_id,
                    "vehicle_id": vehicle.vehicle_id,
                    "rule_ids": list(exc.rule_ids),
                    "time_of_day": exc.time_of_day,
                },
            )
            raise

    def quote(self, vehicle_id: str, timestamp: TimestampLike) -> Price:
        """Charge a passage would incur, without recording it."""
        moment = parse_timestamp(timestamp)
        vehicle = self.vehicles.load_vehicle(vehicle_id)
        return self._evaluate(vehicle, moment)

    def record_passage(
        self,
        vehicle_id: str,
        timestamp: TimestampLike,
        passage_id: Optional[str] = None,
    ) -> PassageCharge:
        """Evaluate a new passage and add its charge to the vehicle."""
        moment = parse_timestamp(timestamp)
        passage_id = passage_id or uuid.uuid4().hex

        with self.vehicles.exclusive(vehicle_id) as vehicle:
            charge = self._evaluate(vehicle, moment)
            passage = Passage(passage_id, vehicle.vehicle_id, moment, charge)
            self.vehicles.index_passage(passage)
            vehicle.append_passage(passage)
            apply_charge(vehicle, charge)
            new_total = vehicle.total_accumulated

        logger.info(
            "passage recorded",
            extra={
                "vehicle_id": vehicle_id,
                "passage_id": passage_id,
                "timestamp": moment,
                "charge": charge,
                "new_total": new_total,
            },
        )
        return PassageCharge(passage=passage, charge=charge, new_total=new_total)

    def correct_passage_timestamp(
        self, passage_id: str, new_timestamp: TimestampLike
    ) -> PassageCorrection:
        """
        Move a passage to a new timestamp and re-price it.

        The old charge is reversed and the new one applied. ``last_charge``
        only changes when the corrected passage is the most recently recorded.
        """
        moment = parse_timestamp(new_timestamp)
        vehicle_id = self.vehicles.vehicle_id_for_passage(passage_id)

        with self.vehicles.exclusive(vehicle_id) as vehicle:
            passage = vehicle.get_passage(passage_id)
            new_charge = self._evaluate(vehicle, moment)
            old_charge = passage.charge
            is_last = vehicle.last_passage.passage_id == passage_id

            try:
                reverse_charge(vehicle, old_charge)
            except LedgerConsistencyError:
                logger.error(
                    "ledger inconsistent on correction",
                    extra={
                        "vehicle_id": vehicle_id,
                        "passage_id": passage_id,
                        "old_charge": old_charge,
                        "total": vehicle.total_accumulated,
                    },
                )
                raise
            apply_charge(vehicle, new_charge, record_last=is_last)
            corrected = passage.corrected(moment, new_charge)
            vehicle.replace_passage(corrected)
            new_total = vehicle.total_accumulated

        logger.info(
            "passage corrected",
            extra={
                "vehicle_id": vehicle_id,
                "passage_id": passage_id,
                "timestamp": moment,
                "old_charge": old_charge,
                "new_charge": new_charge,
                "new_total": new_total,
            },
        )
        return PassageCorrection(
            passage=corrected,
            old_charge=old_charge,
            new_charge=new_charge,
            new_total=new_total,
        )
