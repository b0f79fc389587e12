"""
In-memory registries for city snapshots and vehicle aggregates.

CityRegistry publishes each configuration change as a whole new City
snapshot. Readers pick up whichever snapshot is current and keep using it for
the rest of their evaluation; they never lock.

VehicleRegistry hands out one lock per vehicle. Ledger writes for a vehicle
happen inside ``exclusive(vehicle_id)``, so at most one writer touches a
vehicle at a time while different vehicles proceed in parallel.
"""

import threading
from contextlib import contextmanager
from datetime import date
from typing import Dict, Iterable, Iterator, List, Optional

from .city import City
from .errors import (
    CityNotFoundError,
    PassageNotFoundError,
    ValidationError,
    VehicleNotFoundError,
)
from .passage import Passage
from .plate import Plate
from .rule import TaxRule
from .vehicle import Vehicle


class CityRegistry:
    """Current City snapshot per city id."""

    def __init__(self, cities: Iterable[City] = ()):
        self._snapshots: Dict[str, City] = {c.city_id: c for c in cities}
        self._write_lock = threading.Lock()

    def load_city(self, city_id: str) -> City:
        """Return the current snapshot for a city."""
        city = self._snapshots.get(city_id)
        if city is None:
            raise CityNotFoundError(city_id)
        return city

    def city_ids(self) -> List[str]:
        return sorted(self._snapshots)

    def publish(self, city: City) -> City:
        """Make ``city`` the current snapshot for its id."""
        with self._write_lock:
            self._swap(city)
        return city

    def _swap(self, city: City) -> None:
        # Rebinding the mapping is atomic for readers
        snapshots = dict(self._snapshots)
        snapshots[city.city_id] = city
        self._snapshots = snapshots

    def add_rule(self, city_id: str, rule: TaxRule) -> City:
        with self._write_lock:
            city = self.load_city(city_id).with_rule(rule)
            self._swap(city)
        return city

    def remove_rule(self, city_id: str, rule_id: str) -> City:
        with self._write_lock:
            city = self.load_city(city_id).without_rule(rule_id)
            self._swap(city)
        return city

    def add_exempt_date(self, city_id: str, day: date) -> City:
        with self._write_lock:
            city = self.load_city(city_id).with_exempt_date(day)
            self._swap(city)
        return city

    def remove_exempt_date(self, city_id: str, day: date) -> City:
        with self._write_lock:
            city = self.load_city(city_id).without_exempt_date(day)
            self._swap(city)
        return city


class VehicleRegistry:
    """Vehicle aggregates keyed by id, with a lock per vehicle."""

    def __init__(self, vehicles: Iterable[Vehicle] = ()):
        self._vehicles: Dict[str, Vehicle] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._passage_index: Dict[str, str] = {}
        self._guard = threading.Lock()
        for vehicle in vehicles:
            self.add(vehicle)

    def add(self, vehicle: Vehicle) -> Vehicle:
        with self._guard:
            if vehicle.vehicle_id in self._vehicles:
                raise ValidationError(
                    f"Vehicle already registered: {vehicle.vehicle_id}", "vehicle_id"
                )
            for existing in self._vehicles.values():
                if existing.plate == vehicle.plate:
                    raise ValidationError(
                        f"Plate already registered: {vehicle.plate}", "plate"
                    )
            self._vehicles[vehicle.vehicle_id] = vehicle
            self._locks[vehicle.vehicle_id] = threading.Lock()
            for passage in vehicle.passages:
                self._passage_index[passage.passage_id] = vehicle.vehicle_id
        return vehicle

    def load_vehicle(self, vehicle_id: str) -> Vehicle:
        vehicle = self._vehicles.get(vehicle_id)
        if vehicle is None:
            raise VehicleNotFoundError(vehicle_id)
        return vehicle

    def find_by_plate(self, plate) -> Optional[Vehicle]:
        """Find a vehicle by plate (any case)."""
        if not isinstance(plate, Plate):
            plate = Plate(plate)
        for vehicle in list(self._vehicles.values()):
            if vehicle.plate == plate:
                return vehicle
        return None

    def all(self) -> List[Vehicle]:
        return list(self._vehicles.values())

    def vehicle_id_for_passage(self, passage_id: str) -> str:
        vehicle_id = self._passage_index.get(passage_id)
        if vehicle_id is None:
            raise PassageNotFoundError(passage_id)
        return vehicle_id

    def index_passage(self, passage: Passage) -> None:
        """Claim a new passage id for its vehicle."""
        with self._guard:
            if passage.passage_id in self._passage_index:
                raise ValidationError(
                    f"Passage id already used: {passage.passage_id}", "passage_id"
                )
            self._passage_index[passage.passage_id] = passage.vehicle_id

    def has_passage(self, passage_id: str) -> bool:
        return passage_id in self._passage_index

    @contextmanager
    def exclusive(self, vehicle_id: str) -> Iterator[Vehicle]:
        """Hold the vehicle's lock and yield the aggregate."""
        lock = self._locks.get(vehicle_id)
        if lock is None:
            raise VehicleNotFoundError(vehicle_id)
        with lock:
            yield self._vehicles[vehicle_id]
