"""YAML loading and saving utilities for city data files."""

from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml

from .city import City, ExemptDate
from .errors import (
    ExemptDateNotFoundError,
    PassageNotFoundError,
    RuleNotFoundError,
    ValidationError,
    VehicleNotFoundError,
)
from .passage import Passage
from .plate import Plate
from .price import Price
from .registry import CityRegistry, VehicleRegistry
from .rule import TaxRule
from .time_window import TimeWindow
from .vehicle import Vehicle

PathLike = Union[str, Path]


def _parse_day(value: Any) -> date:
    """Exempt dates may arrive as YAML dates or ISO strings."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"Invalid date: {value!r}", "date", value)


def _parse_rule(dct: Dict[str, Any], city_id: str) -> TaxRule:
    return TaxRule(
        TimeWindow.parse(dct["start"], dct["end"]),
        Price(dct["amount"]),
        city_id,
        dct.get("id"),
    )


def _parse_exempt_date(dct: Dict[str, Any], city_id: str) -> ExemptDate:
    return ExemptDate(_parse_day(dct["date"]), city_id, dct.get("id"))


def _parse_passage(dct: Dict[str, Any], vehicle_id: str) -> Passage:
    return Passage(
        str(dct["id"]),
        vehicle_id,
        dct["timestamp"],
        Price(dct.get("charge", 0)),
    )


def _parse_vehicle(dct: Dict[str, Any], city_id: str) -> Vehicle:
    plate = Plate(dct["plate"])
    vehicle_id = str(dct.get("id") or plate.value)
    passages = [_parse_passage(p, vehicle_id) for p in dct.get("passages") or []]
    total = dct.get("totalTax")
    last = dct.get("lastTax")
    return Vehicle(
        plate,
        dct.get("vehicleClass", "taxable"),
        city_id,
        vehicle_id,
        passages,
        Price(total) if total is not None else None,
        Price(last) if last is not None else None,
    )


def _parse_city(data: Dict[str, Any]) -> City:
    meta = data.get("city") or {}
    city_id = str(meta.get("id") or meta.get("name", "")).strip().lower()
    return City(
        city_id,
        meta.get("name", ""),
        [_parse_rule(r, city_id) for r in data.get("rules") or []],
        [_parse_exempt_date(d, city_id) for d in data.get("exemptDates") or []],
    )


def _read_raw(filename: PathLike) -> Dict[str, Any]:
    with open(filename, "r") as fp:
        return yaml.load(fp, Loader=yaml.SafeLoader) or {}


def _write_raw(filename: PathLike, data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def load_city(filename: PathLike) -> City:
    """Load a city snapshot (rules and exempt dates) from a YAML file."""
    return _parse_city(_read_raw(filename))


def load_vehicles(filename: PathLike) -> List[Vehicle]:
    """Load the vehicles registered in a city YAML file."""
    data = _read_raw(filename)
    city = _parse_city(data)
    return [_parse_vehicle(v, city.city_id) for v in data.get("vehicles") or []]


def load_registries(filename: PathLike) -> Tuple[CityRegistry, VehicleRegistry]:
    """Load a city file into fresh registries."""
    data = _read_raw(filename)
    city = _parse_city(data)
    vehicles = [_parse_vehicle(v, city.city_id) for v in data.get("vehicles") or []]
    return CityRegistry([city]), VehicleRegistry(vehicles)


# =============================================================================
# Serialization
# =============================================================================


def _rule_to_dict(rule: TaxRule) -> Dict[str, Any]:
    """Serialize a TaxRule to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {}
    if rule.rule_id != rule.window.key:
        d["id"] = rule.rule_id
    d["start"] = rule.start.isoformat()
    d["end"] = rule.end.isoformat()
    d["amount"] = str(rule.price)
    return d


def _passage_to_dict(passage: Passage) -> Dict[str, Any]:
    return {
        "id": passage.passage_id,
        "timestamp": passage.timestamp.isoformat(),
        "charge": str(passage.charge),
    }


def _vehicle_to_dict(vehicle: Vehicle) -> Dict[str, Any]:
    d: Dict[str, Any] = {}
    if vehicle.vehicle_id != vehicle.plate.value:
        d["id"] = vehicle.vehicle_id
    d["plate"] = vehicle.plate.value
    d["vehicleClass"] = vehicle.vehicle_class.value
    d["totalTax"] = str(vehicle.total_accumulated)
    d["lastTax"] = str(vehicle.last_charge)
    d["passages"] = [_passage_to_dict(p) for p in vehicle.passages]
    return d


def _find_vehicle_dict(data: Dict[str, Any], vehicle: Vehicle) -> Dict[str, Any]:
    for entry in data.get("vehicles") or []:
        entry_id = entry.get("id") or str(entry.get("plate", "")).strip().upper()
        if entry_id == vehicle.vehicle_id:
            return entry
    raise VehicleNotFoundError(vehicle.vehicle_id)


def _rule_dict_id(dct: Dict[str, Any]) -> str:
    if dct.get("id"):
        return dct["id"]
    return TimeWindow.parse(dct["start"], dct["end"]).key


# =============================================================================
# Writes
# =============================================================================


def create_city(filename: PathLike, city: City) -> None:
    """
    Create a new city YAML file.

    Initializes with the city's rules and exempt dates and no vehicles.
    """
    data: Dict[str, Any] = {
        "city": {"id": city.city_id, "name": city.name},
        "rules": [_rule_to_dict(r) for r in city.rules],
        "exemptDates": [{"date": d.day.isoformat()} for d in city.exempt_dates],
        "vehicles": [],
    }
    _write_raw(filename, data)


def add_vehicle(filename: PathLike, vehicle: Vehicle) -> None:
    """Append a vehicle to a city YAML file."""
    data = _read_raw(filename)
    if data.get("vehicles") is None:
        data["vehicles"] = []
    data["vehicles"].append(_vehicle_to_dict(vehicle))
    _write_raw(filename, data)


def save_passage(filename: PathLike, vehicle: Vehicle, passage: Passage) -> None:
    """
    Append a recorded passage to its vehicle in a city YAML file.

    The vehicle's totalTax and lastTax are written alongside so the file
    stays consistent with the ledger.
    """
    data = _read_raw(filename)
    entry = _find_vehicle_dict(data, vehicle)

    if entry.get("passages") is None:
        entry["passages"] = []
    entry["passages"].append(_passage_to_dict(passage))
    entry["totalTax"] = str(vehicle.total_accumulated)
    entry["lastTax"] = str(vehicle.last_charge)

    _write_raw(filename, data)


def update_passage(filename: PathLike, vehicle: Vehicle, passage: Passage) -> None:
    """Replace a corrected passage (matched by id) and the vehicle's totals."""
    data = _read_raw(filename)
    entry = _find_vehicle_dict(data, vehicle)

    passages = entry.get("passages") or []
    for index, existing in enumerate(passages):
        if str(existing.get("id")) == passage.passage_id:
            passages[index] = _passage_to_dict(passage)
            break
    else:
        raise PassageNotFoundError(passage.passage_id)

    entry["totalTax"] = str(vehicle.total_accumulated)
    entry["lastTax"] = str(vehicle.last_charge)

    _write_raw(filename, data)


def add_rule(filename: PathLike, rule: TaxRule) -> None:
    """Append a rule to a city YAML file."""
    data = _read_raw(filename)
    if data.get("rules") is None:
        data["rules"] = []
    data["rules"].append(_rule_to_dict(rule))
    _write_raw(filename, data)


def delete_rule(filename: PathLike, rule_id: str) -> None:
    """Remove the rule with the given id (explicit or natural key)."""
    data = _read_raw(filename)
    rules = data.get("rules") or []
    remaining = [r for r in rules if _rule_dict_id(r) != rule_id]
    if len(remaining) == len(rules):
        raise RuleNotFoundError(rule_id)
    data["rules"] = remaining
    _write_raw(filename, data)


def add_exempt_date(filename: PathLike, day: date) -> None:
    """Append an exempt date to a city YAML file."""
    data = _read_raw(filename)
    if data.get("exemptDates") is None:
        data["exemptDates"] = []
    data["exemptDates"].append({"date": day.isoformat()})
    _write_raw(filename, data)


def delete_exempt_date(filename: PathLike, day: date) -> None:
    """Remove an exempt date from a city YAML file."""
    data = _read_raw(filename)
    dates = data.get("exemptDates") or []
    remaining = [d for d in dates if _parse_day(d["date"]) != day]
    if len(remaining) == len(dates):
        raise ExemptDateNotFoundError(day.isoformat())
    data["exemptDates"] = remaining
    _write_raw(filename, data)
