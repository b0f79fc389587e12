"""Charge evaluation for a single passage."""

from .city import City
from .exemption import is_exempt
from .passage import TimestampLike, parse_timestamp
from .price import Price
from .resolver import resolve
from .vehicle import Vehicle


def evaluate_passage(vehicle: Vehicle, city: City, timestamp: TimestampLike) -> Price:
    """
    Compute the charge for one passage without touching any state.

    Logic:
    - Exempt vehicle class or exempt date: zero
    - Otherwise the price of the rule covering the time of day
    - No rule covers the time: zero

    Raises AmbiguousRuleConfiguration when overlapping rules can't be told
    apart. Same inputs always give the same price.
    """
    moment = parse_timestamp(timestamp)

    if is_exempt(vehicle, moment.date(), city):
        return Price.zero()

    price = resolve(moment.time(), city.rules)
    if price is None:
        return Price.zero()
    return price
