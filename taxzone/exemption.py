"""Exemption policy: vehicle class and city exempt dates."""

from datetime import date, datetime

from .city import City
from .vehicle import Vehicle


def is_exempt(vehicle: Vehicle, passage_date: date, city: City) -> bool:
    """
    Check whether a passage is tax-free.

    Either check is enough:
    - the vehicle's class is in the fixed always-exempt table
    - the passage's calendar day is one of the city's exempt dates

    Weekends and public holidays are not implied; they only count when
    configured as exempt dates.
    """
    if vehicle.is_exempt_class:
        return True
    if isinstance(passage_date, datetime):
        passage_date = passage_date.date()
    return city.is_exempt_date(passage_date)
