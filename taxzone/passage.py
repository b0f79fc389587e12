"""Passage class for recorded trips through the tax zone."""
from datetime import date, datetime
from typing import Union

from dateutil.parser import isoparse

from .errors import ValidationError
from .price import Price

TimestampLike = Union[datetime, str]


def _require_naive(moment: datetime, value) -> datetime:
    if moment.tzinfo is not None:
        raise ValidationError(
            f"Timestamp must be local time without a UTC offset: {value!r}",
            "timestamp",
            value,
        )
    return moment


def parse_timestamp(value: TimestampLike) -> datetime:
    """
    Validate a passage timestamp.

    Accepts a naive ``datetime`` or an ISO-8601 string with both date and
    time, read as local time. A bare date is rejected: a passage happens at an
    instant. So is a UTC offset, since rule windows are local clock times.
    """
    if isinstance(value, datetime):
        return _require_naive(value, value)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        # date-only forms are at most 10 characters (YYYY-MM-DD)
        if len(text) <= 10:
            raise ValidationError(
                f"Timestamp needs a time of day: {value!r}", "timestamp", value
            )
        try:
            moment = isoparse(text)
        except (ValueError, OverflowError):
            raise ValidationError(f"Invalid timestamp: {value!r}", "timestamp", value)
        return _require_naive(moment, value)
    if isinstance(value, date):
        raise ValidationError(
            f"Timestamp needs a time of day: {value.isoformat()}", "timestamp", value
        )
    raise ValidationError(f"Invalid timestamp: {value!r}", "timestamp", value)


class Passage:
    """A single recorded passage and the charge attributed to it."""

    def __init__(
            self,
            passage_id: str,
            vehicle_id: str,
            timestamp: TimestampLike,
            charge: Price,
    ):
        self._passage_id = passage_id
        self._vehicle_id = vehicle_id
        self._timestamp = parse_timestamp(timestamp)
        self._charge = charge

    @property
    def passage_id(self) -> str:
        return self._passage_id

    @property
    def vehicle_id(self) -> str:
        return self._vehicle_id

    @property
    def timestamp(self) -> datetime:
        return self._timestamp

    @property
    def charge(self) -> Price:
        return self._charge

    def corrected(self, timestamp: TimestampLike, charge: Price) -> "Passage":
        """Return the same passage moved to a new timestamp and charge."""
        return Passage(self._passage_id, self._vehicle_id, timestamp, charge)

    def __repr__(self) -> str:
        return (
            f"Passage({self._passage_id!r}, {self._vehicle_id!r}, "
            f"{self._timestamp.isoformat()}, {self._charge})"
        )
