"""TimeWindow value type: a half-open clock interval used by tax rules."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Union

from .errors import ValidationError

TimeLike = Union[time, str]


def parse_time(value: TimeLike, field: str = "time") -> time:
    """
    Parse a clock time from a ``time`` or an ``HH:MM[:SS]`` string.

    Times are local wall-clock times; a UTC offset is rejected.
    """
    result = None
    if isinstance(value, time):
        result = value
    elif isinstance(value, str):
        try:
            result = time.fromisoformat(value.strip())
        except ValueError:
            pass
    if result is None:
        raise ValidationError(f"Invalid {field}: {value!r}", field, value)
    if result.tzinfo is not None:
        raise ValidationError(
            f"Invalid {field}: {value!r} carries a UTC offset", field, value
        )
    return result


@dataclass(frozen=True)
class TimeWindow:
    """
    Clock interval [start, end) within a single day.

    Windows never wrap past midnight: ``end`` must be strictly later than
    ``start``.
    """

    start: time
    end: time

    def __post_init__(self):
        object.__setattr__(self, "start", parse_time(self.start, "start"))
        object.__setattr__(self, "end", parse_time(self.end, "end"))
        if self.end <= self.start:
            raise ValidationError(
                f"Window end {self.end.isoformat()} must be after "
                f"start {self.start.isoformat()}",
                "end",
                self.end,
            )

    @classmethod
    def parse(cls, start: TimeLike, end: TimeLike) -> "TimeWindow":
        return cls(parse_time(start, "start"), parse_time(end, "end"))

    @property
    def duration(self) -> timedelta:
        return datetime.combine(date.min, self.end) - datetime.combine(
            date.min, self.start
        )

    @property
    def key(self) -> str:
        """Natural key, e.g. ``06:00:00-06:30:00``."""
        return f"{self.start.isoformat()}-{self.end.isoformat()}"

    def contains(self, time_of_day: time) -> bool:
        """Check if the time of day falls inside the window."""
        return self.start <= time_of_day < self.end

    def __str__(self) -> str:
        return f"{self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')}"
