"""TaxRule class for time-of-day price definitions."""
from datetime import time
from typing import Optional

from .price import Price
from .time_window import TimeWindow


class TaxRule:
    """A city rule charging a fixed price for passages inside a time window."""

    def __init__(
            self,
            window: TimeWindow,
            price: Price,
            city_id: Optional[str] = None,
            rule_id: Optional[str] = None,
    ):
        self.window = window
        self.price = price
        self.city_id = city_id
        self.rule_id = rule_id or window.key

    @property
    def start(self) -> time:
        return self.window.start

    @property
    def end(self) -> time:
        return self.window.end

    def applies_at(self, time_of_day: time) -> bool:
        """Check if this rule covers the given time of day."""
        return self.window.contains(time_of_day)

    def __repr__(self) -> str:
        return f"TaxRule({self.rule_id!r}, {self.window}, {self.price})"
