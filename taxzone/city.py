"""City snapshot: the unit of rule and exempt-date configuration."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import FrozenSet, Iterable, Optional, Tuple

from .errors import ExemptDateNotFoundError, RuleNotFoundError, ValidationError
from .rule import TaxRule


@dataclass(frozen=True)
class ExemptDate:
    """A calendar day on which the city charges nothing."""

    day: date
    city_id: Optional[str] = None
    exempt_date_id: Optional[str] = None

    def __post_init__(self):
        # datetime is a date subclass but carries a time component
        if isinstance(self.day, datetime) or not isinstance(self.day, date):
            raise ValidationError(f"Invalid exempt date: {self.day!r}", "date", self.day)
        if self.exempt_date_id is None:
            object.__setattr__(self, "exempt_date_id", self.day.isoformat())


class City:
    """
    Immutable snapshot of a city's rules and exempt dates.

    The ``with_*``/``without_*`` methods return a new snapshot and leave this
    one untouched, so evaluations holding a reference never see a half-applied
    change.
    """

    def __init__(
        self,
        city_id: str,
        name: str,
        rules: Iterable[TaxRule] = (),
        exempt_dates: Iterable[ExemptDate] = (),
    ):
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("City name cannot be empty", "name", name)
        self._city_id = city_id
        self._name = name.strip()
        self._rules: Tuple[TaxRule, ...] = tuple(rules)
        self._exempt_dates: Tuple[ExemptDate, ...] = tuple(exempt_dates)

        rule_ids = [r.rule_id for r in self._rules]
        if len(set(rule_ids)) != len(rule_ids):
            raise ValidationError(f"Duplicate rule ids in city {city_id}", "rules")
        days = [d.day for d in self._exempt_dates]
        if len(set(days)) != len(days):
            raise ValidationError(f"Duplicate exempt dates in city {city_id}", "exemptDates")
        self._exempt_days: FrozenSet[date] = frozenset(days)

    @property
    def city_id(self) -> str:
        return self._city_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def rules(self) -> Tuple[TaxRule, ...]:
        return self._rules

    @property
    def exempt_dates(self) -> Tuple[ExemptDate, ...]:
        return self._exempt_dates

    def is_exempt_date(self, day: date) -> bool:
        if isinstance(day, datetime):
            day = day.date()
        return day in self._exempt_days

    def get_rule(self, rule_id: str) -> Optional[TaxRule]:
        """Find a rule by its id."""
        for rule in self._rules:
            if rule.rule_id == rule_id:
                return rule
        return None

    def with_rule(self, rule: TaxRule) -> "City":
        if rule.city_id is None:
            rule = TaxRule(rule.window, rule.price, self._city_id, rule.rule_id)
        return City(self._city_id, self._name, self._rules + (rule,), self._exempt_dates)

    def without_rule(self, rule_id: str) -> "City":
        if self.get_rule(rule_id) is None:
            raise RuleNotFoundError(rule_id)
        rules = tuple(r for r in self._rules if r.rule_id != rule_id)
        return City(self._city_id, self._name, rules, self._exempt_dates)

    def with_exempt_date(self, day: date) -> "City":
        exempt = ExemptDate(day, self._city_id)
        return City(self._city_id, self._name, self._rules, self._exempt_dates + (exempt,))

    def without_exempt_date(self, day: date) -> "City":
        if day not in self._exempt_days:
            raise ExemptDateNotFoundError(day.isoformat())
        dates = tuple(d for d in self._exempt_dates if d.day != day)
        return City(self._city_id, self._name, self._rules, dates)

    def __repr__(self) -> str:
        return f"City({self._city_id!r}, {self._name!r}, rules={len(self._rules)})"
