"""Rule resolution: map a time of day to the price of the matching rule."""

from datetime import time, timedelta
from typing import Iterable, Optional, Tuple

from .errors import AmbiguousRuleConfiguration
from .price import Price
from .rule import TaxRule


def _rank(rule: TaxRule) -> Tuple[timedelta, time]:
    """Narrowest window first, then earliest start."""
    return (rule.window.duration, rule.window.start)


def find_rule(time_of_day: time, rules: Iterable[TaxRule]) -> Optional[TaxRule]:
    """
    Find the single rule that applies at ``time_of_day``.

    Overlapping matches are narrowed by duration, then by start time. If more
    than one rule survives both, the configuration is ambiguous and
    AmbiguousRuleConfiguration is raised. The result never depends on the
    order of ``rules``.
    """
    matches = [rule for rule in rules if rule.applies_at(time_of_day)]
    if not matches:
        return None
    best = min(_rank(rule) for rule in matches)
    winners = [rule for rule in matches if _rank(rule) == best]
    if len(winners) > 1:
        raise AmbiguousRuleConfiguration(
            time_of_day, sorted(rule.rule_id for rule in winners)
        )
    return winners[0]


def resolve(time_of_day: time, rules: Iterable[TaxRule]) -> Optional[Price]:
    """Price of the applicable rule, or None when no window covers the time."""
    rule = find_rule(time_of_day, rules)
    if rule is None:
        return None
    return rule.price
