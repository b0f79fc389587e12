"""Price value type for monetary charges."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Union

from .errors import ValidationError

Amount = Union[Decimal, int, float, str]


def _to_decimal(value: Amount) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValidationError(f"Invalid amount: {value!r}", "amount", value)
    if isinstance(value, (int, float, str)):
        try:
            return Decimal(str(value).strip())
        except InvalidOperation:
            raise ValidationError(f"Invalid amount: {value!r}", "amount", value)
    raise ValidationError(f"Invalid amount: {value!r}", "amount", value)


@dataclass(frozen=True, order=True)
class Price:
    """A non-negative monetary amount."""

    amount: Decimal

    def __init__(self, amount: Amount = 0):
        value = _to_decimal(amount)
        if not value.is_finite():
            raise ValidationError(f"Amount must be finite: {amount!r}", "amount", amount)
        if value < 0:
            raise ValidationError(
                f"Amount cannot be negative: {amount}", "amount", amount
            )
        object.__setattr__(self, "amount", value)

    @classmethod
    def zero(cls) -> "Price":
        return cls(0)

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    def __add__(self, other: "Price") -> "Price":
        if not isinstance(other, Price):
            return NotImplemented
        return Price(self.amount + other.amount)

    def __sub__(self, other: "Price") -> "Price":
        """Subtract, rejecting a negative result instead of clamping."""
        if not isinstance(other, Price):
            return NotImplemented
        return Price(self.amount - other.amount)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"
