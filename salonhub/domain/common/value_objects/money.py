"""
Money value object for prices, deposits and booking totals.

Amounts are kept as ``Decimal`` rounded half-up to cents, so arithmetic
never drifts the way binary floats do.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Self

from ..exceptions import BusinessRuleViolationError, ValidationError
from ..value_object import ValueObject

_CENTS = Decimal("0.01")
_CURRENCY_LENGTH = 3

DEFAULT_CURRENCY = "USD"


def _to_decimal(raw: object, field: str) -> Decimal:
    try:
        value = raw if isinstance(raw, Decimal) else Decimal(str(raw))
    except InvalidOperation as err:
        raise ValidationError("Money amount must be numeric", field=field, value=raw) from err
    if not value.is_finite():
        raise ValidationError("Money amount must be finite", field=field, value=str(raw))
    return value


@dataclass(frozen=True)
class Money(ValueObject):
    """
    An amount of money in a single currency.

    Business Rules:
    - Amount is never negative
    - Amount is rounded to 2 decimal places (half-up)
    - Currency is a 3 letter code stored in upper case
    - Arithmetic and comparisons require matching currencies
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        amount = _to_decimal(self.amount, "amount").quantize(_CENTS, rounding=ROUND_HALF_UP)
        if amount < 0:
            raise ValidationError("Money amount cannot be negative", field="amount", value=str(amount))

        currency = self.currency if isinstance(self.currency, str) else ""
        if len(currency) != _CURRENCY_LENGTH or not currency.isalpha():
            raise ValidationError(
                "Currency must be a valid 3-character code", field="currency", value=self.currency
            )

        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", currency.upper())

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> Self:
        return cls(Decimal(0), currency)

    @classmethod
    def from_minor_units(cls, cents: int, currency: str = DEFAULT_CURRENCY) -> Self:
        """Build from an integer number of cents (the persisted form)."""
        return cls(Decimal(cents) / 100, currency)

    def to_minor_units(self) -> int:
        return int(self.amount * 100)

    def add(self, other: "Money") -> "Money":
        self._ensure_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: "Money") -> "Money":
        self._ensure_same_currency(other)
        return Money(self.amount - other.amount, self.currency)

    def multiply(self, factor: Decimal | int | float) -> "Money":
        return Money(self.amount * _to_decimal(factor, "factor"), self.currency)

    def divide(self, divisor: Decimal | int | float) -> "Money":
        value = _to_decimal(divisor, "divisor")
        if value == 0:
            raise BusinessRuleViolationError("division_by_zero", "Cannot divide money by zero")
        return Money(self.amount / value, self.currency)

    def is_greater_than(self, other: "Money") -> bool:
        self._ensure_same_currency(other)
        return self.amount > other.amount

    def is_less_than(self, other: "Money") -> bool:
        self._ensure_same_currency(other)
        return self.amount < other.amount

    def is_zero(self) -> bool:
        return self.amount == 0

    def to_primitive(self) -> dict[str, str]:
        return {"amount": str(self.amount), "currency": self.currency}

    def _ensure_same_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise BusinessRuleViolationError(
                "currency_mismatch",
                f"Currency mismatch: {self.currency} vs {other.currency}",
            )

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:.2f}"
