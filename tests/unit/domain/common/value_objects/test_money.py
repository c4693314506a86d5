"""Tests for Money value object."""

from decimal import Decimal

import pytest

from salonhub.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from salonhub.domain.common.value_objects import Money


class TestMoney:
    """Test suite for Money value object."""

    def test_amount_is_rounded_half_up_to_cents(self) -> None:
        assert Money(Decimal("10.005")).amount == Decimal("10.01")
        assert Money(Decimal("10.004")).amount == Decimal("10.00")

    def test_accepts_int_float_and_string_amounts(self) -> None:
        assert Money(5).amount == Decimal("5.00")
        assert Money("12.5").amount == Decimal("12.50")
        assert Money(0.1).amount == Decimal("0.10")

    def test_currency_is_upper_cased(self) -> None:
        assert Money(Decimal(1), "eur").currency == "EUR"

    def test_negative_amount_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Money(Decimal("-0.01"))
        assert exc_info.value.field == "amount"

    @pytest.mark.parametrize("currency", ["US", "USDT", "U5D", ""])
    def test_invalid_currency_rejected(self, currency: str) -> None:
        with pytest.raises(ValidationError):
            Money(Decimal(1), currency)

    def test_non_numeric_amount_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Money("ten")  # type: ignore[arg-type]

    def test_add_and_subtract(self) -> None:
        total = Money(Decimal("10.50")).add(Money(Decimal("4.25")))
        assert total == Money(Decimal("14.75"))
        assert total.subtract(Money(Decimal("0.75"))) == Money(Decimal(14))

    def test_subtract_below_zero_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Money(Decimal(1)).subtract(Money(Decimal(2)))

    def test_multiply_and_divide(self) -> None:
        price = Money(Decimal("40.00"))
        assert price.multiply(Decimal("0.15")) == Money(Decimal("6.00"))
        assert price.divide(3) == Money(Decimal("13.33"))

    def test_divide_by_zero(self) -> None:
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            Money(Decimal(10)).divide(0)
        assert exc_info.value.rule == "division_by_zero"

    def test_currency_mismatch(self) -> None:
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            Money(Decimal(1), "USD").add(Money(Decimal(1), "EUR"))
        assert exc_info.value.rule == "currency_mismatch"

    def test_comparisons(self) -> None:
        small = Money(Decimal(5))
        large = Money(Decimal(50))
        assert large.is_greater_than(small)
        assert small.is_less_than(large)
        assert Money.zero().is_zero()
        assert not small.is_zero()

    def test_minor_units(self) -> None:
        """Persisted prices are integer cents."""
        assert Money(Decimal("19.99")).to_minor_units() == 1999
        assert Money.from_minor_units(1999, "gbp") == Money(Decimal("19.99"), "GBP")

    def test_is_frozen(self) -> None:
        money = Money(Decimal(1))
        with pytest.raises(AttributeError):
            money.amount = Decimal(2)  # type: ignore[misc]

    def test_str(self) -> None:
        assert str(Money(Decimal(7), "usd")) == "USD 7.00"
