"""Money as it travels over the API: a decimal string and an ISO currency code."""

from decimal import Decimal

from pydantic import BaseModel, Field

from salonhub.domain.common.value_objects import Money


class MoneySchema(BaseModel):
    amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    currency: str = Field(default="USD", min_length=3, max_length=3)

    def to_domain(self) -> Money:
        return Money(self.amount, self.currency)

    @classmethod
    def from_domain(cls, money: Money) -> "MoneySchema":
        return cls(amount=money.amount, currency=money.currency)
