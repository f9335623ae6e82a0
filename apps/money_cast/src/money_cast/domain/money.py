"""Money value object stored as an integer amount of minor units."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from money_cast.domain.currency import Currency, get_currency
from money_cast.domain.errors import CurrencyMismatchError, compose_error_message

MINOR_UNIT = Decimal(1)


def to_minor_units(amount: Decimal, currency: Currency) -> int:
    """Scale a major-unit decimal to minor units with HALF_UP rounding."""

    _, digits, exponent = amount.as_tuple()
    # scaleb and quantize round to the context precision; widen it to hold
    # every digit of the scaled integer.
    with localcontext() as context:
        context.prec = len(digits) + max(exponent, 0) + currency.decimal_places + 2
        scaled = amount.scaleb(currency.decimal_places)
        return int(scaled.quantize(MINOR_UNIT, rounding=ROUND_HALF_UP))


@dataclass(frozen=True, slots=True)
class Money:
    """Represents an exact amount in the currency's minor unit."""

    amount: int
    currency: Currency

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise TypeError("Money amount must be an integer of minor units")
        if not isinstance(self.currency, Currency):
            raise TypeError("Money currency must be a Currency instance")

    @classmethod
    def of(cls, amount: int, code: str) -> Money:
        """Create a money value from minor units and a currency code."""
        return cls(amount=amount, currency=get_currency(code))

    @classmethod
    def zero(cls, currency: Currency) -> Money:
        return cls(amount=0, currency=currency)

    @classmethod
    def from_decimal(cls, amount: Decimal, currency: Currency) -> Money:
        """Create a money value from a major-unit decimal amount."""
        return cls(amount=to_minor_units(amount, currency), currency=currency)

    @property
    def minor_units(self) -> str:
        """Amount in minor units as a string."""
        return str(self.amount)

    def to_decimal(self) -> Decimal:
        """Return the exact major-unit decimal equivalent."""
        places = self.currency.decimal_places
        sign = "-" if self.amount < 0 else ""
        digits = str(abs(self.amount)).rjust(places + 1, "0")
        if not places:
            return Decimal(f"{sign}{digits}")
        return Decimal(f"{sign}{digits[:-places]}.{digits[-places:]}")

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def absolute(self) -> Money:
        return Money(amount=abs(self.amount), currency=self.currency)

    def multiply(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError("Money can only be multiplied by an integer")
        return Money(amount=self.amount * factor, currency=self.currency)

    def to_dict(self) -> dict[str, Any]:
        return {"amount": self.minor_units, "currency": self.currency.code}

    def _check_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(
                message=compose_error_message(
                    cause=(
                        "Cannot operate on different currencies: "
                        f"{self.currency.code} and {other.currency.code}."
                    ),
                    action="Convert both values to the same currency first.",
                ),
                details={
                    "left": self.currency.code,
                    "right": other.currency.code,
                },
            )

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other)
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other)
        return Money(amount=self.amount - other.amount, currency=self.currency)

    def __neg__(self) -> Money:
        return Money(amount=-self.amount, currency=self.currency)

    def __lt__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other)
        return self.amount >= other.amount

    def __str__(self) -> str:
        return f"{self.to_decimal()} {self.currency.code}"
