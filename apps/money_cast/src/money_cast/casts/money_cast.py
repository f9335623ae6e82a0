"""Bidirectional coercion between persisted columns and Money values."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from money_cast.core.settings import MoneySettings, get_settings
from money_cast.domain.currency import Currency, CurrencyRegistry, default_registry
from money_cast.domain.errors import InvalidArgumentError, compose_error_message
from money_cast.domain.money import Money, to_minor_units
from money_cast.domain.parsing import MoneyParser

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NullInput:
    """No value; the attribute is empty."""


@dataclass(frozen=True, slots=True)
class MoneyInput:
    money: Money


@dataclass(frozen=True, slots=True)
class NumericInput:
    """A major-unit amount without currency information."""

    amount: Decimal


@dataclass(frozen=True, slots=True)
class TextInput:
    text: str


@dataclass(frozen=True, slots=True)
class UnsupportedInput:
    value: Any


RawValue = NullInput | MoneyInput | NumericInput | TextInput | UnsupportedInput


def classify(value: Any) -> RawValue:
    """Map a raw attribute value onto the closed set of accepted inputs."""

    match value:
        case None:
            return NullInput()
        case Money():
            return MoneyInput(value)
        case bool():
            return UnsupportedInput(value)
        case int() | Decimal():
            amount = Decimal(value)
        case float():
            # repr keeps the shortest round-tripping digits: 1234.56 stays 1234.56
            amount = Decimal(repr(value))
        case str():
            return TextInput(value)
        case _:
            return UnsupportedInput(value)

    if not amount.is_finite():
        return UnsupportedInput(value)
    return NumericInput(amount)


@dataclass(frozen=True, slots=True)
class StoredMoney:
    """Column values produced for one money attribute.

    ``side_effects`` maps sibling attribute names to the values the caller
    must write alongside ``value``.
    """

    value: Decimal | None
    side_effects: dict[str, str] = field(default_factory=dict)


class MoneyCast:
    """Coerces raw values for one money attribute.

    ``currency`` is the attribute's fixed currency code. ``currency_field``
    names a sibling attribute holding the currency code; when set it takes
    precedence on reads and receives the Money's currency on writes. Without
    either, ``MoneySettings.default_currency`` applies.
    """

    def __init__(
        self,
        *,
        currency: str | None = None,
        currency_field: str | None = None,
        settings: MoneySettings | None = None,
        registry: CurrencyRegistry | None = None,
    ) -> None:
        self.currency = currency
        self.currency_field = currency_field
        self._settings = settings
        self._registry = registry or default_registry()
        self._parsers: dict[tuple[str, str], MoneyParser] = {}

    @property
    def settings(self) -> MoneySettings:
        return self._settings or get_settings()

    @property
    def parser(self) -> MoneyParser:
        """Parser for the separators currently configured."""
        settings = self.settings
        separators = (settings.decimal_separator, settings.thousands_separator)
        parser = self._parsers.get(separators)
        if parser is None:
            parser = self._parsers[separators] = MoneyParser(
                self._registry,
                decimal_separator=settings.decimal_separator,
                thousands_separator=settings.thousands_separator,
            )
        return parser

    def resolve_currency(self, attributes: Mapping[str, Any]) -> Currency:
        """Pick the currency for values that carry none of their own."""

        if self.currency_field is not None:
            linked = attributes.get(self.currency_field)
            if linked:
                return self._registry.get(linked)
        if self.currency is not None:
            return self._registry.get(self.currency)
        return self._registry.get(self.settings.default_currency)

    def from_storage(
        self, value: Any, key: str, attributes: Mapping[str, Any]
    ) -> Money | None:
        match classify(value):
            case NullInput():
                return None
            case MoneyInput(money):
                return money
            case NumericInput(amount):
                currency = self.resolve_currency(attributes)
                return Money(
                    amount=to_minor_units(amount, currency), currency=currency
                )
            case TextInput(text):
                return self.parser.parse(text, self.resolve_currency(attributes))
            case UnsupportedInput(raw):
                raise InvalidArgumentError(
                    message=compose_error_message(
                        cause=f"Invalid data provided for {key}: {raw!r}.",
                        action="Assign a number, a string or a Money instance.",
                    ),
                    details={"attribute": key, "type": type(raw).__name__},
                )

    def to_storage(
        self, value: Any, key: str, attributes: Mapping[str, Any]
    ) -> StoredMoney:
        money = self.from_storage(value, key, attributes)
        if money is None:
            return StoredMoney(value=None)

        if self.currency_field is None:
            return StoredMoney(value=money.to_decimal())
        return StoredMoney(
            value=money.to_decimal(),
            side_effects={self.currency_field: money.currency.code},
        )
