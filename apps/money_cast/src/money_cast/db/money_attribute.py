"""Descriptor exposing a mapped decimal column as a Money attribute."""

from __future__ import annotations

import logging
from typing import Any, overload

from money_cast.casts.money_cast import MoneyCast
from money_cast.domain.money import Money

logger = logging.getLogger(__name__)


class MoneyAttribute:
    """Money view over a mapped amount column and an optional currency column.

    Declared on a declarative model next to the columns it reads::

        class User(Base):
            money_amount: Mapped[Decimal] = mapped_column("money", Numeric(24, 8))
            currency: Mapped[str | None] = mapped_column(String(3))

            money = MoneyAttribute("money_amount", currency_field="currency")

    Accessed on the class it returns the amount column, so it can be used in
    queries and accepted by the declarative constructor.
    """

    def __init__(
        self,
        amount_attribute: str,
        *,
        currency: str | None = None,
        currency_field: str | None = None,
        cast: MoneyCast | None = None,
    ) -> None:
        self.amount_attribute = amount_attribute
        self.cast = cast or MoneyCast(currency=currency, currency_field=currency_field)
        self.name = amount_attribute
        self.owner_name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self.owner_name = owner.__name__

    @property
    def key(self) -> str:
        return f"{self.owner_name}.{self.name}" if self.owner_name else self.name

    def _attributes(self, instance: object) -> dict[str, Any]:
        currency_field = self.cast.currency_field
        if currency_field is None:
            return {}
        return {currency_field: getattr(instance, currency_field, None)}

    @overload
    def __get__(self, instance: None, owner: type) -> Any: ...
    @overload
    def __get__(self, instance: object, owner: type | None = None) -> Money | None: ...

    def __get__(self, instance: object | None, owner: type | None = None) -> Any:
        if instance is None:
            return getattr(owner, self.amount_attribute)
        return self.cast.from_storage(
            getattr(instance, self.amount_attribute),
            self.key,
            self._attributes(instance),
        )

    def __set__(self, instance: object, value: Any) -> None:
        attributes = self._attributes(instance)
        stored = self.cast.to_storage(value, self.key, attributes)

        if isinstance(value, Money) and self.cast.currency_field is None:
            expected = self.cast.resolve_currency(attributes)
            if value.currency != expected:
                logger.warning(
                    "money_currency_discarded",
                    extra={
                        "attribute": self.key,
                        "assigned_currency": value.currency.code,
                        "stored_currency": expected.code,
                    },
                )

        setattr(instance, self.amount_attribute, stored.value)
        for field_name, code in stored.side_effects.items():
            if attributes.get(field_name) != code:
                logger.debug(
                    "money_linked_currency_updated",
                    extra={
                        "attribute": self.key,
                        "field": field_name,
                        "currency": code,
                    },
                )
            setattr(instance, field_name, code)
