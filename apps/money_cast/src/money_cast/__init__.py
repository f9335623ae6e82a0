"""Money attributes for SQLAlchemy models."""

from money_cast.casts.money_cast import MoneyCast, StoredMoney
from money_cast.core.settings import MoneySettings, get_settings
from money_cast.db.money_attribute import MoneyAttribute
from money_cast.domain.currency import (
    Currency,
    CurrencyRegistry,
    default_registry,
    get_currency,
)
from money_cast.domain.errors import (
    CurrencyMismatchError,
    InvalidArgumentError,
    InvalidCurrencyError,
    MoneyError,
    ParseError,
)
from money_cast.domain.money import Money
from money_cast.domain.parsing import MoneyParser

__all__ = [
    "Currency",
    "CurrencyMismatchError",
    "CurrencyRegistry",
    "InvalidArgumentError",
    "InvalidCurrencyError",
    "Money",
    "MoneyAttribute",
    "MoneyCast",
    "MoneyError",
    "MoneyParser",
    "MoneySettings",
    "ParseError",
    "StoredMoney",
    "default_registry",
    "get_currency",
    "get_settings",
]
