"""Currency table with minor-unit exponents and parsing symbols."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from functools import lru_cache

from money_cast.domain.errors import InvalidCurrencyError, compose_error_message


@dataclass(frozen=True, slots=True)
class Currency:
    """ISO 4217 (or crypto) currency with its minor-unit exponent."""

    code: str
    decimal_places: int = field(compare=False)
    name: str = field(compare=False)
    symbols: tuple[str, ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        if not self.code or not self.code.isalpha() or not self.code.isupper():
            raise ValueError(f"Currency code must be upper-case letters: {self.code!r}")
        if not 0 <= self.decimal_places <= 18:
            raise ValueError("Currency decimal places must be between 0 and 18")

    def __str__(self) -> str:
        return self.code


# Symbol priority follows declaration order: the first currency listed for a
# symbol owns it (JPY owns "¥", USD owns "$").
BUILTIN_CURRENCIES: tuple[Currency, ...] = (
    Currency("USD", 2, "US Dollar", ("$", "US$")),
    Currency("EUR", 2, "Euro", ("€",)),
    Currency("GBP", 2, "Pound Sterling", ("£",)),
    Currency("JPY", 0, "Yen", ("¥", "￥")),
    Currency("XBT", 8, "Bitcoin", ("Ƀ", "₿")),
    Currency("AUD", 2, "Australian Dollar", ("A$", "AU$")),
    Currency("CAD", 2, "Canadian Dollar", ("C$", "CA$")),
    Currency("NZD", 2, "New Zealand Dollar", ("NZ$",)),
    Currency("HKD", 2, "Hong Kong Dollar", ("HK$",)),
    Currency("SGD", 2, "Singapore Dollar", ("S$",)),
    Currency("MXN", 2, "Mexican Peso", ("MX$",)),
    Currency("BRL", 2, "Brazilian Real", ("R$",)),
    Currency("CNY", 2, "Yuan Renminbi", ("CN¥", "¥")),
    Currency("CHF", 2, "Swiss Franc", ()),
    Currency("SEK", 2, "Swedish Krona", ()),
    Currency("NOK", 2, "Norwegian Krone", ()),
    Currency("DKK", 2, "Danish Krone", ()),
    Currency("PLN", 2, "Zloty", ("zł",)),
    Currency("CZK", 2, "Czech Koruna", ("Kč",)),
    Currency("INR", 2, "Indian Rupee", ("₹",)),
    Currency("KRW", 0, "Won", ("₩",)),
    Currency("RUB", 2, "Russian Ruble", ("₽",)),
    Currency("TRY", 2, "Turkish Lira", ("₺",)),
    Currency("ILS", 2, "New Israeli Sheqel", ("₪",)),
    Currency("UAH", 2, "Hryvnia", ("₴",)),
    Currency("NGN", 2, "Naira", ("₦",)),
    Currency("PHP", 2, "Philippine Peso", ("₱",)),
    Currency("VND", 0, "Dong", ("₫",)),
    Currency("THB", 2, "Baht", ("฿",)),
    Currency("ZAR", 2, "Rand", ()),
    Currency("CLP", 0, "Chilean Peso", ()),
    Currency("ISK", 0, "Iceland Krona", ()),
    Currency("KWD", 3, "Kuwaiti Dinar", ()),
    Currency("BHD", 3, "Bahraini Dinar", ()),
    Currency("JOD", 3, "Jordanian Dinar", ()),
    Currency("OMR", 3, "Rial Omani", ()),
)


class CurrencyRegistry:
    """Lookup of currencies by code and by parsing symbol."""

    def __init__(self, currencies: Iterable[Currency] = ()) -> None:
        self._by_code: dict[str, Currency] = {}
        self._by_symbol: dict[str, Currency] = {}
        for currency in currencies:
            self.register(currency)

    def register(self, currency: Currency, overwrite: bool = False) -> None:
        """Add a currency; symbols already owned by another currency are kept."""

        if currency.code in self._by_code and not overwrite:
            raise ValueError(
                f"Currency with code '{currency.code}' already exists in registry. "
                "Use overwrite=True to replace it."
            )
        self._by_code[currency.code] = currency
        for symbol in currency.symbols:
            owner = self._by_symbol.get(symbol)
            if owner is None or owner.code == currency.code:
                self._by_symbol[symbol] = currency

    def get(self, code: str) -> Currency:
        normalized = str(code).strip().upper()
        currency = self._by_code.get(normalized)
        if currency is None:
            raise InvalidCurrencyError(
                message=compose_error_message(
                    cause=f"Unknown currency code: {code}.",
                    action="Use an ISO 4217 code or register the currency first.",
                ),
                details={"code": code},
            )
        return currency

    def resolve_symbol(self, symbol: str) -> Currency | None:
        return self._by_symbol.get(symbol)

    def symbols(self) -> list[str]:
        """Return known symbols, longest first so prefixes never shadow them."""

        return sorted(self._by_symbol, key=len, reverse=True)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.strip().upper() in self._by_code

    def __iter__(self) -> Iterator[Currency]:
        return iter(self._by_code.values())

    def __len__(self) -> int:
        return len(self._by_code)


@lru_cache(maxsize=1)
def default_registry() -> CurrencyRegistry:
    """Return the process-wide registry preloaded with built-in currencies."""

    return CurrencyRegistry(BUILTIN_CURRENCIES)


def get_currency(code: str) -> Currency:
    """Resolve a currency code against the default registry."""

    return default_registry().get(code)
