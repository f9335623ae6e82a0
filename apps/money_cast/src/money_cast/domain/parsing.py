"""Parse human-formatted money strings into Money values.

Accepted shapes, tried in order:

* a bare integer such as ``"6500000"``, already expressed in minor units;
* a number with a leading or trailing currency symbol (``"¥213860"``,
  ``"Ƀ0.00012345"``, ``"-$12.50"``), read in major units of that currency;
* a number with a leading or trailing ISO code separated by whitespace
  in any letter case (``"EUR 10.50"``, ``"10.50 eur"``), read in major units
  of that currency;
* a plain decimal with optional thousands grouping (``"100,000.22"``), read
  in major units of the fallback currency.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation

from money_cast.domain.currency import Currency, CurrencyRegistry, default_registry
from money_cast.domain.errors import ParseError, compose_error_message
from money_cast.domain.money import Money, to_minor_units

logger = logging.getLogger(__name__)

_BARE_INTEGER = re.compile(r"[+-]?\d+")
_LEADING_CODE = re.compile(r"(?P<code>[A-Za-z]{3})\s+(?P<number>.+)")
_TRAILING_CODE = re.compile(r"(?P<number>.+?)\s+(?P<code>[A-Za-z]{3})")


class MoneyParser:
    """Locale-aware parser for money strings."""

    def __init__(
        self,
        registry: CurrencyRegistry | None = None,
        *,
        decimal_separator: str = ".",
        thousands_separator: str = ",",
    ) -> None:
        self._registry = registry or default_registry()
        decimal = re.escape(decimal_separator)
        thousands = re.escape(thousands_separator)
        self._thousands_separator = thousands_separator
        self._number = re.compile(
            rf"(?P<sign>[+-]?)"
            rf"(?P<whole>\d{{1,3}}(?:{thousands}\d{{3}})+|\d+)"
            rf"(?:{decimal}(?P<fraction>\d+))?"
        )

    def parse(self, text: str, fallback_currency: Currency) -> Money:
        """Parse ``text``; ``fallback_currency`` applies when it names none."""

        stripped = text.strip()
        if _BARE_INTEGER.fullmatch(stripped):
            return Money(amount=int(stripped), currency=fallback_currency)

        currency = fallback_currency
        number = stripped
        split = self._split_symbol(stripped) or self._split_code(stripped)
        if split is not None:
            currency, number = split

        amount = self._parse_decimal(number)
        if amount is None:
            logger.debug(
                "money_parse_failed",
                extra={"text": text, "currency": fallback_currency.code},
            )
            raise ParseError(
                message=compose_error_message(
                    cause=f"Unable to parse: {text}",
                    action="Use digits, an optional currency symbol or ISO code.",
                ),
                details={"value": text},
            )
        return Money(amount=to_minor_units(amount, currency), currency=currency)

    def _split_symbol(self, text: str) -> tuple[Currency, str] | None:
        sign = ""
        body = text
        if body[:1] in ("+", "-"):
            sign, body = body[0], body[1:].lstrip()

        for symbol in self._registry.symbols():
            if body.startswith(symbol):
                rest = body[len(symbol) :].strip()
            elif body.endswith(symbol):
                rest = body[: -len(symbol)].strip()
            else:
                continue
            currency = self._registry.resolve_symbol(symbol)
            if currency is not None:
                return currency, f"{sign}{rest}"
        return None

    def _split_code(self, text: str) -> tuple[Currency, str] | None:
        match = _LEADING_CODE.fullmatch(text) or _TRAILING_CODE.fullmatch(text)
        if match is None:
            return None
        return self._registry.get(match["code"]), match["number"].strip()

    def _parse_decimal(self, text: str) -> Decimal | None:
        match = self._number.fullmatch(text)
        if match is None:
            return None
        whole = match["whole"].replace(self._thousands_separator, "")
        fraction = match["fraction"] or "0"
        try:
            return Decimal(f"{match['sign']}{whole}.{fraction}")
        except InvalidOperation:
            return None
