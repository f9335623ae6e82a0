"""Domain exceptions raised by money coercion and arithmetic."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def compose_error_message(*, cause: str, action: str) -> str:
    """Build a user-facing error message with cause and corrective action."""

    return f"Cause: {cause} Action: {action}"


@dataclass(slots=True)
class MoneyError(Exception):
    """Base exception for predictable money failures."""

    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


class InvalidArgumentError(MoneyError):
    """Raised when a raw value has a type the cast cannot coerce."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="INVALID_ARGUMENT",
            message=message
            or compose_error_message(
                cause="Invalid data provided for a money attribute.",
                action="Assign a number, a string or a Money instance.",
            ),
            details=details or {},
        )


class ParseError(MoneyError):
    """Raised when a string matches no known money grammar."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="PARSE_ERROR",
            message=message
            or compose_error_message(
                cause="Unable to parse the provided money string.",
                action="Use digits, an optional currency symbol or ISO code.",
            ),
            details=details or {},
        )


class InvalidCurrencyError(MoneyError):
    """Raised when a currency code is not in the currency table."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="INVALID_CURRENCY",
            message=message
            or compose_error_message(
                cause="Currency code is not recognized.",
                action="Use an ISO 4217 code or register the currency first.",
            ),
            details=details or {},
        )


class CurrencyMismatchError(MoneyError):
    """Raised when arithmetic mixes two different currencies."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="CURRENCY_MISMATCH",
            message=message
            or compose_error_message(
                cause="Money values have different currencies.",
                action="Convert both values to the same currency first.",
            ),
            details=details or {},
        )
