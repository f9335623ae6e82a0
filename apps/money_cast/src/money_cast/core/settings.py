"""Money cast settings loaded from environment variables."""

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from money_cast.domain.currency import default_registry


class MoneySettings(BaseSettings):
    """Defaults used when a money attribute carries no currency of its own."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    default_currency: str = Field(default="USD", alias="MONEY_DEFAULT_CURRENCY")
    decimal_separator: str = Field(
        default=".",
        alias="MONEY_DECIMAL_SEPARATOR",
        min_length=1,
        max_length=1,
    )
    thousands_separator: str = Field(
        default=",",
        alias="MONEY_THOUSANDS_SEPARATOR",
        min_length=1,
        max_length=1,
    )

    @field_validator("default_currency")
    @classmethod
    def normalize_currency(cls, value: str) -> str:
        code = value.strip().upper()
        if code not in default_registry():
            raise ValueError(f"Unknown default currency: {value}")
        return code

    @model_validator(mode="after")
    def check_separators(self) -> "MoneySettings":
        if self.decimal_separator == self.thousands_separator:
            raise ValueError("Decimal and thousands separators must differ")
        if self.decimal_separator.isdigit() or self.thousands_separator.isdigit():
            raise ValueError("Separators cannot be digits")
        return self


@lru_cache(maxsize=1)
def get_settings() -> MoneySettings:
    """Return cached settings instance for the current process."""

    return MoneySettings()
