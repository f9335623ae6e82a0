from __future__ import annotations

import logging
from collections.abc import Generator
from decimal import Decimal

import pytest
from sqlalchemy import Engine, Numeric, String, select
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from money_cast.db.money_attribute import MoneyAttribute
from money_cast.domain.errors import (
    InvalidArgumentError,
    InvalidCurrencyError,
    ParseError,
)
from money_cast.domain.money import Money


class Base(DeclarativeBase):
    """Base class for test models."""


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    money_amount: Mapped[Decimal | None] = mapped_column("money", Numeric(24, 8))
    wage_amount: Mapped[Decimal | None] = mapped_column("wage", Numeric(24, 8))
    debits_amount: Mapped[Decimal | None] = mapped_column("debits", Numeric(24, 8))
    currency: Mapped[str | None] = mapped_column(String(3))

    money = MoneyAttribute("money_amount")
    wage = MoneyAttribute("wage_amount", currency="EUR")
    debits = MoneyAttribute("debits_amount", currency_field="currency")


@pytest.fixture
def session_factory(
    sqlite_engine: Engine,
) -> Generator[sessionmaker[Session], None, None]:
    Base.metadata.create_all(sqlite_engine)
    factory = sessionmaker(
        bind=sqlite_engine,
        class_=Session,
        autoflush=False,
        expire_on_commit=False,
    )
    try:
        yield factory
    finally:
        Base.metadata.drop_all(sqlite_engine)


def stored_row(
    session: Session, user_id: int
) -> tuple[Decimal | None, Decimal | None, Decimal | None, str | None]:
    row = session.execute(
        select(
            User.money_amount,
            User.wage_amount,
            User.debits_amount,
            User.currency,
        ).where(User.id == user_id)
    ).one()
    return row[0], row[1], row[2], row[3]


def test_casts_money_when_retrieving_casted_values(
    session_factory: sessionmaker[Session],
) -> None:
    with session_factory() as session:
        user = User(money=1234.56, wage=50000, debits=None, currency="AUD")

        assert isinstance(user.money, Money)
        assert isinstance(user.wage, Money)
        assert user.debits is None

        assert user.money.minor_units == "123456"
        assert user.money.currency.code == "USD"
        assert user.wage.minor_units == "5000000"
        assert user.wage.currency.code == "EUR"

        user.debits = 100.99

        assert user.debits.minor_units == "10099"
        assert user.debits.currency.code == "AUD"

        session.add(user)
        session.commit()

        assert user.id == 1
        money, wage, debits, currency = stored_row(session, 1)

    assert money == Decimal("1234.56")
    assert wage == Decimal("50000.00")
    assert debits == Decimal("100.99")
    assert currency == "AUD"


def test_casts_money_when_setting_casted_values(
    session_factory: sessionmaker[Session],
) -> None:
    with session_factory() as session:
        user = User(money=0, wage="6500000", debits=None, currency="CAD")

        assert user.money.minor_units == "0"
        assert user.money.currency.code == "USD"
        assert user.wage.minor_units == "6500000"
        assert user.wage.currency.code == "EUR"
        assert user.debits is None

        user.money = Money(amount=10000, currency=user.money.currency)

        assert user.money.minor_units == "10000"

        user.money = 100
        user.wage = 70500.19
        user.debits = "¥213860"

        assert user.money.minor_units == "10000"
        assert user.money.currency.code == "USD"
        assert user.wage.minor_units == "7050019"
        assert user.wage.currency.code == "EUR"
        assert user.debits.minor_units == "213860"
        assert user.debits.currency.code == "JPY"
        assert user.currency == "JPY"

        user.money = "100,000.22"
        user.debits = "Ƀ0.00012345"

        assert user.money.minor_units == "10000022"
        assert user.money.currency.code == "USD"
        assert user.debits.minor_units == "12345"
        assert user.debits.currency.code == "XBT"
        assert user.currency == "XBT"

        session.add(user)
        session.commit()

        assert user.id == 1
        money, wage, debits, currency = stored_row(session, 1)

    assert money == Decimal("100000.22")
    assert wage == Decimal("70500.19")
    assert debits == Decimal("0.00012345")
    assert currency == "XBT"


def test_reloaded_rows_hydrate_money(session_factory: sessionmaker[Session]) -> None:
    with session_factory() as session:
        session.add(User(money=1234.56, wage="6500000", debits="¥213860"))
        session.commit()

    with session_factory() as session:
        user = session.get(User, 1)

        assert user is not None
        assert user.money == Money.of(123456, "USD")
        assert user.wage == Money.of(6500000, "EUR")
        assert user.debits == Money.of(213860, "JPY")


def test_fails_to_set_invalid_money() -> None:
    with pytest.raises(
        InvalidArgumentError, match=r"Invalid data provided for User\.money"
    ):
        User(money=object())


def test_fails_to_parse_invalid_money() -> None:
    with pytest.raises(ParseError, match="Unable to parse: abc"):
        User(money="abc")


def test_failed_assignment_leaves_columns_untouched() -> None:
    user = User(debits="¥100")

    with pytest.raises(ParseError):
        user.debits = "abc"

    assert user.debits == Money.of(100, "JPY")
    assert user.currency == "JPY"


def test_numeric_assignment_keeps_linked_currency() -> None:
    user = User(currency="AUD")

    user.debits = 12.5
    assert user.debits == Money.of(1250, "AUD")

    user.debits = "7"
    assert user.debits == Money.of(7, "AUD")
    assert user.currency == "AUD"


def test_money_assignment_updates_linked_currency() -> None:
    user = User(currency="AUD")

    user.debits = Money.of(250, "GBP")

    assert user.debits == Money.of(250, "GBP")
    assert user.currency == "GBP"


def test_null_assignment_keeps_linked_currency() -> None:
    user = User(debits="€5")

    user.debits = None

    assert user.debits is None
    assert user.debits_amount is None
    assert user.currency == "EUR"


def test_foreign_currency_on_unlinked_field_is_logged(
    caplog: pytest.LogCaptureFixture,
) -> None:
    user = User()

    with caplog.at_level(logging.WARNING, logger="money_cast.db.money_attribute"):
        user.money = Money.of(500, "EUR")

    assert "money_currency_discarded" in caplog.messages
    assert user.money == Money.of(500, "USD")


def test_linked_currency_change_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    user = User(currency="AUD")

    with caplog.at_level(logging.DEBUG, logger="money_cast.db.money_attribute"):
        user.debits = "¥5"
        user.debits = 7

    assert caplog.messages.count("money_linked_currency_updated") == 1
    record = next(
        record
        for record in caplog.records
        if record.getMessage() == "money_linked_currency_updated"
    )
    assert record.attribute == "User.debits"
    assert record.currency == "JPY"


def test_unknown_linked_currency_fails_on_read() -> None:
    user = User(debits_amount=Decimal("1.00"), currency="ZZZ")

    with pytest.raises(InvalidCurrencyError, match="ZZZ"):
        _ = user.debits


def test_class_access_exposes_amount_column_for_queries(
    session_factory: sessionmaker[Session],
) -> None:
    with session_factory() as session:
        session.add_all([User(money=1234.56), User(money=10)])
        session.commit()

        rich = session.scalars(select(User).where(User.money > 1000)).all()

    assert [user.money for user in rich] == [Money.of(123456, "USD")]
