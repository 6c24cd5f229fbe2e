"""Tests for transaction row parsing."""

from datetime import UTC, datetime

import pytest

from brokerledger.domain.cells import EMPTY, Boolean, DateTime, ErrorValue, Number, Text
from brokerledger.domain.entities import Transaction
from brokerledger.domain.errors import AmbiguousTimestampError, DataError, StructuralError
from brokerledger.domain.row_parser import RowParser, extract_ticker_symbol, reconciles
from brokerledger.utils.timestamps import resolve_timezone


def row(
    date=DateTime(datetime(2023, 1, 5, 10, 15)),
    name=Text("Example Co (EX)"),
    details=Text("Bought 2 Example Co"),
    quantity=Number(2.0),
    price=Number(3.0),
    cost=Number(6.0),
):
    return (date, name, details, quantity, price, cost)


@pytest.fixture
def parser():
    return RowParser(account_id="VG999", import_id="abc", currency_symbol="GBP")


def test_parse_valid_row(parser):
    transaction = parser.parse(row())

    assert transaction == Transaction(
        execution_time=datetime(2023, 1, 5, 10, 15, tzinfo=UTC),
        ticker_symbol="EX",
        unit_quantity=2.0,
        cost_per_unit=3.0,
        currency_symbol="GBP",
        account_id="VG999",
        import_id="abc",
    )
    assert transaction.id is None


def test_unused_column_may_hold_anything(parser):
    assert parser.parse(row(details=EMPTY)).ticker_symbol == "EX"
    assert parser.parse(row(details=Number(1.0))).ticker_symbol == "EX"


@pytest.mark.parametrize("cost", [50.0, 50.0001, 49.9999, 50.00005])
def test_cost_within_epsilon_accepted(parser, cost):
    transaction = parser.parse(row(quantity=Number(10.0), price=Number(5.0), cost=Number(cost)))
    assert transaction.unit_quantity == 10.0
    assert transaction.cost_per_unit == 5.0


@pytest.mark.parametrize("cost", [50.01, 50.0002, 49.99, 0.0])
def test_cost_outside_epsilon_rejected(parser, cost):
    with pytest.raises(DataError, match="does not match price"):
        parser.parse(row(quantity=Number(10.0), price=Number(5.0), cost=Number(cost)))


def test_reconciliation_boundary_allows_only_rounding_error():
    assert reconciles(cost=50.0001, price=5.0, quantity=10.0)
    assert reconciles(cost=49.9999, price=5.0, quantity=10.0)
    assert not reconciles(cost=50.00010000004, price=5.0, quantity=10.0)
    assert not reconciles(cost=49.99989999996, price=5.0, quantity=10.0)


def test_reconciles_fractional_units():
    assert reconciles(cost=9.9999, price=3.3333, quantity=3.0)
    assert not reconciles(cost=10.0, price=3.3332, quantity=3.0)


def test_custom_epsilon():
    strict = RowParser("VG1", "abc", "GBP", epsilon=1e-9)
    with pytest.raises(DataError):
        strict.parse(row(quantity=Number(10.0), price=Number(5.0), cost=Number(50.0001)))


@pytest.mark.parametrize(
    "name, ticker",
    [
        ("Vodafone Group Plc (VOD)", "VOD"),
        ("Example Co (EX)", "EX"),
        ("Vanguard FTSE Global All Cap Index Fund - Accumulation (VAFTGAG)", "VAFTGAG"),
        ("Nested (Brackets) Fund (NBF)", "NBF"),
    ],
)
def test_extract_ticker_symbol(name, ticker):
    assert extract_ticker_symbol(name) == ticker


@pytest.mark.parametrize(
    "name",
    ["Vodafone Group Plc", "Vodafone Group Plc (vod)", "Vodafone (VOD) Group Plc", "(VOD)", "Vodafone Group Plc (VOD1)"],
)
def test_missing_ticker_symbol(parser, name):
    with pytest.raises(DataError, match="ticker symbol"):
        parser.parse(row(name=Text(name)))


@pytest.mark.parametrize("cell", [Text("2023-01-05"), Number(44931.0), Boolean(True), ErrorValue("#VALUE!")])
def test_date_column_must_be_date(parser, cell):
    with pytest.raises(StructuralError, match="Column A must be date"):
        parser.parse(row(date=cell))


def test_blank_date_is_missing(parser):
    with pytest.raises(StructuralError, match=r"Column A \(Date\) must be present"):
        parser.parse(row(date=EMPTY))


def test_investment_column_must_be_text(parser):
    with pytest.raises(StructuralError, match="Column B must be text"):
        parser.parse(row(name=Number(1.0)))


@pytest.mark.parametrize(
    "column, letter",
    [("quantity", "D"), ("price", "E"), ("cost", "F")],
)
def test_numeric_columns(parser, column, letter):
    with pytest.raises(StructuralError, match=f"Column {letter} must be numeric"):
        parser.parse(row(**{column: Text("12.5")}))


def test_short_row_reports_missing_column(parser):
    with pytest.raises(StructuralError, match=r"Column F \(Cost\) must be present"):
        parser.parse(row()[:5])


def test_structural_checks_precede_reconciliation(parser):
    # The price is unreadable, so the row fails before the cost is compared
    with pytest.raises(StructuralError):
        parser.parse(row(price=ErrorValue("#DIV/0!"), cost=Number(999.0)))


def test_local_timezone_conversion():
    london = RowParser("VG1", "abc", "GBP", zone=resolve_timezone("Europe/London"))

    transaction = london.parse(row(date=DateTime(datetime(2023, 7, 3, 9, 0))))

    assert transaction.execution_time == datetime(2023, 7, 3, 8, 0, tzinfo=UTC)


def test_ambiguous_local_time():
    london = RowParser("VG1", "abc", "GBP", zone=resolve_timezone("Europe/London"))

    with pytest.raises(AmbiguousTimestampError):
        london.parse(row(date=DateTime(datetime(2023, 10, 29, 1, 30))))
