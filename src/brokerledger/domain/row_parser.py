"""Conversion of transaction table rows into Transaction entities."""

import math
import re
from datetime import UTC, datetime, tzinfo
from typing import Sequence

from brokerledger.domain.cells import Boolean, Cell, DateTime, Empty, ErrorValue, Number, Text
from brokerledger.domain.entities import Transaction
from brokerledger.domain.errors import (
    AmbiguousTimestampError,
    DataError,
    StructuralError,
    cost_mismatch,
    missing_ticker_symbol,
    wrong_cell_kind,
)
from brokerledger.utils.timestamps import local_to_utc

TICKER_PATTERN = re.compile(r".* \(([A-Z]+)\)$")
RECONCILIATION_EPSILON = 1e-4
# Rounding allowance at the epsilon boundary, in units of the last place of the amounts
BOUNDARY_ULPS = 4

# (column index, column letter, heading)
DATE_COLUMN = (0, "A", "Date")
INVESTMENT_COLUMN = (1, "B", "InvestmentName")
QUANTITY_COLUMN = (3, "D", "Quantity")
PRICE_COLUMN = (4, "E", "Price")
COST_COLUMN = (5, "F", "Cost")


class RowParser:
    """Parses transaction rows for one account of one import."""

    def __init__(
        self,
        account_id: str,
        import_id: str,
        currency_symbol: str,
        zone: tzinfo = UTC,
        epsilon: float = RECONCILIATION_EPSILON,
    ):
        self.account_id = account_id
        self.import_id = import_id
        self.currency_symbol = currency_symbol
        self.zone = zone
        self.epsilon = epsilon

    def parse(self, cells: Sequence[Cell]) -> Transaction:
        """Parse a six column row: date, investment, unused, quantity, price, cost.

        Raises:
            StructuralError: If a cell is missing or of the wrong kind
            AmbiguousTimestampError: If the date is not a single UTC instant
            DataError: If the ticker is missing or the cost does not reconcile
        """
        execution_time = self._datetime(cells, DATE_COLUMN)
        investment = self._text(cells, INVESTMENT_COLUMN)
        quantity = self._number(cells, QUANTITY_COLUMN)
        price = self._number(cells, PRICE_COLUMN)
        cost = self._number(cells, COST_COLUMN)

        if not reconciles(cost, price, quantity, self.epsilon):
            raise DataError(cost_mismatch(cost, price, quantity), account_id=self.account_id)

        return Transaction(
            execution_time=execution_time,
            ticker_symbol=extract_ticker_symbol(investment),
            unit_quantity=quantity,
            cost_per_unit=price,
            currency_symbol=self.currency_symbol,
            account_id=self.account_id,
            import_id=self.import_id,
        )

    def _cell(self, cells: Sequence[Cell], column: tuple[int, str, str]) -> Cell:
        index, letter, heading = column
        cell = cells[index] if index < len(cells) else Empty()
        if isinstance(cell, Empty):
            raise StructuralError(f"Column {letter} ({heading}) must be present")
        return cell

    def _datetime(self, cells: Sequence[Cell], column: tuple[int, str, str]) -> datetime:
        match self._cell(cells, column):
            case DateTime(value=local):
                converted = local_to_utc(local, self.zone)
                if converted is None:
                    raise AmbiguousTimestampError(
                        f"Column {column[1]} time {local} is not a single instant in {self.zone}"
                    )
                return converted
            case Empty() | Text() | Number() | Boolean() | ErrorValue() as other:
                raise StructuralError(wrong_cell_kind(column[1], "date", other))

    def _text(self, cells: Sequence[Cell], column: tuple[int, str, str]) -> str:
        match self._cell(cells, column):
            case Text(value=value):
                return value
            case Empty() | Number() | DateTime() | Boolean() | ErrorValue() as other:
                raise StructuralError(wrong_cell_kind(column[1], "text", other))

    def _number(self, cells: Sequence[Cell], column: tuple[int, str, str]) -> float:
        match self._cell(cells, column):
            case Number(value=value):
                return value
            case Empty() | Text() | DateTime() | Boolean() | ErrorValue() as other:
                raise StructuralError(wrong_cell_kind(column[1], "numeric", other))


def extract_ticker_symbol(investment_name: str) -> str:
    """Return the ticker from a name such as 'Vodafone Group Plc (VOD)'.

    Raises:
        DataError: If the name has no parenthesised uppercase suffix
    """
    match = TICKER_PATTERN.match(investment_name)
    if match is None:
        raise DataError(missing_ticker_symbol(investment_name))
    return match.group(1)


def reconciles(cost: float, price: float, quantity: float, epsilon: float = RECONCILIATION_EPSILON) -> bool:
    """Check declared cost against price x quantity.

    A difference equal to epsilon within float representation error is
    accepted, so a cost stored to four decimal places such as 50.0001 for
    10 x 5.00 passes while 50.00010000004 does not.
    """
    expected = price * quantity
    difference = abs(cost - expected)
    if difference < epsilon:
        return True
    slack = BOUNDARY_ULPS * math.ulp(max(abs(cost), abs(expected), 1.0))
    return math.isclose(difference, epsilon, rel_tol=0.0, abs_tol=slack)
