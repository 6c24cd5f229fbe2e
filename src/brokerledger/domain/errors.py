"""Shared import error messages and error types."""

from pathlib import Path
from typing import Optional


class LedgerImportError(ValueError):
    """Base class for import engine errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. Context attributes are optional
    and filled in by whichever layer knows them.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Optional[Path] = None,
        sheet: Optional[str] = None,
        row: Optional[int] = None,
        account_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.path = path
        self.sheet = sheet
        self.row = row
        self.account_id = account_id

    def __str__(self) -> str:
        context = []
        if self.path is not None:
            context.append(f"file {self.path}")
        if self.sheet is not None:
            context.append(f"sheet '{self.sheet}'")
        if self.row is not None:
            context.append(f"row {self.row}")
        if self.account_id is not None:
            context.append(f"account {self.account_id}")
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"


class IntegrityError(LedgerImportError):
    """Import file content does not match the manifest fingerprint."""

    def __init__(self, path: Path, expected: str, actual: str):
        super().__init__(checksum_mismatch(actual, expected), path=path)
        self.expected = expected
        self.actual = actual


class StructuralError(LedgerImportError):
    """Expected sheet, cell or shape is absent or holds the wrong kind of value."""


class AmbiguousTimestampError(StructuralError):
    """A local timestamp does not map to exactly one UTC instant."""


class DataError(LedgerImportError):
    """A well-formed cell whose content is semantically invalid."""


class PersistenceError(LedgerImportError):
    """The store rejected a write or could not be reached."""


def checksum_mismatch(actual: str, expected: str) -> str:
    """Return message for a fingerprint mismatch."""
    return f"sha256sum did not match manifest value: {actual} != {expected}"


def missing_sheet(sheet_name: str) -> str:
    """Return message for a missing worksheet."""
    return f"Workbook has no sheet named '{sheet_name}'"


def wrong_cell_kind(cell_name: str, expected: str, cell: object) -> str:
    """Return message for a cell holding an unexpected value kind."""
    return f"Column {cell_name} must be {expected}, found {cell!r}"


def missing_ticker_symbol(investment_name: str) -> str:
    """Return message for an investment name without a ticker suffix."""
    return f"InvestmentName must end in parenthesised ticker symbol: {investment_name}"


def cost_mismatch(cost: float, price: float, quantity: float) -> str:
    """Return message for a row whose cost does not reconcile."""
    return (
        f"Cost {cost} does not match price {price} x quantity {quantity} "
        f"(= {price * quantity})"
    )


def duplicate_account(account_id: str, first_sheet: str, second_sheet: str) -> str:
    """Return message when two sheets resolve to the same account."""
    return (
        f"Account {account_id} found in both '{first_sheet}' and '{second_sheet}'"
    )
