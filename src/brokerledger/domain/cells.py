"""Typed spreadsheet cell values.

Every cell read from a workbook is exactly one of the variants below. Code
that extracts values from a sheet checks the variant before using it.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Union


@dataclass(frozen=True)
class Empty:
    """Blank or absent cell."""


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class DateTime:
    """Date cell, already decoded to a naive local datetime."""

    value: datetime


@dataclass(frozen=True)
class Boolean:
    value: bool


@dataclass(frozen=True)
class ErrorValue:
    """Formula error such as ``#DIV/0!``."""

    code: str


Cell = Union[Empty, Text, Number, DateTime, Boolean, ErrorValue]

EMPTY = Empty()


def is_empty(cell: Cell) -> bool:
    """Return True for blank or absent cells. Empty strings are still text."""
    match cell:
        case Empty():
            return True
        case Text() | Number() | DateTime() | Boolean() | ErrorValue():
            return False
    raise TypeError(f"Not a cell value: {cell!r}")


def cell_name(row: int, column: int) -> str:
    """Return the A1-style name of a zero-based cell index, e.g. (1, 0) -> 'A2'."""
    letters = ""
    column += 1
    while column:
        column, remainder = divmod(column - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return f"{letters}{row + 1}"
