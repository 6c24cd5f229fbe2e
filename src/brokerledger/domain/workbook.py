"""Workbook access for legacy binary spreadsheet exports."""

import logging
from datetime import UTC, datetime, tzinfo
from pathlib import Path
from typing import Iterator, Optional, Sequence

import xlrd
from xlrd.biffh import error_text_from_code
from xlrd.book import Book
from xlrd.compdoc import CompDocError
from xlrd.sheet import Cell as XlrdCell
from xlrd.xldate import XLDateError, xldate_as_datetime

from brokerledger.domain.cells import (
    EMPTY,
    Boolean,
    Cell,
    DateTime,
    Empty,
    ErrorValue,
    Number,
    Text,
    cell_name,
)
from brokerledger.domain.errors import AmbiguousTimestampError, StructuralError, missing_sheet
from brokerledger.utils.timestamps import local_to_utc

logger = logging.getLogger(__name__)

SUMMARY_SHEET = "Summary"
GENERATION_DATE_CELL = (1, 0)


class Sheet:
    """Named rectangular grid of typed cells.

    Coordinates are zero-based (row, column). Reads outside the grid return
    an empty cell.
    """

    def __init__(self, name: str, rows: Sequence[Sequence[Cell]]):
        self.name = name
        self._rows = [tuple(row) for row in rows]

    @property
    def nrows(self) -> int:
        return len(self._rows)

    @property
    def ncols(self) -> int:
        return max((len(row) for row in self._rows), default=0)

    def get(self, row: int, column: int) -> Cell:
        if row < 0 or column < 0 or row >= len(self._rows):
            return EMPTY
        cells = self._rows[row]
        if column >= len(cells):
            return EMPTY
        return cells[column]

    def row_slice(self, row: int, start_column: int, width: int) -> tuple[Cell, ...]:
        return tuple(self.get(row, column) for column in range(start_column, start_column + width))

    def __repr__(self) -> str:
        return f"Sheet({self.name!r}, {self.nrows}x{self.ncols})"


class Workbook:
    """An opened import file.

    Use as a context manager so the underlying file is released on every
    exit path::

        with Workbook.open(path) as workbook:
            summary = workbook.summary()
    """

    def __init__(self, path: Path, book: Book):
        self.path = path
        self._book = book

    @classmethod
    def open(cls, path: Path) -> "Workbook":
        """Open a legacy .xls workbook.

        Raises:
            StructuralError: If the file cannot be decoded as a workbook
        """
        logger.debug("opening workbook %s", path)
        try:
            book = xlrd.open_workbook(str(path), on_demand=True)
        except (xlrd.XLRDError, CompDocError, OSError) as e:
            raise StructuralError(f"Could not open workbook: {e}", path=path) from e
        return cls(path, book)

    def close(self) -> None:
        if self._book is not None:
            self._book.release_resources()
            self._book = None

    def __enter__(self) -> "Workbook":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def sheet_names(self) -> list[str]:
        return list(self._book.sheet_names())

    def sheet(self, name: str) -> Sheet:
        """Return the named sheet.

        Raises:
            StructuralError: If there is no such sheet
        """
        if name not in self._book.sheet_names():
            raise StructuralError(missing_sheet(name), path=self.path)
        raw = self._book.sheet_by_name(name)
        rows = [
            [self._convert(raw.cell(r, c), name, r, c) for c in range(raw.ncols)]
            for r in range(raw.nrows)
        ]
        self._book.unload_sheet(name)
        return Sheet(name, rows)

    def sheets(self) -> Iterator[Sheet]:
        """Yield every sheet in workbook order."""
        for name in self.sheet_names():
            yield self.sheet(name)

    def summary(self) -> Sheet:
        return self.sheet(SUMMARY_SHEET)

    def report_generation_date(self, zone: tzinfo = UTC) -> datetime:
        """Return the report generation timestamp from the summary sheet."""
        return report_generation_date(self.summary(), zone, path=self.path)

    def _convert(self, raw: XlrdCell, sheet_name: str, row: int, column: int) -> Cell:
        ctype = raw.ctype
        if ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
            return EMPTY
        if ctype == xlrd.XL_CELL_TEXT:
            return Text(raw.value)
        if ctype == xlrd.XL_CELL_NUMBER:
            return Number(float(raw.value))
        if ctype == xlrd.XL_CELL_DATE:
            try:
                return DateTime(xldate_as_datetime(raw.value, self._book.datemode))
            except XLDateError as e:
                raise StructuralError(
                    f"Cell {cell_name(row, column)} holds an invalid date: {e}",
                    path=self.path,
                    sheet=sheet_name,
                    row=row,
                ) from e
        if ctype == xlrd.XL_CELL_BOOLEAN:
            return Boolean(bool(raw.value))
        if ctype == xlrd.XL_CELL_ERROR:
            return ErrorValue(error_text_from_code.get(raw.value, f"#ERR{raw.value}"))
        raise StructuralError(
            f"Cell {cell_name(row, column)} has unsupported type {ctype}",
            path=self.path,
            sheet=sheet_name,
            row=row,
        )


def report_generation_date(summary: Sheet, zone: tzinfo = UTC, path: Optional[Path] = None) -> datetime:
    """Read the generation timestamp at a fixed cell of the summary sheet.

    Raises:
        StructuralError: If the cell is blank or not a date
        AmbiguousTimestampError: If the local time maps to zero or two instants
    """
    name = cell_name(*GENERATION_DATE_CELL)
    match summary.get(*GENERATION_DATE_CELL):
        case DateTime(value=local):
            converted = local_to_utc(local, zone)
            if converted is None:
                raise AmbiguousTimestampError(
                    f"Generation date {local} at {name} is not a single instant in {zone}",
                    path=path,
                    sheet=summary.name,
                )
            return converted
        case Empty():
            raise StructuralError(f"Could not find any data at {name}", path=path, sheet=summary.name)
        case Text() | Number() | Boolean() | ErrorValue() as other:
            raise StructuralError(
                f"Could not parse date at {name}: {other!r}", path=path, sheet=summary.name
            )
