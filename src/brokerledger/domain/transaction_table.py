"""Location of the investment transactions table within an account sheet.

An account sheet holds a cash transactions section followed by an
investment transactions section. The investment section is introduced by a
row whose first cell reads "Investment Transactions"; two more header rows
follow and the data starts on the third row below the sentinel. The table
ends with a totals row, so a row is data only while the row after it is
still populated.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from brokerledger.domain.cells import Boolean, Cell, DateTime, Empty, ErrorValue, Number, Text, is_empty
from brokerledger.domain.workbook import Sheet

logger = logging.getLogger(__name__)

SENTINEL = "Investment Transactions"
DATA_OFFSET = 3
SCAN_ROW_LIMIT = 1000
TABLE_WIDTH = 6


@dataclass(frozen=True)
class TableRow:
    """One data row of the transactions table."""

    index: int
    cells: tuple[Cell, ...]

    @property
    def number(self) -> int:
        """One-based row number as shown by spreadsheet applications."""
        return self.index + 1


def find_sentinel_row(sheet: Sheet, row_limit: int = SCAN_ROW_LIMIT) -> Optional[int]:
    """Return the index of the first row whose column A text is the sentinel."""
    for index in range(row_limit):
        match sheet.get(index, 0):
            case Text(value=value) if value == SENTINEL:
                return index
            case Text() | Empty() | Number() | DateTime() | Boolean() | ErrorValue():
                continue
    return None


def scan_transaction_rows(sheet: Sheet, row_limit: int = SCAN_ROW_LIMIT) -> Iterator[TableRow]:
    """Yield the rows of the investment transactions table in order.

    Yields nothing, with a warning, when the sheet has no such table.
    """
    sentinel = find_sentinel_row(sheet, row_limit)
    if sentinel is None:
        logger.warning("could not find investment transactions in sheet %r", sheet.name)
        return

    index = sentinel + DATA_OFFSET
    logger.debug("investment transactions in %r start at row %d", sheet.name, index + 1)
    while not is_empty(sheet.get(index + 1, 0)):
        yield TableRow(index, sheet.row_slice(index, 0, TABLE_WIDTH))
        index += 1
