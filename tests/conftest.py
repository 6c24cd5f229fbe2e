"""Shared pytest fixtures for brokerledger tests."""

import hashlib
import os
import tempfile
from datetime import datetime
from pathlib import Path

import pytest
import xlwt

from brokerledger.database.factories import create_sqlite_database
from brokerledger.domain.cells import EMPTY, Boolean, DateTime, Number, Text
from brokerledger.domain.workbook import Sheet

DATE_STYLE = xlwt.easyxf(num_format_str="YYYY-MM-DD HH:MM:SS")


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


def to_cell(value):
    """Convert a plain Python value to a typed cell."""
    if value is None:
        return EMPTY
    if isinstance(value, bool):
        return Boolean(value)
    if isinstance(value, datetime):
        return DateTime(value)
    if isinstance(value, (int, float)):
        return Number(float(value))
    return Text(value)


def make_sheet(name, rows):
    """Build an in-memory sheet from rows of plain values."""
    return Sheet(name, [[to_cell(v) for v in row] for row in rows])


def account_rows(
    transactions,
    sentinel_row=10,
    first_cell="Investments",
    trailer=("Total", None, None, None, None, None),
):
    """Rows of an account sheet with an investment table at ``sentinel_row``.

    Data rows start three rows below the sentinel and are followed by a
    totals row, as in real exports.
    """
    rows = [[first_cell]]
    rows.extend([[]] * (sentinel_row - 1))
    rows.append(["Investment Transactions"])
    rows.append(["Date", "InvestmentName", "TransactionDetails", "Quantity", "Price", "Cost"])
    rows.append([])
    rows.extend(list(t) for t in transactions)
    if trailer is not None:
        rows.append(list(trailer))
    return rows


def write_xls(path, sheets):
    """Write a legacy .xls workbook from {sheet name: rows of plain values}."""
    book = xlwt.Workbook()
    for name, rows in sheets.items():
        ws = book.add_sheet(name)
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                if value is None:
                    continue
                if isinstance(value, datetime):
                    ws.write(r, c, value, DATE_STYLE)
                else:
                    ws.write(r, c, value)
    book.save(str(path))
    return path


def sha256_of(path):
    return hashlib.sha256(Path(path).read_bytes()).hexdigest()


def write_manifest(path, sha256sum, platform="vanguard_uk", accounts=()):
    lines = [f'sha256sum = "{sha256sum}"', f'platform = "{platform}"', ""]
    for account_id, label, kind in accounts:
        lines.extend(
            [
                "[[accounts]]",
                f'id = "{account_id}"',
                f'label = "{label}"',
                f'kind = "{kind}"',
                "",
            ]
        )
    Path(path).write_text("\n".join(lines), encoding="utf-8")
    return path


GENERATED_AT = datetime(2024, 3, 1, 9, 30)


@pytest.fixture
def make_export(tmp_path):
    """Factory writing an export plus its manifest into tmp_path.

    Returns the (manifest path, export path) pair.
    """

    def _make(name="export", account_sheets=None, accounts=(), sha256sum=None, summary=None):
        if summary is None:
            summary = [["Vanguard Investor Report"], [GENERATED_AT]]
        sheets = {"Summary": summary}
        sheets.update(account_sheets or {})
        export_path = write_xls(tmp_path / f"{name}.Xls", sheets)
        manifest_path = write_manifest(
            tmp_path / f"{name}.toml",
            sha256sum if sha256sum is not None else sha256_of(export_path),
            accounts=accounts,
        )
        return manifest_path, export_path

    return _make
