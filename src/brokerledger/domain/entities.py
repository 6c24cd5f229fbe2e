"""Domain model entities for brokerledger.

These are pure data classes representing ledger concepts, independent of
database schema and of the spreadsheet library used to read exports.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class Platform(Enum):
    """Export source. Each member carries its stable id and file metadata."""

    VANGUARD_UK = (
        "vanguard_uk",
        "Xls",
        "GBP",
        "Vanguard Investor UK",
        "https://www.vanguardinvestor.co.uk",
    )

    def __init__(self, id: str, file_extension: str, currency_symbol: str, description: str, url: str):
        self.id = id
        self.file_extension = file_extension
        self.currency_symbol = currency_symbol
        self.description = description
        self.url = url

    @classmethod
    def from_id(cls, value: str) -> Optional["Platform"]:
        """Look up a platform by id or member name, e.g. 'vanguard_uk' or 'VanguardUK'."""
        normalized = value.replace("_", "").lower()
        for platform in cls:
            if platform.id == value or platform.name.replace("_", "").lower() == normalized:
                return platform
        return None


class AccountKind(Enum):
    """Tax wrapper of an account."""

    ISA = "isa"
    GIA = "gia"

    @property
    def id(self) -> str:
        return self.value

    @classmethod
    def from_id(cls, value: str) -> Optional["AccountKind"]:
        aliases = {
            "isa": cls.ISA,
            "gia": cls.GIA,
            "generalinvestmentaccount": cls.GIA,
        }
        return aliases.get(value.replace("_", "").lower())


@dataclass(frozen=True)
class AccountMetadata:
    """Manifest-declared label and kind for one account id."""

    id: str
    label: str
    kind: AccountKind

    def matches(self, account: "Account") -> bool:
        return self.id == account.id


@dataclass(frozen=True)
class Manifest:
    """Descriptor accompanying one import file."""

    sha256sum: str
    platform: Platform
    accounts: tuple[AccountMetadata, ...] = ()


@dataclass(frozen=True)
class Import:
    """One validated import file. The id is the file fingerprint."""

    id: str
    filename: str
    platform_id: str
    generation_date: datetime


@dataclass(frozen=True)
class Account:
    """Account discovered in an import file."""

    id: str
    platform_id: str
    import_id: str
    label: Optional[str] = None
    kind: Optional[AccountKind] = None


@dataclass(frozen=True)
class Transaction:
    """Investment transaction parsed from one spreadsheet row.

    ``id`` is assigned by the store and is None until persisted.
    """

    execution_time: datetime
    ticker_symbol: str
    unit_quantity: float
    cost_per_unit: float
    currency_symbol: str
    account_id: str
    import_id: str
    id: Optional[int] = None


@dataclass
class ImportResult:
    """Outcome of processing one manifest/import file pair."""

    import_record: Import
    accounts: list[Account] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
