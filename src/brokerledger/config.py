"""Importer configuration."""

from dataclasses import dataclass
from datetime import tzinfo
from enum import Enum
from pathlib import Path

from brokerledger.domain.row_parser import RECONCILIATION_EPSILON
from brokerledger.domain.transaction_table import SCAN_ROW_LIMIT
from brokerledger.utils.timestamps import resolve_timezone


class RowErrorPolicy(Enum):
    """What to do when a transaction row cannot be parsed."""

    ABORT = "abort"
    SKIP = "skip"


@dataclass(frozen=True)
class ImporterConfig:
    """Settings for one run of the importer.

    Built once by the CLI and passed to the import service; the engine does
    not read environment variables.
    """

    imports_dir: Path = Path("imports")
    row_error_policy: RowErrorPolicy = RowErrorPolicy.ABORT
    source_timezone: str = "UTC"
    scan_row_limit: int = SCAN_ROW_LIMIT
    reconciliation_epsilon: float = RECONCILIATION_EPSILON

    def __post_init__(self):
        # Fail at startup rather than on the first date cell
        resolve_timezone(self.source_timezone)
        if self.scan_row_limit <= 0:
            raise ValueError("scan_row_limit must be positive")

    @property
    def zone(self) -> tzinfo:
        return resolve_timezone(self.source_timezone)
