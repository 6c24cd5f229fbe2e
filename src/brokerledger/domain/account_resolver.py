"""Discovery of per-account sheets inside an import workbook.

The export puts one account on each sheet. The account id is usually in the
sheet name, e.g. ``"Stocks and Shares ISA (VG123)"``, but some exports
truncate sheet names and only carry it in the first cell of the sheet.
Strategies are tried in order and the first one that finds an id wins.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Sequence

from brokerledger.domain.cells import Boolean, DateTime, Empty, ErrorValue, Number, Text
from brokerledger.domain.entities import Account, AccountMetadata, Import
from brokerledger.domain.errors import StructuralError, duplicate_account
from brokerledger.domain.workbook import SUMMARY_SHEET, Sheet

logger = logging.getLogger(__name__)

ACCOUNT_ID_PATTERN = re.compile(r".* \((VG.*)\)")


class AccountIdStrategy(ABC):
    """One way of reading an account id out of a sheet."""

    name: str

    def __init__(self, pattern: re.Pattern = ACCOUNT_ID_PATTERN):
        self.pattern = pattern

    @abstractmethod
    def extract(self, sheet: Sheet) -> Optional[str]:
        """Return the account id, or None if this strategy does not apply."""
        pass

    def _capture(self, text: str) -> Optional[str]:
        match = self.pattern.search(text)
        if match is None:
            return None
        return match.group(1)


class SheetNameStrategy(AccountIdStrategy):
    name = "sheet name"

    def extract(self, sheet: Sheet) -> Optional[str]:
        return self._capture(sheet.name)


class FirstCellStrategy(AccountIdStrategy):
    name = "cell A1"

    def extract(self, sheet: Sheet) -> Optional[str]:
        match sheet.get(0, 0):
            case Text(value=text):
                return self._capture(text)
            case Empty() | Number() | DateTime() | Boolean() | ErrorValue():
                return None


DEFAULT_STRATEGIES: tuple[AccountIdStrategy, ...] = (SheetNameStrategy(), FirstCellStrategy())


@dataclass(frozen=True)
class AccountBinding:
    """An account id found on a sheet, and which strategy found it."""

    account_id: str
    sheet_name: str
    strategy: str


class AccountResolver:
    """Maps workbook sheets to accounts."""

    def __init__(
        self,
        strategies: Sequence[AccountIdStrategy] = DEFAULT_STRATEGIES,
        summary_sheet: str = SUMMARY_SHEET,
    ):
        self.strategies = tuple(strategies)
        self.summary_sheet = summary_sheet

    def identify(self, sheet: Sheet) -> Optional[AccountBinding]:
        """Apply the strategies in order to a single sheet.

        Later strategies are still consulted after a match, only to warn when
        they disagree with the winning id.
        """
        binding = None
        for strategy in self.strategies:
            account_id = strategy.extract(sheet)
            if account_id is None:
                continue
            if binding is None:
                binding = AccountBinding(account_id, sheet.name, strategy.name)
            elif account_id != binding.account_id:
                logger.warning(
                    "sheet %r: %s gives account %s but %s gives %s; using %s",
                    sheet.name,
                    binding.strategy,
                    binding.account_id,
                    strategy.name,
                    account_id,
                    binding.account_id,
                )
        if binding is None:
            logger.debug("no account_id found in %r", sheet.name)
        return binding

    def bind(self, sheets: Iterable[Sheet]) -> list[AccountBinding]:
        """Identify every account sheet, skipping the summary sheet.

        Raises:
            StructuralError: If two sheets resolve to the same account id
        """
        bindings: dict[str, AccountBinding] = {}
        for sheet in sheets:
            if sheet.name == self.summary_sheet:
                continue
            binding = self.identify(sheet)
            if binding is None:
                continue
            existing = bindings.get(binding.account_id)
            if existing is not None:
                raise StructuralError(
                    duplicate_account(binding.account_id, existing.sheet_name, sheet.name),
                    sheet=sheet.name,
                    account_id=binding.account_id,
                )
            logger.debug("associating %s with %r", binding.account_id, sheet.name)
            bindings[binding.account_id] = binding
        return list(bindings.values())

    def resolve(
        self,
        sheets: Iterable[Sheet],
        import_record: Import,
        metadata: Sequence[AccountMetadata] = (),
    ) -> list[tuple[Account, AccountBinding]]:
        """Build Account records for every account sheet.

        Returns:
            (account, binding) pairs in workbook order, with manifest label and
            kind applied
        """
        resolved = []
        for binding in self.bind(sheets):
            account = Account(
                id=binding.account_id,
                platform_id=import_record.platform_id,
                import_id=import_record.id,
            )
            resolved.append((apply_account_metadata(account, metadata), binding))
        return resolved


def apply_account_metadata(account: Account, metadata: Sequence[AccountMetadata]) -> Account:
    """Return the account with label and kind from the matching manifest entry."""
    for entry in metadata:
        if entry.matches(account):
            return replace(account, label=entry.label, kind=entry.kind)
    return account
