"""Import service: runs one manifest/import file pair through the engine."""

import logging
from pathlib import Path
from typing import Optional

from brokerledger.config import ImporterConfig, RowErrorPolicy
from brokerledger.database.base import Database
from brokerledger.domain.account_resolver import AccountBinding, AccountResolver
from brokerledger.domain.discovery import ImportCandidate, find_imports
from brokerledger.domain.entities import Account, Import, ImportResult, Manifest
from brokerledger.domain.errors import DataError, LedgerImportError, PersistenceError, StructuralError
from brokerledger.domain.integrity import validate_checksum
from brokerledger.domain.row_parser import RowParser
from brokerledger.domain.transaction_table import scan_transaction_rows
from brokerledger.domain.workbook import Workbook

logger = logging.getLogger(__name__)


def verify_imports(imports_dir: Path) -> list[ImportCandidate]:
    """Check every import file in a directory against its manifest sha256sum.

    Touches no database.

    Raises:
        IntegrityError: On the first mismatching file
    """
    candidates = find_imports(imports_dir)
    for candidate in candidates:
        logger.info("validating %s", candidate.import_path)
        validate_checksum(candidate.import_path, candidate.manifest.sha256sum)
    return candidates


class ImportService:
    """Service for importing broker export files."""

    def __init__(
        self,
        db: Database,
        config: Optional[ImporterConfig] = None,
        resolver: Optional[AccountResolver] = None,
    ):
        """Initialize import service.

        Args:
            db: Database instance
            config: Importer settings, defaults if None
            resolver: Account resolver, default strategies if None
        """
        self.db = db
        self.config = config if config is not None else ImporterConfig()
        self.resolver = resolver if resolver is not None else AccountResolver()

    def run_directory(self, imports_dir: Optional[Path] = None) -> list[ImportResult]:
        """Import every manifest/import pair in a directory, in name order.

        Stops at the first unrecoverable error; imports already completed stay
        in the database.
        """
        directory = imports_dir if imports_dir is not None else self.config.imports_dir
        results = []
        for candidate in find_imports(directory):
            results.append(self.run(candidate.manifest, candidate.import_path))
        return results

    def verify_directory(self, imports_dir: Optional[Path] = None) -> list[ImportCandidate]:
        """Check the fingerprint of every import file without importing.

        Raises:
            IntegrityError: On the first mismatching file
        """
        return verify_imports(imports_dir if imports_dir is not None else self.config.imports_dir)

    def run(self, manifest: Manifest, import_path: Path) -> ImportResult:
        """Import one file.

        Raises:
            IntegrityError: If the file does not match the manifest; nothing is written
            StructuralError: If the workbook does not have the expected layout
            DataError: If a row is invalid and the policy is to abort
            PersistenceError: If the store rejects a write
        """
        logger.info("processing import %s (%s)", import_path, manifest.platform.id)
        logger.info("validating manifest")
        validate_checksum(import_path, manifest.sha256sum)

        with Workbook.open(import_path) as workbook:
            logger.info("creating import record")
            generation_date = workbook.report_generation_date(self.config.zone)
            logger.debug("report generated at %s", generation_date.isoformat())
            import_record = self.db.create_import(
                Import(
                    id=manifest.sha256sum,
                    filename=str(import_path),
                    platform_id=manifest.platform.id,
                    generation_date=generation_date,
                )
            )
            result = ImportResult(import_record=import_record)

            logger.info("importing accounts")
            try:
                resolved = self.resolver.resolve(workbook.sheets(), import_record, manifest.accounts)
            except LedgerImportError as e:
                e.path = e.path or import_path
                raise
            accounts = self.db.create_accounts([account for account, _ in resolved])
            result.accounts.extend(accounts)
            logger.debug("imported %d account records: %s", len(accounts), [a.id for a in accounts])

            logger.info("importing transactions")
            for account, (_, binding) in zip(accounts, resolved):
                count = self._import_transactions(workbook, manifest, import_record, account, binding, result)
                logger.debug("imported %d transactions for %s", count, account.id)

        return result

    def _import_transactions(
        self,
        workbook: Workbook,
        manifest: Manifest,
        import_record: Import,
        account: Account,
        binding: AccountBinding,
        result: ImportResult,
    ) -> int:
        sheet = workbook.sheet(binding.sheet_name)
        parser = RowParser(
            account_id=account.id,
            import_id=import_record.id,
            currency_symbol=manifest.platform.currency_symbol,
            zone=self.config.zone,
            epsilon=self.config.reconciliation_epsilon,
        )

        imported = 0
        for row in scan_transaction_rows(sheet, self.config.scan_row_limit):
            try:
                transaction = parser.parse(row.cells)
            except (StructuralError, DataError) as e:
                e.path = workbook.path
                e.sheet = sheet.name
                e.row = row.number
                e.account_id = account.id
                if self.config.row_error_policy is RowErrorPolicy.ABORT:
                    raise
                logger.warning("skipping row: %s", e)
                result.errors.append(f"{sheet.name} row {row.number}: {e.message}")
                continue
            try:
                result.transactions.append(self.db.create_transaction(transaction))
            except PersistenceError as e:
                e.path = workbook.path
                e.sheet = sheet.name
                e.row = row.number
                e.account_id = account.id
                raise
            imported += 1
        return imported
