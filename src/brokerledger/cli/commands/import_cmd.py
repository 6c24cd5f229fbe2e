"""Import and verify commands."""

from pathlib import Path

import click
from brokerledger.cli.context import get_db
from brokerledger.cli.error_handling import handle_domain_error
from brokerledger.config import ImporterConfig, RowErrorPolicy
from brokerledger.domain.errors import LedgerImportError
from brokerledger.domain.importer import ImportService, verify_imports

imports_dir_option = click.option(
    "--imports-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default="imports",
    show_default=True,
    envvar="BROKERLEDGER_IMPORTS_DIR",
    help="Directory holding manifest (.toml) and export file pairs",
)


@click.command("import")
@imports_dir_option
@click.option(
    "--row-errors",
    type=click.Choice([p.value for p in RowErrorPolicy]),
    default=RowErrorPolicy.ABORT.value,
    show_default=True,
    envvar="BROKERLEDGER_ROW_ERRORS",
    help="Abort the run on a bad transaction row, or skip and report it",
)
@click.option(
    "--timezone",
    default="UTC",
    show_default=True,
    envvar="BROKERLEDGER_TIMEZONE",
    help="Timezone the export's dates are written in",
)
@click.pass_context
def import_files(ctx, imports_dir: Path, row_errors: str, timezone: str):
    """Import every export in a directory.

    Each export must sit next to a manifest with the same name and a .toml
    extension declaring its sha256sum and platform.

    Examples:
        brokerledger import
        brokerledger import --imports-dir ~/Downloads/vanguard --row-errors skip
    """
    try:
        config = ImporterConfig(
            imports_dir=imports_dir,
            row_error_policy=RowErrorPolicy(row_errors),
            source_timezone=timezone,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    service = ImportService(get_db(ctx), config)
    try:
        results = service.run_directory()
    except (LedgerImportError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)

    if not results:
        click.echo("No imports found.")
        return

    for result in results:
        click.echo(f"\nImported {result.import_record.filename}:")
        click.echo(f"  Accounts: {len(result.accounts)}")
        click.echo(f"  Transactions: {len(result.transactions)}")
        if result.errors:
            click.echo(f"  Skipped rows: {len(result.errors)}")
            for error in result.errors:
                click.echo(f"    {error}", err=True)


@click.command("verify")
@imports_dir_option
@click.pass_context
def verify_files(ctx, imports_dir: Path):
    """Check exports against their manifest sha256sums without importing."""
    try:
        candidates = verify_imports(imports_dir)
    except (LedgerImportError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)

    for candidate in candidates:
        click.echo(f"OK  {candidate.import_path}")
    click.echo(f"{len(candidates)} file{'s' if len(candidates) != 1 else ''} verified")


def register_commands(cli):
    """Register import commands with main CLI."""
    cli.add_command(import_files)
    cli.add_command(verify_files)
