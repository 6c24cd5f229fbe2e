"""CLI error handling helpers."""

import click

from brokerledger.domain.errors import LedgerImportError


def handle_domain_error(ctx: click.Context, error: LedgerImportError | ValueError | OSError) -> None:
    """Render an import error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
