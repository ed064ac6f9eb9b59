"""CLI error handling helpers."""

import click

from ledgerbook.domain.errors import DomainError, ValidationError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    if isinstance(error, ValidationError) and error.rule:
        click.echo(f"Error: {error} [{error.rule}]", err=True)
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
