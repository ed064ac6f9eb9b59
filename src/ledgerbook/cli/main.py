"""Main CLI entry point."""

import logging

import click
from ledgerbook.config import LOG_FORMAT, LOG_LEVEL_ENV_VAR, get_log_level
from ledgerbook.database.factories import create_sqlite_database

# Import and register all commands at module level
from ledgerbook.cli.commands import (
    account,
    book,
    category,
    ledger,
    recycle,
    summary,
    transaction,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERBOOK_DB_PATH environment variable)",
    envvar="LEDGERBOOK_DB_PATH",
)
@click.option("--book", "book_ref", help="Book name or ID (defaults to the default book)")
@click.option(
    "--log-level",
    help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    envvar=LOG_LEVEL_ENV_VAR,
)
@click.pass_context
def cli(ctx, db_path: str | None, book_ref: str | None, log_level: str | None):
    """Ledgerbook - Double-entry bookkeeping.

    Keep books of categories, accounts and balanced transactions, and view
    account ledgers and balance summaries.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(level=get_log_level(log_level), format=LOG_FORMAT, force=True)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["book"] = book_ref
        ctx.call_on_close(db.disconnect)


# Register all commands
book.register_commands(cli)
category.register_commands(cli)
account.register_commands(cli)
transaction.register_commands(cli)
ledger.register_commands(cli)
summary.register_commands(cli)
recycle.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
