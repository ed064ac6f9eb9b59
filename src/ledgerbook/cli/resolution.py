"""CLI helpers for book/category/account resolution and error handling."""

from __future__ import annotations

import click

from ledgerbook.database.base import Database
from ledgerbook.domain.book import BookService
from ledgerbook.utils.resolvers import resolve_by_name_or_id


def resolve_book_or_exit(ctx: click.Context) -> int:
    """Resolve the --book option (name or ID), defaulting to the default book.

    This keeps error messaging and exit behavior consistent across commands.
    """
    db: Database = ctx.obj["db"]
    reference = ctx.obj.get("book")
    books = BookService(db)
    if reference is None:
        return books.get_default_book().id
    try:
        return resolve_by_name_or_id("book", reference, books.list_books())
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_category_or_exit(ctx: click.Context, book_id: int, category: str | int) -> int:
    """Resolve a category name or ID within a book, or exit with a CLI error."""
    db: Database = ctx.obj["db"]
    try:
        return resolve_by_name_or_id("category", category, db.list_categories(book_id))
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_account_or_exit(ctx: click.Context, book_id: int, account: str | int) -> int:
    """Resolve an account name or ID within a book, or exit with a CLI error."""
    db: Database = ctx.obj["db"]
    try:
        return resolve_by_name_or_id("account", account, db.list_accounts(book_id))
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
