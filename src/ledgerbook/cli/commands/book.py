"""Book management commands."""

import click
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.book import BookService
from ledgerbook.domain.errors import DomainError
from ledgerbook.utils.resolvers import resolve_by_name_or_id


@click.group()
def book_group():
    """Manage books."""
    pass


def _resolve_book(ctx, service: BookService, book: str) -> int:
    try:
        return resolve_by_name_or_id("book", book, service.list_books())
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@book_group.command("create")
@click.argument("name", metavar="BOOK_NAME")
@click.pass_context
def create_book(ctx, name: str):
    """Create a new book.

    Examples:
        ledgerbook book create "Shop 2024"
    """
    service = BookService(ctx.obj["db"])
    try:
        book_id = service.create_book(name)
        click.echo(f"Created book '{name.strip()}' (ID: {book_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@book_group.command("list")
@click.pass_context
def list_books(ctx):
    """List all books."""
    service = BookService(ctx.obj["db"])

    books = service.list_books()
    click.echo("\nBooks:")
    click.echo("-" * 60)
    for book in books:
        marker = " (default)" if book.is_default else ""
        click.echo(f"ID: {book.id:3d} | {book.name}{marker}")


@book_group.command("rename")
@click.argument("book", metavar="BOOK")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_book(ctx, book: str, new_name: str) -> None:
    """Rename a book.

    BOOK can be a book name or ID.

    Examples:
        ledgerbook book rename "Shop 2024" "Shop"
    """
    service = BookService(ctx.obj["db"])
    book_id = _resolve_book(ctx, service, book)

    try:
        service.rename_book(book_id, new_name)
        click.echo(f"Renamed book to '{new_name.strip()}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@book_group.command("delete")
@click.argument("book", metavar="BOOK")
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_book(ctx, book: str, yes: bool) -> None:
    """Delete a book and everything in it.

    The whole book is moved to the recycle bin as a single item and can be
    restored with 'recycle restore'. The default book cannot be deleted.
    """
    service = BookService(ctx.obj["db"])
    book_id = _resolve_book(ctx, service, book)

    if not yes and not click.confirm(f"Are you sure you want to delete book {book_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        item = service.delete_book(book_id)
        click.echo(f"Deleted book {book_id} (recycle bin item {item.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli: click.Group) -> None:
    """Register book commands with main CLI."""
    cli.add_command(book_group, name="book")
