"""Recycle bin commands."""

import click
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.cli.resolution import resolve_book_or_exit
from ledgerbook.config import RECYCLE_RETENTION_DAYS
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.recycle import RecycleBinService


@click.group()
def recycle_group():
    """Inspect and restore deleted items."""
    pass


@recycle_group.command("list")
@click.option("--all-books", is_flag=True, help="List items of every book")
@click.option("--all", "show_all", is_flag=True, help="Include items older than the retention period")
@click.pass_context
def list_items(ctx, all_books: bool, show_all: bool):
    """List recently deleted items, newest first."""
    book_id = None if all_books else resolve_book_or_exit(ctx)
    within = None if show_all else RECYCLE_RETENTION_DAYS
    items = RecycleBinService(ctx.obj["db"]).list_items(book_id=book_id, within_days=within)

    if not items:
        click.echo("Recycle bin is empty.")
        return

    click.echo("\nRecycle bin:")
    click.echo("-" * 80)
    for item in items:
        click.echo(
            f"ID: {item.id:3d} | {item.kind.value:<11} | {item.title[:40]:<40} | "
            f"{item.deleted_at:%Y-%m-%d %H:%M}"
        )


@recycle_group.command("restore")
@click.argument("item_id", type=int)
@click.pass_context
def restore_item(ctx, item_id: int):
    """Restore a deleted item under its original ID."""
    service = RecycleBinService(ctx.obj["db"])
    try:
        item = service.get_item(item_id)
        restored_id = service.restore(item_id)
        click.echo(f"Restored {item.kind.value} '{item.title}' (ID: {restored_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@recycle_group.command("purge")
@click.option(
    "--days",
    type=int,
    default=RECYCLE_RETENTION_DAYS,
    show_default=True,
    help="Remove items deleted more than this many days ago",
)
@click.pass_context
def purge_items(ctx, days: int):
    """Permanently remove old items from the recycle bin."""
    count = RecycleBinService(ctx.obj["db"]).purge_expired(retention_days=days)
    click.echo(f"Purged {count} item(s)")


def register_commands(cli: click.Group) -> None:
    """Register recycle bin commands with main CLI."""
    cli.add_command(recycle_group, name="recycle")
