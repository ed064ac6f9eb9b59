"""Recycle bin domain service.

Deleted books, categories, accounts and transactions are kept as snapshots
and can be restored with their original ids as long as whatever they depend
on still exists.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional

from ledgerbook.config import RECYCLE_RETENTION_DAYS
from ledgerbook.database.base import Database
from ledgerbook.database.models import utc_now
from ledgerbook.domain.entities import RecycledItem, RecycledKind
from ledgerbook.domain.errors import (
    DuplicateNameError,
    NotFoundError,
    account_not_found,
    book_not_found,
    category_not_found,
    duplicate_name,
    recycled_item_not_found,
)

logger = logging.getLogger(__name__)


class RecycleBinService:
    """Service for listing, restoring and purging recycled items."""

    def __init__(self, db: Database):
        """Initialize recycle bin service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_items(
        self,
        book_id: Optional[int] = None,
        within_days: Optional[int] = RECYCLE_RETENTION_DAYS,
        now: Optional[datetime] = None,
    ) -> list[RecycledItem]:
        """List recycled items, most recently deleted first.

        Args:
            book_id: Optional book filter
            within_days: Only items deleted in the last N days (None for all)
            now: Reference time (naive UTC), defaults to the current time
        """
        since = None
        if within_days is not None:
            since = (now or utc_now()) - timedelta(days=within_days)
        return self.db.list_recycled_items(book_id=book_id, since=since)

    def get_item(self, item_id: int) -> RecycledItem:
        """Get a recycled item, raising NotFoundError if missing."""
        item = self.db.get_recycled_item(item_id)
        if item is None:
            raise NotFoundError(recycled_item_not_found(item_id))
        return item

    def _check_book(self, book_id: int) -> None:
        if self.db.get_book(book_id) is None:
            raise NotFoundError(book_not_found(book_id))

    def _check_name_free(self, kind: str, name: str, existing: list[Any]) -> None:
        if any(e.name.lower() == name.lower() for e in existing):
            raise DuplicateNameError(duplicate_name(kind, name))

    def _check_restorable(self, item: RecycledItem) -> None:
        payload = item.payload
        if item.kind == RecycledKind.BOOK:
            self._check_name_free("book", payload["name"], self.db.list_books())
        elif item.kind == RecycledKind.CATEGORY:
            self._check_book(item.book_id)
            self._check_name_free("category", payload["name"], self.db.list_categories(item.book_id))
        elif item.kind == RecycledKind.ACCOUNT:
            self._check_book(item.book_id)
            if self.db.get_category(item.book_id, payload["category_id"]) is None:
                raise NotFoundError(category_not_found(payload["category_id"]))
            self._check_name_free("account", payload["name"], self.db.list_accounts(item.book_id))
        else:
            self._check_book(item.book_id)
            for entry in payload["entries"]:
                if self.db.get_account(item.book_id, entry["account_id"]) is None:
                    raise NotFoundError(account_not_found(entry["account_id"]))

    def restore(self, item_id: int) -> int:
        """Restore a recycled item into its live collection.

        Returns:
            The restored entity's (original) ID

        Raises:
            NotFoundError: If the item, or something it depends on, is gone
            DuplicateNameError: If a live entity now holds the same name
        """
        item = self.get_item(item_id)
        self._check_restorable(item)
        restored_id = self.db.restore_recycled_item(item_id)
        logger.info("Restored %s %s from the recycle bin", item.kind.value, restored_id)
        return restored_id

    def purge_expired(
        self, retention_days: int = RECYCLE_RETENTION_DAYS, now: Optional[datetime] = None
    ) -> int:
        """Permanently remove items older than the retention period.

        Returns:
            Number of purged items
        """
        cutoff = (now or utc_now()) - timedelta(days=retention_days)
        count = self.db.purge_recycled_items(cutoff)
        if count:
            logger.info("Purged %s recycled item(s) deleted before %s", count, cutoff)
        return count
