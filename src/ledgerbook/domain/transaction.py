"""Transaction domain service."""

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Union

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import (
    Highlight,
    RecycledItem,
    Transaction,
    TransactionDraft,
)
from ledgerbook.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    book_not_found,
    transaction_not_found,
)
from ledgerbook.domain.projection import widen_end, widen_start
from ledgerbook.domain.validation import EntryLike, validate_transaction

logger = logging.getLogger(__name__)


def parse_highlight(highlight: Union[Highlight, str, None]) -> Optional[Highlight]:
    """Coerce a color name to Highlight; None or "" clears."""
    if highlight is None or isinstance(highlight, Highlight):
        return highlight
    if not highlight.strip():
        return None
    try:
        return Highlight(highlight.strip().lower())
    except ValueError:
        choices = ", ".join(h.value for h in Highlight)
        raise ValidationError(
            f"Invalid highlight '{highlight}'. Choose one of: {choices}", rule="highlight"
        )


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_accounts(self, book_id: int, draft: TransactionDraft) -> None:
        """Verify every entry's account exists in the book."""
        for account_id in dict.fromkeys(e.account_id for e in draft.entries):
            if self.db.get_account(book_id, account_id) is None:
                raise NotFoundError(account_not_found(account_id))

    def create_transaction(
        self,
        book_id: int,
        description: str,
        date: Union[date, datetime],
        entries: Iterable[EntryLike],
    ) -> int:
        """Create a transaction.

        Args:
            book_id: Owning book
            description: Narration
            date: Transaction date or instant
            entries: Entries (TransactionEntry or dicts), at least two, balanced

        Returns:
            Transaction ID

        Raises:
            ValidationError: If the entries break a double-entry rule
            NotFoundError: If the book or any account doesn't exist
        """
        draft = validate_transaction(description, date, entries)

        if self.db.get_book(book_id) is None:
            raise NotFoundError(book_not_found(book_id))
        self._check_accounts(book_id, draft)

        transaction_id = self.db.create_transaction(book_id, draft)
        logger.info(
            "Created transaction %s in book %s with %s entries",
            transaction_id,
            book_id,
            len(draft.entries),
        )
        return transaction_id

    def get_transaction(self, book_id: int, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID.

        Returns:
            Transaction entity or None if not found in the book
        """
        return self.db.get_transaction(book_id, transaction_id)

    def require_transaction(self, book_id: int, transaction_id: int) -> Transaction:
        """Get transaction by ID, raising NotFoundError if missing."""
        txn = self.db.get_transaction(book_id, transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def update_transaction(
        self,
        book_id: int,
        transaction_id: int,
        description: str,
        date: Union[date, datetime],
        entries: Iterable[EntryLike],
    ) -> Transaction:
        """Replace a transaction's description, date and entries.

        The replacement is validated exactly like a new transaction. The
        highlight annotation is left untouched.

        Returns:
            The updated transaction

        Raises:
            NotFoundError: If the transaction or any account doesn't exist
            ValidationError: If the entries break a double-entry rule
        """
        self.require_transaction(book_id, transaction_id)
        draft = validate_transaction(description, date, entries)
        self._check_accounts(book_id, draft)

        self.db.update_transaction(book_id, transaction_id, draft)
        logger.info("Updated transaction %s", transaction_id)
        return self.require_transaction(book_id, transaction_id)

    def delete_transaction(self, book_id: int, transaction_id: int) -> RecycledItem:
        """Delete a transaction, moving it to the recycle bin.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        self.require_transaction(book_id, transaction_id)
        item = self.db.delete_transaction(book_id, transaction_id)
        logger.info("Moved transaction %s to the recycle bin", transaction_id)
        return item

    def list_transactions(
        self,
        book_id: int,
        start: Union[date, datetime, None] = None,
        end: Union[date, datetime, None] = None,
        account_id: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions, newest first.

        Args:
            book_id: Owning book
            start: Optional start (a date covers the whole day)
            end: Optional inclusive end (a date covers the whole day)
            account_id: Optional account filter

        Returns:
            List of transaction entities
        """
        return self.db.list_transactions(
            book_id,
            start=widen_start(start),
            end=widen_end(end),
            account_id=account_id,
        )

    def set_highlight(
        self,
        book_id: int,
        transaction_id: int,
        highlight: Union[Highlight, str, None],
    ) -> None:
        """Set or clear a transaction's highlight.

        Highlights are annotations; the transaction itself is not re-validated.
        """
        color = parse_highlight(highlight)
        self.require_transaction(book_id, transaction_id)
        self.db.set_highlight(book_id, transaction_id, color)
        logger.info(
            "%s highlight on transaction %s",
            "Cleared" if color is None else f"Set {color.value}",
            transaction_id,
        )

    def get_highlights(self, book_id: int) -> dict[int, Highlight]:
        """Map transaction ID to highlight for a book."""
        return self.db.get_highlights(book_id)
