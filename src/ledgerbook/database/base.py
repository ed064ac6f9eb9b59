"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerbook.domain.entities import (
    Account,
    AccountType,
    Book,
    Category,
    Highlight,
    NormalBalanceSide,
    RecycledItem,
    Transaction,
    TransactionDraft,
)


class Database(ABC):
    """Abstract database interface for ledgerbook.

    Every collection except books is scoped by an explicit ``book_id``.
    Deletions move rows into the recycle bin within the same commit.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema and ensure the default book exists."""
        pass

    # Book operations
    @abstractmethod
    def create_book(self, name: str, is_default: bool = False) -> int:
        """Create a book. Returns book ID."""
        pass

    @abstractmethod
    def get_book(self, book_id: int) -> Optional[Book]:
        """Get book by ID."""
        pass

    @abstractmethod
    def get_default_book(self) -> Optional[Book]:
        """Get the default book."""
        pass

    @abstractmethod
    def list_books(self) -> list[Book]:
        """List all books."""
        pass

    @abstractmethod
    def rename_book(self, book_id: int, name: str) -> None:
        """Rename a book."""
        pass

    @abstractmethod
    def delete_book(self, book_id: int) -> RecycledItem:
        """Move a book and everything it owns into the recycle bin."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self, book_id: int, name: str, normal_balance_side: Optional[NormalBalanceSide]
    ) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, book_id: int, category_id: int) -> Optional[Category]:
        """Get category by ID within a book."""
        pass

    @abstractmethod
    def list_categories(self, book_id: int) -> list[Category]:
        """List categories of a book."""
        pass

    @abstractmethod
    def update_category(
        self,
        book_id: int,
        category_id: int,
        name: Optional[str] = None,
        normal_balance_side: Optional[NormalBalanceSide] = None,
    ) -> None:
        """Update category fields that are not None."""
        pass

    @abstractmethod
    def count_category_accounts(self, category_id: int) -> int:
        """Count accounts owned by a category."""
        pass

    @abstractmethod
    def delete_category(self, book_id: int, category_id: int) -> RecycledItem:
        """Move a category into the recycle bin."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        book_id: int,
        category_id: int,
        name: str,
        account_type: Optional[AccountType] = None,
        opening_balance: Optional[Decimal] = None,
    ) -> int:
        """Create an account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, book_id: int, account_id: int) -> Optional[Account]:
        """Get account by ID within a book."""
        pass

    @abstractmethod
    def list_accounts(self, book_id: int) -> list[Account]:
        """List accounts of a book."""
        pass

    @abstractmethod
    def update_account(
        self,
        book_id: int,
        account_id: int,
        name: Optional[str] = None,
        category_id: Optional[int] = None,
        account_type: Optional[AccountType] = None,
        opening_balance: Optional[Decimal] = None,
        clear_type: bool = False,
    ) -> None:
        """Update account fields that are not None."""
        pass

    @abstractmethod
    def count_account_entries(self, account_id: int) -> int:
        """Count transaction entries referencing an account."""
        pass

    @abstractmethod
    def delete_accounts(self, book_id: int, account_ids: list[int]) -> list[RecycledItem]:
        """Move accounts into the recycle bin, all or none."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(self, book_id: int, draft: TransactionDraft) -> int:
        """Persist a validated transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, book_id: int, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID within a book."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        book_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        account_id: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions, newest first.

        Args:
            book_id: Owning book
            start: Optional inclusive lower bound on date
            end: Optional inclusive upper bound on date
            account_id: Only transactions with an entry for this account
        """
        pass

    @abstractmethod
    def update_transaction(
        self, book_id: int, transaction_id: int, draft: TransactionDraft
    ) -> None:
        """Replace description, date and entries of a transaction."""
        pass

    @abstractmethod
    def delete_transaction(self, book_id: int, transaction_id: int) -> RecycledItem:
        """Move a transaction into the recycle bin."""
        pass

    # Highlight annotations
    @abstractmethod
    def get_highlights(self, book_id: int) -> dict[int, Highlight]:
        """Map transaction ID to highlight for a book."""
        pass

    @abstractmethod
    def set_highlight(
        self, book_id: int, transaction_id: int, highlight: Optional[Highlight]
    ) -> None:
        """Set or clear (None) a transaction highlight."""
        pass

    # Recycle bin
    @abstractmethod
    def list_recycled_items(
        self, book_id: Optional[int] = None, since: Optional[datetime] = None
    ) -> list[RecycledItem]:
        """List recycled items, most recently deleted first."""
        pass

    @abstractmethod
    def get_recycled_item(self, item_id: int) -> Optional[RecycledItem]:
        """Get recycled item by ID."""
        pass

    @abstractmethod
    def restore_recycled_item(self, item_id: int) -> int:
        """Rebuild the recycled entity with its original ID. Returns that ID."""
        pass

    @abstractmethod
    def purge_recycled_items(self, before: datetime) -> int:
        """Permanently drop items deleted before a cutoff. Returns count."""
        pass
