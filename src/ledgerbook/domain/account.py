"""Account domain service."""

import logging
from decimal import Decimal
from typing import Optional, Union

from ledgerbook.database.base import Database
from ledgerbook.domain.book import clean_name
from ledgerbook.domain.entities import Account, AccountType, RecycledItem
from ledgerbook.domain.errors import (
    DuplicateNameError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationError,
    account_delete_blocked,
    account_not_found,
    book_not_found,
    category_not_found,
    duplicate_name,
)

logger = logging.getLogger(__name__)


def parse_account_type(account_type: Union[AccountType, str, None]) -> Optional[AccountType]:
    """Coerce an account type name to AccountType."""
    if account_type is None or isinstance(account_type, AccountType):
        return account_type
    try:
        return AccountType(account_type.strip().lower())
    except ValueError:
        choices = ", ".join(t.value for t in AccountType)
        raise ValidationError(
            f"Invalid account type '{account_type}'. Choose one of: {choices}",
            rule="account_type",
        )


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_unique(self, book_id: int, name: str, exclude_id: Optional[int] = None) -> None:
        for acc in self.db.list_accounts(book_id):
            if acc.id != exclude_id and acc.name.lower() == name.lower():
                raise DuplicateNameError(duplicate_name("account", name))

    def _check_category(self, book_id: int, category_id: int) -> None:
        if self.db.get_category(book_id, category_id) is None:
            raise NotFoundError(category_not_found(category_id))

    def create_account(
        self,
        book_id: int,
        category_id: int,
        name: str,
        account_type: Union[AccountType, str, None] = None,
        opening_balance: Optional[Decimal] = None,
    ) -> int:
        """Create a new account.

        Args:
            book_id: Owning book
            category_id: Owning category (must belong to the same book)
            name: Account name
            account_type: Optional asset/liability/equity/revenue/expense
            opening_balance: Optional opening balance, stored for reference

        Returns:
            Account ID

        Raises:
            NotFoundError: If book or category doesn't exist
            DuplicateNameError: If account name already exists in the book
        """
        if self.db.get_book(book_id) is None:
            raise NotFoundError(book_not_found(book_id))
        self._check_category(book_id, category_id)
        name = clean_name(name, "account")
        self._check_unique(book_id, name)

        account_id = self.db.create_account(
            book_id=book_id,
            category_id=category_id,
            name=name,
            account_type=parse_account_type(account_type),
            opening_balance=opening_balance,
        )
        logger.info("Created account %s (%r) in book %s", account_id, name, book_id)
        return account_id

    def get_account(self, book_id: int, account_id: int) -> Optional[Account]:
        """Get account by ID.

        Returns:
            Account entity or None if not found in the book
        """
        return self.db.get_account(book_id, account_id)

    def require_account(self, book_id: int, account_id: int) -> Account:
        """Get account by ID, raising NotFoundError if missing."""
        account = self.db.get_account(book_id, account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self, book_id: int, category_id: Optional[int] = None) -> list[Account]:
        """List accounts of a book, optionally only one category's."""
        accounts = self.db.list_accounts(book_id)
        if category_id is not None:
            accounts = [acc for acc in accounts if acc.category_id == category_id]
        return accounts

    def update_account(
        self,
        book_id: int,
        account_id: int,
        name: Optional[str] = None,
        category_id: Optional[int] = None,
        account_type: Union[AccountType, str, None] = None,
        opening_balance: Optional[Decimal] = None,
        clear_type: bool = False,
    ) -> None:
        """Update account fields.

        Args:
            book_id: Owning book
            account_id: Account ID to update
            name: Optional new name
            category_id: Optional new category in the same book
            account_type: Optional new account type
            opening_balance: Optional new opening balance
            clear_type: If True, remove the explicit type (account_type must be None)

        Raises:
            NotFoundError: If account or category not found
            DuplicateNameError: If the new name is taken
            ValidationError: If both account_type and clear_type are given
        """
        self.require_account(book_id, account_id)

        if clear_type and account_type is not None:
            raise ValidationError("Cannot set both account_type and clear_type", rule="account_type")
        if name is not None:
            name = clean_name(name, "account")
            self._check_unique(book_id, name, exclude_id=account_id)
        if category_id is not None:
            self._check_category(book_id, category_id)

        self.db.update_account(
            book_id=book_id,
            account_id=account_id,
            name=name,
            category_id=category_id,
            account_type=parse_account_type(account_type),
            opening_balance=opening_balance,
            clear_type=clear_type,
        )
        logger.info("Updated account %s", account_id)

    def delete_account(self, book_id: int, account_id: int) -> RecycledItem:
        """Delete an account, moving it to the recycle bin.

        Raises:
            NotFoundError: If account not found
            ReferentialIntegrityError: If any transaction entry references it
        """
        return self.delete_accounts(book_id, [account_id])[0]

    def delete_accounts(self, book_id: int, account_ids: list[int]) -> list[RecycledItem]:
        """Delete several accounts. Either all are deleted or none is.

        Raises:
            NotFoundError: If any account is not found
            ReferentialIntegrityError: If any account is referenced by entries
        """
        unique_ids = list(dict.fromkeys(account_ids))
        for account_id in unique_ids:
            self.require_account(book_id, account_id)
            entry_count = self.db.count_account_entries(account_id)
            if entry_count > 0:
                logger.warning("Refused to delete account %s with %s entries", account_id, entry_count)
                raise ReferentialIntegrityError(account_delete_blocked(account_id, entry_count))

        items = self.db.delete_accounts(book_id, unique_ids)
        logger.info("Moved %s account(s) to the recycle bin", len(items))
        return items
