"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic.

    The ``rule`` attribute names the check that failed (e.g. ``"balanced"``).
    """

    def __init__(self, message: str, rule: Optional[str] = None):
        super().__init__(message)
        self.rule = rule


class NotFoundError(DomainError):
    """Requested domain entity does not exist in the book."""


class DuplicateNameError(DomainError):
    """Name collision within a book (or across books for book names)."""


class ReferentialIntegrityError(DomainError):
    """Operation blocked due to dependent domain data."""


def book_not_found(book_id: int) -> str:
    """Return message for missing book."""
    return f"Book {book_id} not found"


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def recycled_item_not_found(item_id: int) -> str:
    """Return message for missing recycle bin item."""
    return f"Recycled item {item_id} not found"


def duplicate_name(kind: str, name: str) -> str:
    """Return message for a name that is already taken."""
    return f"{kind.capitalize()} with name '{name}' already exists"


def account_delete_blocked(account_id: int, entry_count: int) -> str:
    """Return message when account is referenced by transaction entries."""
    return (
        f"Cannot delete account {account_id}: it is used by "
        f"{entry_count} transaction entr{'ies' if entry_count != 1 else 'y'}. "
        "Please reassign or delete them first."
    )


def category_delete_blocked(category_id: int, account_count: int) -> str:
    """Return message when category still owns accounts."""
    return (
        f"Cannot delete category {category_id}: it has "
        f"{account_count} account{'s' if account_count != 1 else ''}. "
        "Please move or delete them first."
    )
