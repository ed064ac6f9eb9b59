"""Book domain service."""

import logging
from typing import Optional

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import Book, RecycledItem
from ledgerbook.domain.errors import (
    DuplicateNameError,
    NotFoundError,
    ValidationError,
    book_not_found,
    duplicate_name,
)

logger = logging.getLogger(__name__)


def clean_name(name: Optional[str], kind: str) -> str:
    """Strip a user supplied name, rejecting empty ones."""
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError(f"{kind.capitalize()} name cannot be empty.", rule="name")
    return cleaned


class BookService:
    """Service for managing books."""

    def __init__(self, db: Database):
        """Initialize book service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_unique(self, name: str, exclude_id: Optional[int] = None) -> None:
        for book in self.db.list_books():
            if book.id != exclude_id and book.name.lower() == name.lower():
                raise DuplicateNameError(duplicate_name("book", name))

    def create_book(self, name: str) -> int:
        """Create a new book.

        Args:
            name: Book name (unique, case-insensitive)

        Returns:
            Book ID

        Raises:
            ValidationError: If name is empty
            DuplicateNameError: If a book with the same name exists
        """
        name = clean_name(name, "book")
        self._check_unique(name)
        book_id = self.db.create_book(name)
        logger.info("Created book %s (%r)", book_id, name)
        return book_id

    def get_book(self, book_id: int) -> Optional[Book]:
        """Get book by ID."""
        return self.db.get_book(book_id)

    def require_book(self, book_id: int) -> Book:
        """Get book by ID, raising NotFoundError if missing."""
        book = self.db.get_book(book_id)
        if book is None:
            raise NotFoundError(book_not_found(book_id))
        return book

    def get_default_book(self) -> Book:
        """Get the default book, which always exists once the schema is initialized."""
        book = self.db.get_default_book()
        if book is None:
            raise NotFoundError("Default book not found. Initialize the database first.")
        return book

    def list_books(self) -> list[Book]:
        """List all books."""
        return self.db.list_books()

    def rename_book(self, book_id: int, name: str) -> None:
        """Rename a book.

        Raises:
            NotFoundError: If book not found
            DuplicateNameError: If another book already uses the name
        """
        self.require_book(book_id)
        name = clean_name(name, "book")
        self._check_unique(name, exclude_id=book_id)
        self.db.rename_book(book_id, name)
        logger.info("Renamed book %s to %r", book_id, name)

    def delete_book(self, book_id: int) -> RecycledItem:
        """Delete a book, moving it and everything it owns to the recycle bin.

        Raises:
            NotFoundError: If book not found
            ValidationError: If the book is the default book
        """
        book = self.require_book(book_id)
        if book.is_default:
            logger.warning("Refused to delete default book %s", book_id)
            raise ValidationError("The default book cannot be deleted.", rule="default_book")

        item = self.db.delete_book(book_id)
        logger.info("Moved book %s (%r) to the recycle bin", book_id, book.name)
        return item
