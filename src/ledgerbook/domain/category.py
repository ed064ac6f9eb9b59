"""Category domain service."""

import logging
from typing import Optional, Union

from ledgerbook.database.base import Database
from ledgerbook.domain.book import clean_name
from ledgerbook.domain.entities import Category, NormalBalanceSide, RecycledItem
from ledgerbook.domain.errors import (
    DuplicateNameError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationError,
    book_not_found,
    category_delete_blocked,
    category_not_found,
    duplicate_name,
)
from ledgerbook.domain.ledger import infer_normal_balance_side

logger = logging.getLogger(__name__)


def parse_normal_balance_side(
    side: Union[NormalBalanceSide, str, None],
) -> Optional[NormalBalanceSide]:
    """Coerce a side name ("debit"/"credit") to NormalBalanceSide."""
    if side is None or isinstance(side, NormalBalanceSide):
        return side
    try:
        return NormalBalanceSide(side.strip().lower())
    except ValueError:
        raise ValidationError(
            f"Invalid normal balance side '{side}'. Use 'debit' or 'credit'.",
            rule="normal_balance_side",
        )


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_unique(self, book_id: int, name: str, exclude_id: Optional[int] = None) -> None:
        for cat in self.db.list_categories(book_id):
            if cat.id != exclude_id and cat.name.lower() == name.lower():
                raise DuplicateNameError(duplicate_name("category", name))

    def create_category(
        self,
        book_id: int,
        name: str,
        normal_balance_side: Union[NormalBalanceSide, str, None] = None,
    ) -> int:
        """Create a category.

        The normal balance side is stored with the category. When not given,
        it defaults to the side suggested by the category name.

        Args:
            book_id: Owning book
            name: Category name (unique within the book, case-insensitive)
            normal_balance_side: Optional explicit side

        Returns:
            Category ID

        Raises:
            NotFoundError: If the book doesn't exist
            DuplicateNameError: If the name is taken in the book
        """
        if self.db.get_book(book_id) is None:
            raise NotFoundError(book_not_found(book_id))
        name = clean_name(name, "category")
        self._check_unique(book_id, name)

        side = parse_normal_balance_side(normal_balance_side) or infer_normal_balance_side(name)
        category_id = self.db.create_category(book_id, name, side)
        logger.info("Created category %s (%r, %s-normal) in book %s", category_id, name, side.value, book_id)
        return category_id

    def get_category(self, book_id: int, category_id: int) -> Optional[Category]:
        """Get category by ID.

        Returns:
            Category entity or None if not found in the book
        """
        return self.db.get_category(book_id, category_id)

    def require_category(self, book_id: int, category_id: int) -> Category:
        """Get category by ID, raising NotFoundError if missing."""
        category = self.db.get_category(book_id, category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def list_categories(self, book_id: int) -> list[Category]:
        """List categories of a book."""
        return self.db.list_categories(book_id)

    def rename_category(self, book_id: int, category_id: int, name: str) -> None:
        """Rename a category. Its stored normal balance side is kept.

        Raises:
            NotFoundError: If category not found
            DuplicateNameError: If the name is taken in the book
        """
        self.require_category(book_id, category_id)
        name = clean_name(name, "category")
        self._check_unique(book_id, name, exclude_id=category_id)
        self.db.update_category(book_id, category_id, name=name)
        logger.info("Renamed category %s to %r", category_id, name)

    def set_normal_balance_side(
        self, book_id: int, category_id: int, side: Union[NormalBalanceSide, str]
    ) -> None:
        """Explicitly change a category's normal balance side."""
        self.require_category(book_id, category_id)
        parsed = parse_normal_balance_side(side)
        if parsed is None:
            raise ValidationError("A normal balance side is required.", rule="normal_balance_side")
        self.db.update_category(book_id, category_id, normal_balance_side=parsed)
        logger.info("Set category %s to %s-normal", category_id, parsed.value)

    def delete_category(self, book_id: int, category_id: int) -> RecycledItem:
        """Delete a category, moving it to the recycle bin.

        Raises:
            NotFoundError: If category not found
            ReferentialIntegrityError: If accounts still belong to the category
        """
        self.require_category(book_id, category_id)

        account_count = self.db.count_category_accounts(category_id)
        if account_count > 0:
            logger.warning("Refused to delete category %s with %s accounts", category_id, account_count)
            raise ReferentialIntegrityError(category_delete_blocked(category_id, account_count))

        item = self.db.delete_category(book_id, category_id)
        logger.info("Moved category %s to the recycle bin", category_id)
        return item
