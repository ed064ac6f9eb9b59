"""Mapper functions to convert between domain models and SQLAlchemy models.

Recycle bin payloads are plain JSON: decimals are stored as strings and
timestamps in ISO-8601 so a snapshot can rebuild its rows exactly.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from ledgerbook.domain import entities as domain
from ledgerbook.database.models import (
    Account as ORMAccount,
    Book as ORMBook,
    Category as ORMCategory,
    RecycledItem as ORMRecycledItem,
    Transaction as ORMTransaction,
    TransactionEntry as ORMTransactionEntry,
    TransactionHighlight as ORMTransactionHighlight,
)


def _optional_decimal(value: Any) -> Optional[Decimal]:
    return None if value is None else Decimal(str(value))


def book_to_domain(orm_book: ORMBook) -> domain.Book:
    """Convert SQLAlchemy Book model to domain Book entity."""
    return domain.Book(
        id=orm_book.id,
        name=orm_book.name,
        is_default=orm_book.is_default,
        created_at=orm_book.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    side = orm_category.normal_balance_side
    return domain.Category(
        id=orm_category.id,
        book_id=orm_category.book_id,
        name=orm_category.name,
        normal_balance_side=domain.NormalBalanceSide(side) if side else None,
        created_at=orm_category.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    account_type = orm_account.account_type
    return domain.Account(
        id=orm_account.id,
        book_id=orm_account.book_id,
        category_id=orm_account.category_id,
        name=orm_account.name,
        type=domain.AccountType(account_type) if account_type else None,
        opening_balance=_optional_decimal(orm_account.opening_balance),
        created_at=orm_account.created_at,
    )


def entry_to_domain(orm_entry: ORMTransactionEntry) -> domain.TransactionEntry:
    """Convert SQLAlchemy TransactionEntry model to domain entity."""
    return domain.TransactionEntry(
        account_id=orm_entry.account_id,
        amount=Decimal(str(orm_entry.amount)),
        type=domain.EntryType(orm_entry.entry_type),
        description=orm_entry.description,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        book_id=orm_transaction.book_id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        entries=tuple(entry_to_domain(e) for e in orm_transaction.entries),
        created_at=orm_transaction.created_at,
    )


def recycled_item_to_domain(orm_item: ORMRecycledItem) -> domain.RecycledItem:
    """Convert SQLAlchemy RecycledItem model to domain entity."""
    return domain.RecycledItem(
        id=orm_item.id,
        book_id=orm_item.book_id,
        kind=domain.RecycledKind(orm_item.kind),
        original_id=orm_item.original_id,
        payload=dict(orm_item.payload),
        deleted_at=orm_item.deleted_at,
    )


def entries_to_orm(entries: tuple[domain.TransactionEntry, ...]) -> list[ORMTransactionEntry]:
    """Build ORM entry rows from domain entries, keeping their order."""
    return [
        ORMTransactionEntry(
            position=position,
            account_id=entry.account_id,
            amount=entry.amount,
            entry_type=entry.type.value,
            description=entry.description,
        )
        for position, entry in enumerate(entries)
    ]


# Recycle bin snapshots


def category_to_payload(orm_category: ORMCategory) -> dict[str, Any]:
    """Snapshot a category row."""
    return {
        "id": orm_category.id,
        "book_id": orm_category.book_id,
        "name": orm_category.name,
        "normal_balance_side": orm_category.normal_balance_side,
        "created_at": orm_category.created_at.isoformat(),
    }


def account_to_payload(orm_account: ORMAccount) -> dict[str, Any]:
    """Snapshot an account row."""
    opening = orm_account.opening_balance
    return {
        "id": orm_account.id,
        "book_id": orm_account.book_id,
        "category_id": orm_account.category_id,
        "name": orm_account.name,
        "type": orm_account.account_type,
        "opening_balance": None if opening is None else str(opening),
        "created_at": orm_account.created_at.isoformat(),
    }


def transaction_to_payload(orm_transaction: ORMTransaction) -> dict[str, Any]:
    """Snapshot a transaction with its entries and highlight."""
    highlight = orm_transaction.highlight
    return {
        "id": orm_transaction.id,
        "book_id": orm_transaction.book_id,
        "date": orm_transaction.date.isoformat(),
        "description": orm_transaction.description,
        "created_at": orm_transaction.created_at.isoformat(),
        "entries": [
            {
                "account_id": e.account_id,
                "amount": str(e.amount),
                "type": e.entry_type,
                "description": e.description,
            }
            for e in orm_transaction.entries
        ],
        "highlight": highlight.color if highlight is not None else None,
    }


def book_to_payload(
    orm_book: ORMBook,
    categories: list[ORMCategory],
    accounts: list[ORMAccount],
    transactions: list[ORMTransaction],
) -> dict[str, Any]:
    """Snapshot a book together with everything it owns."""
    return {
        "id": orm_book.id,
        "name": orm_book.name,
        "is_default": orm_book.is_default,
        "created_at": orm_book.created_at.isoformat(),
        "categories": [category_to_payload(c) for c in categories],
        "accounts": [account_to_payload(a) for a in accounts],
        "transactions": [transaction_to_payload(t) for t in transactions],
    }


def category_from_payload(payload: dict[str, Any]) -> ORMCategory:
    """Rebuild a category row from its snapshot."""
    return ORMCategory(
        id=payload["id"],
        book_id=payload["book_id"],
        name=payload["name"],
        normal_balance_side=payload["normal_balance_side"],
        created_at=datetime.fromisoformat(payload["created_at"]),
    )


def account_from_payload(payload: dict[str, Any]) -> ORMAccount:
    """Rebuild an account row from its snapshot."""
    return ORMAccount(
        id=payload["id"],
        book_id=payload["book_id"],
        category_id=payload["category_id"],
        name=payload["name"],
        account_type=payload["type"],
        opening_balance=_optional_decimal(payload["opening_balance"]),
        created_at=datetime.fromisoformat(payload["created_at"]),
    )


def transaction_from_payload(payload: dict[str, Any]) -> ORMTransaction:
    """Rebuild a transaction row, its entries and highlight from a snapshot."""
    transaction = ORMTransaction(
        id=payload["id"],
        book_id=payload["book_id"],
        date=datetime.fromisoformat(payload["date"]),
        description=payload["description"],
        created_at=datetime.fromisoformat(payload["created_at"]),
    )
    transaction.entries = [
        ORMTransactionEntry(
            position=position,
            account_id=e["account_id"],
            amount=Decimal(e["amount"]),
            entry_type=e["type"],
            description=e["description"],
        )
        for position, e in enumerate(payload["entries"])
    ]
    if payload.get("highlight"):
        transaction.highlight = ORMTransactionHighlight(color=payload["highlight"])
    return transaction


def book_from_payload(payload: dict[str, Any]) -> ORMBook:
    """Rebuild a book row (without its children) from a snapshot."""
    return ORMBook(
        id=payload["id"],
        name=payload["name"],
        is_default=payload["is_default"],
        created_at=datetime.fromisoformat(payload["created_at"]),
    )
