"""Domain model entities for ledgerbook.

These are pure data classes representing business concepts, independent of
database schema. Derived view models produced by the ledger engine live here
as well so presentation callers only depend on this module.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class EntryType(str, Enum):
    """Side of a transaction entry."""

    DEBIT = "debit"
    CREDIT = "credit"


class AccountType(str, Enum):
    """Formal account classification."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"


class NormalBalanceSide(str, Enum):
    """Side on which a balance is conventionally positive."""

    DEBIT = "debit"
    CREDIT = "credit"


class Highlight(str, Enum):
    """UI marker colors for transactions. No accounting meaning."""

    YELLOW = "yellow"
    BLUE = "blue"
    GREEN = "green"


class RecycledKind(str, Enum):
    """Kind of entity held in the recycle bin."""

    BOOK = "book"
    CATEGORY = "category"
    ACCOUNT = "account"
    TRANSACTION = "transaction"


@dataclass(frozen=True)
class Book:
    """Ledger namespace owning categories, accounts and transactions."""

    id: int
    name: str
    is_default: bool
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Named grouping of accounts."""

    id: int
    book_id: int
    name: str
    normal_balance_side: Optional[NormalBalanceSide]
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Ledger account."""

    id: int
    book_id: int
    category_id: int
    name: str
    type: Optional[AccountType]
    opening_balance: Optional[Decimal]
    created_at: datetime


@dataclass(frozen=True)
class TransactionEntry:
    """One leg of a transaction."""

    account_id: int
    amount: Decimal
    type: EntryType
    description: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    """Atomic financial event made of balanced entries."""

    id: int
    book_id: int
    date: datetime
    description: str
    entries: tuple[TransactionEntry, ...]
    created_at: datetime


@dataclass(frozen=True)
class TransactionDraft:
    """Validated transaction content, ready to persist."""

    description: str
    date: datetime
    entries: tuple[TransactionEntry, ...]


@dataclass(frozen=True)
class RecycledItem:
    """Soft-deleted entity snapshot."""

    id: int
    book_id: int
    kind: RecycledKind
    original_id: int
    payload: dict[str, Any]
    deleted_at: datetime

    @property
    def title(self) -> str:
        """Human readable label for listings."""
        return self.payload.get("name") or self.payload.get("description") or ""


@dataclass(frozen=True)
class LedgerEntry:
    """One ledger line for an account, with the running balance after it."""

    transaction_id: int
    date: datetime
    description: str
    debit: Decimal
    credit: Decimal
    balance: Decimal


@dataclass(frozen=True)
class LedgerWindow:
    """Ledger view of one account over an optional date window.

    ``entries`` is in display order (most recent first).
    """

    account_id: int
    debit_normal: bool
    opening_balance: Decimal
    entries: tuple[LedgerEntry, ...]
    closing_balance: Decimal
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def balance_side(self, balance: Decimal) -> str:
        """Return "Dr" or "Cr" for a balance of this account."""
        if self.debit_normal:
            return "Dr" if balance >= 0 else "Cr"
        return "Cr" if balance >= 0 else "Dr"


@dataclass(frozen=True)
class AccountWithBalance:
    """Account with its all-time net balance attached."""

    account: Account
    balance: Decimal
    debit_normal: bool

    @property
    def id(self) -> int:
        return self.account.id

    @property
    def name(self) -> str:
        return self.account.name

    @property
    def category_id(self) -> int:
        return self.account.category_id


@dataclass(frozen=True)
class CategoryWithDetails:
    """Category plus member accounts with balances and their total."""

    category: Category
    accounts: tuple[AccountWithBalance, ...]
    total_balance: Decimal
    debit_normal: bool


@dataclass(frozen=True)
class BalanceTotals:
    """Aggregate debit and credit figures."""

    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")


@dataclass(frozen=True)
class DashboardSummary:
    """Book-wide rollups for dashboards."""

    book_id: int
    totals: BalanceTotals
    turnover: BalanceTotals
    categories: tuple[CategoryWithDetails, ...] = field(default_factory=tuple)
    accounts: tuple[AccountWithBalance, ...] = field(default_factory=tuple)
