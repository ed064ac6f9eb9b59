"""Balance projection: the ledger window of a single account."""

from datetime import UTC, date, datetime, time
from typing import Iterable, Optional, Union

from ledgerbook.domain.entities import (
    Account,
    EntryType,
    LedgerEntry,
    LedgerWindow,
    Transaction,
    TransactionEntry,
)
from ledgerbook.domain.ledger import ZERO, signed_amount

DateBound = Union[date, datetime, None]


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


def widen_start(start: DateBound) -> Optional[datetime]:
    """Window start as a naive UTC datetime; a date starts at midnight."""
    if start is None:
        return None
    if isinstance(start, datetime):
        return _naive_utc(start)
    return datetime.combine(start, time.min)


def widen_end(end: DateBound) -> Optional[datetime]:
    """Inclusive window end as a naive UTC datetime; a date covers the whole day."""
    if end is None:
        return None
    if isinstance(end, datetime):
        return _naive_utc(end)
    return datetime.combine(end, time.max)


def account_lines(
    account_id: int, transactions: Iterable[Transaction]
) -> list[tuple[Transaction, TransactionEntry]]:
    """Select (transaction, entry) pairs for an account in chronological order.

    Ties on date are broken by transaction id, then entry position.
    """
    lines = []
    for txn in transactions:
        for position, entry in enumerate(txn.entries):
            if entry.account_id == account_id:
                lines.append((txn.date, txn.id, position, txn, entry))
    lines.sort(key=lambda line: line[:3])
    return [(txn, entry) for _, _, _, txn, entry in lines]


def project_ledger(
    account: Account,
    transactions: Iterable[Transaction],
    debit_normal: bool,
    start: DateBound = None,
    end: DateBound = None,
) -> LedgerWindow:
    """Build the ledger window for an account.

    Args:
        account: Account whose ledger is projected
        transactions: All transactions of the account's book, in any order
        debit_normal: Normal side of the account
        start: Optional window start; entries strictly before it form the
            opening balance. A date covers the whole day.
        end: Optional inclusive window end. A date covers the whole day.

    Returns:
        LedgerWindow with entries newest first
    """
    window_start = widen_start(start)
    window_end = widen_end(end)

    opening_balance = ZERO
    in_window: list[tuple[Transaction, TransactionEntry]] = []
    for txn, entry in account_lines(account.id, transactions):
        if window_start is not None and txn.date < window_start:
            opening_balance += signed_amount(entry, debit_normal)
            continue
        if window_end is not None and txn.date > window_end:
            continue
        in_window.append((txn, entry))

    running = opening_balance
    ledger_entries = []
    for txn, entry in in_window:
        running += signed_amount(entry, debit_normal)
        ledger_entries.append(
            LedgerEntry(
                transaction_id=txn.id,
                date=txn.date,
                description=entry.description or txn.description,
                debit=entry.amount if entry.type == EntryType.DEBIT else ZERO,
                credit=entry.amount if entry.type == EntryType.CREDIT else ZERO,
                balance=running,
            )
        )

    # Display order only; balances above are already fixed.
    ledger_entries.reverse()

    return LedgerWindow(
        account_id=account.id,
        debit_normal=debit_normal,
        opening_balance=opening_balance,
        entries=tuple(ledger_entries),
        closing_balance=running,
        start=window_start,
        end=window_end,
    )
