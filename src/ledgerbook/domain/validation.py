"""Transaction validation.

Every transaction must pass ``validate_transaction`` before it reaches the
database. Validation is deterministic and has no side effects, so a caller
can safely re-run it.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Union

from ledgerbook.config import BALANCE_EPSILON
from ledgerbook.domain.entities import EntryType, TransactionDraft, TransactionEntry
from ledgerbook.domain.errors import ValidationError
from ledgerbook.domain.ledger import sum_by_type
from ledgerbook.domain.projection import widen_start

MIN_ENTRIES = 2
CENT = Decimal("0.01")

EntryLike = Union[TransactionEntry, dict[str, Any]]


def _coerce_entry(raw: EntryLike, index: int) -> TransactionEntry:
    if isinstance(raw, TransactionEntry):
        fields = {
            "account_id": raw.account_id,
            "amount": raw.amount,
            "type": raw.type,
            "description": raw.description,
        }
    else:
        fields = dict(raw)

    try:
        entry_type = EntryType(fields["type"])
        amount = Decimal(str(fields["amount"]))
        account_id = int(fields["account_id"])
    except (KeyError, ValueError, TypeError, InvalidOperation) as e:
        raise ValidationError(f"Entry {index + 1} is malformed: {e}", rule="entry_shape")
    if not amount.is_finite():
        raise ValidationError(f"Entry {index + 1} has a non-finite amount", rule="entry_shape")
    # Amounts are stored to the cent; finer values would be rounded away.
    try:
        cents = amount.quantize(CENT)
    except InvalidOperation:
        raise ValidationError(f"Entry {index + 1} amount is out of range", rule="entry_shape")
    if cents != amount:
        raise ValidationError(
            f"Entry {index + 1} amount {amount} has more than two decimal places",
            rule="entry_shape",
        )
    amount = cents

    description = fields.get("description")
    if description is not None:
        description = description.strip() or None

    return TransactionEntry(
        account_id=account_id,
        amount=amount,
        type=entry_type,
        description=description,
    )


def validate_entries(entries: Iterable[EntryLike]) -> tuple[TransactionEntry, ...]:
    """Check the double-entry rules on a set of entries.

    Raises:
        ValidationError: With ``rule`` set to ``min_entries``,
            ``positive_amount``, ``balanced`` or ``entry_shape``
    """
    coerced = tuple(_coerce_entry(raw, i) for i, raw in enumerate(entries))

    if len(coerced) < MIN_ENTRIES:
        raise ValidationError(
            "A transaction needs at least one debit and one credit entry "
            f"(got {len(coerced)} entr{'y' if len(coerced) == 1 else 'ies'})",
            rule="min_entries",
        )

    for i, entry in enumerate(coerced):
        if entry.amount <= 0:
            raise ValidationError(
                f"Entry {i + 1} amount must be greater than zero (got {entry.amount})",
                rule="positive_amount",
            )

    debits = sum_by_type(coerced, EntryType.DEBIT)
    credits = sum_by_type(coerced, EntryType.CREDIT)
    if abs(debits - credits) >= BALANCE_EPSILON:
        raise ValidationError(
            f"Debits ({debits:,.2f}) must equal credits ({credits:,.2f})",
            rule="balanced",
        )

    return coerced


def validate_transaction(
    description: str, date: datetime, entries: Iterable[EntryLike]
) -> TransactionDraft:
    """Validate a proposed transaction and return a draft for persistence.

    Args:
        description: Narration
        date: Transaction instant; aware values are converted to naive UTC
        entries: TransactionEntry objects or dicts with account_id, amount,
            type and optional description

    Returns:
        TransactionDraft

    Raises:
        ValidationError: If any double-entry rule fails
    """
    validated = validate_entries(entries)
    return TransactionDraft(
        description=(description or "").strip(),
        date=widen_start(date),
        entries=validated,
    )
