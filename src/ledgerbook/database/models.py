"""SQLAlchemy models for ledgerbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

# Restored entities keep their original ids, so SQLite must never reuse the
# ids of deleted rows.
NO_ID_REUSE = {"sqlite_autoincrement": True}


def utc_now() -> datetime:
    """Naive UTC timestamp, as stored in the database."""
    return datetime.now(UTC).replace(tzinfo=None)


class Book(Base):
    """Book (ledger namespace) model."""

    __tablename__ = "books"
    __table_args__ = NO_ID_REUSE

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)


class Category(Base):
    """Category model."""

    __tablename__ = "categories"
    __table_args__ = NO_ID_REUSE

    id = Column(Integer, primary_key=True)
    book_id = Column(Integer, ForeignKey("books.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    normal_balance_side = Column(String, nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    # Relationships
    accounts = relationship("Account", back_populates="category")


class Account(Base):
    """Ledger account model."""

    __tablename__ = "accounts"
    __table_args__ = NO_ID_REUSE

    id = Column(Integer, primary_key=True)
    book_id = Column(Integer, ForeignKey("books.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    name = Column(String, nullable=False)
    account_type = Column(String, nullable=True)
    opening_balance = Column(Numeric(14, 2), nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    # Relationships
    category = relationship("Category", back_populates="accounts")


class Transaction(Base):
    """Transaction header model."""

    __tablename__ = "transactions"
    __table_args__ = NO_ID_REUSE

    id = Column(Integer, primary_key=True)
    book_id = Column(Integer, ForeignKey("books.id"), nullable=False, index=True)
    date = Column(DateTime, nullable=False)
    description = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=utc_now, nullable=False)

    # Relationships
    entries = relationship(
        "TransactionEntry",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="TransactionEntry.position",
    )
    highlight = relationship(
        "TransactionHighlight",
        back_populates="transaction",
        cascade="all, delete-orphan",
        uselist=False,
    )


class TransactionEntry(Base):
    """Transaction entry (leg) model."""

    __tablename__ = "transaction_entries"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    amount = Column(Numeric(14, 2), nullable=False)
    entry_type = Column(String, nullable=False)
    description = Column(String, nullable=True)

    # Relationships
    transaction = relationship("Transaction", back_populates="entries")


class TransactionHighlight(Base):
    """UI highlight annotation, kept apart from the validated transaction."""

    __tablename__ = "transaction_highlights"

    transaction_id = Column(Integer, ForeignKey("transactions.id"), primary_key=True)
    color = Column(String, nullable=False)

    # Relationships
    transaction = relationship("Transaction", back_populates="highlight")


class RecycledItem(Base):
    """Soft-deleted entity snapshot."""

    __tablename__ = "recycled_items"

    id = Column(Integer, primary_key=True)
    book_id = Column(Integer, nullable=False, index=True)
    kind = Column(String, nullable=False)
    original_id = Column(Integer, nullable=False)
    payload = Column(JSON, nullable=False)
    deleted_at = Column(DateTime, default=utc_now, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
