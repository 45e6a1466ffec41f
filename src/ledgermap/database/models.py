"""SQLAlchemy models for ledgermap database."""

import uuid
from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Numeric,
    String,
    Table,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from ledgermap.domain.entities import TransactionStatus

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


def _utc_now() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


account_owners = Table(
    "account_owners",
    Base.metadata,
    Column("account_id", String(36), ForeignKey("accounts.id"), primary_key=True),
    Column("user_id", String(36), ForeignKey("users.id"), primary_key=True),
)


class User(Base):
    """Application user. Authentication lives outside this package."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=_utc_now, nullable=False)

    accounts = relationship("Account", secondary=account_owners, back_populates="owners")
    upload_records = relationship("UploadRecord", back_populates="user")


class Account(Base):
    """Bank account model."""

    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    institution = Column(String, nullable=True)
    account_number = Column(String, unique=True, nullable=True)
    routing_number = Column(String, nullable=True)

    owners = relationship("User", secondary=account_owners, back_populates="accounts")
    transactions = relationship("Transaction", back_populates="account")


class Category(Base):
    """Structured category, referenced by transactions for filtering."""

    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=_utc_now, nullable=False)
    updated_at = Column(DateTime, default=_utc_now, onupdate=_utc_now, nullable=False)

    transactions = relationship("Transaction", back_populates="category")


class UploadRecord(Base):
    """Column mapping used for one upload, kept so it can be edited later."""

    __tablename__ = "upload_records"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    mapping = Column(JSON, nullable=False)
    available_columns = Column(JSON, nullable=False)
    created_at = Column(DateTime, default=_utc_now, nullable=False)
    updated_at = Column(DateTime, default=_utc_now, onupdate=_utc_now, nullable=False)

    user = relationship("User", back_populates="upload_records")
    transactions = relationship("Transaction", back_populates="upload_record")


class Transaction(Base):
    """Transaction model. ``raw`` is the uploaded row and is never modified."""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=_new_id)
    account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    upload_record_id = Column(
        String(36), ForeignKey("upload_records.id"), nullable=True, index=True
    )
    raw = Column(JSON, nullable=False)
    amount = Column(Numeric(20, 2), nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    vendor_label = Column(String, nullable=True)
    category_label = Column(String, nullable=True)
    description = Column(String, nullable=True)
    status = Column(
        Enum(
            TransactionStatus,
            name="transaction_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=TransactionStatus.COMPLETED,
        nullable=False,
    )
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=True)
    created_at = Column(DateTime, default=_utc_now, nullable=False)
    updated_at = Column(DateTime, default=_utc_now, onupdate=_utc_now, nullable=False)

    account = relationship("Account", back_populates="transactions")
    upload_record = relationship("UploadRecord", back_populates="transactions")
    category = relationship("Category", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
