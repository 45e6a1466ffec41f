"""Domain model entities for ledgermap.

These are pure data classes representing business concepts, independent of
database schema. Services receive and return these; the ORM models never
leave the database layer.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

# A single raw cell as uploaded: string, number or null.
RawValue = Union[str, int, float, None]
RawRow = dict[str, RawValue]
Mapping = dict[str, str]


class TransactionStatus(str, Enum):
    """Lifecycle states a transaction can be in."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class User:
    """User domain entity."""

    id: str
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Bank account domain entity."""

    id: str
    name: str
    institution: Optional[str]
    account_number: Optional[str]
    routing_number: Optional[str]


@dataclass(frozen=True)
class Category:
    """Category domain entity."""

    id: str
    name: str
    description: Optional[str]
    user_id: Optional[str]


@dataclass(frozen=True)
class UploadRecord:
    """Mapping configuration stored for one ingestion call."""

    id: str
    user_id: str
    mapping: Mapping
    available_columns: list[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: str
    account_id: str
    upload_record_id: Optional[str]
    raw: RawRow
    amount: Decimal
    date: datetime
    vendor_label: Optional[str]
    category_label: Optional[str]
    description: Optional[str]
    status: TransactionStatus
    category_id: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class DerivedFields:
    """Typed fields computed from a raw row under a mapping."""

    amount: Decimal
    date: datetime
    vendor_label: Optional[str]
    category_label: Optional[str]
    description: Optional[str]
    status: TransactionStatus


@dataclass(frozen=True)
class DerivedLabels:
    """The label subset of derived fields that a remap rewrites."""

    vendor_label: Optional[str]
    category_label: Optional[str]
    description: Optional[str]


@dataclass(frozen=True)
class NewTransaction:
    """A derived transaction waiting to be inserted."""

    raw: RawRow
    fields: DerivedFields


@dataclass(frozen=True)
class UploadResult:
    """Outcome of an ingestion call."""

    upload_record_id: str
    transaction_count: int


@dataclass(frozen=True)
class UploadRecordView:
    """Upload record enriched with linked-transaction metadata."""

    id: str
    user_id: str
    mapping: Mapping
    available_columns: list[str]
    created_at: datetime
    updated_at: datetime
    transaction_count: int
    account_name: str


@dataclass(frozen=True)
class DeleteResult:
    """Outcome of deleting an upload record."""

    deleted_transaction_count: int


@dataclass(frozen=True)
class TransactionFilter:
    """Optional predicates for a transaction query, AND-combined.

    ``category_ids`` may contain ``None`` meaning "no category".
    """

    date_from: Optional[date] = None
    date_to: Optional[date] = None
    account_ids: tuple[str, ...] = ()
    vendors: tuple[str, ...] = ()
    category_ids: tuple[Optional[str], ...] = ()
    amount_min: Optional[Decimal] = None
    amount_max: Optional[Decimal] = None


@dataclass(frozen=True)
class TransactionView:
    """Transaction row as returned by queries, with joined names."""

    id: str
    account_id: str
    account_name: str
    amount: Decimal
    date: datetime
    vendor_label: Optional[str]
    category_label: Optional[str]
    description: Optional[str]
    status: TransactionStatus
    category_id: Optional[str]
    category_name: Optional[str]
    upload_record_id: Optional[str]
    upload_created_at: Optional[datetime]


@dataclass(frozen=True)
class TransactionPage:
    """One page of query results plus the unpaginated match count."""

    transactions: list[TransactionView] = field(default_factory=list)
    total: int = 0

