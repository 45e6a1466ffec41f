"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so services never handle ORM rows.
"""

from decimal import Decimal
from typing import Optional
from datetime import datetime

from ledgermap.domain import entities as domain
from ledgermap.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    Transaction as ORMTransaction,
    UploadRecord as ORMUploadRecord,
    User as ORMUser,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(id=orm_user.id, name=orm_user.name, created_at=orm_user.created_at)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        institution=orm_account.institution,
        account_number=orm_account.account_number,
        routing_number=orm_account.routing_number,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        description=orm_category.description,
        user_id=orm_category.user_id,
    )


def upload_record_to_domain(orm_record: ORMUploadRecord) -> domain.UploadRecord:
    """Convert SQLAlchemy UploadRecord model to domain UploadRecord entity."""
    return domain.UploadRecord(
        id=orm_record.id,
        user_id=orm_record.user_id,
        mapping=dict(orm_record.mapping),
        available_columns=list(orm_record.available_columns),
        created_at=orm_record.created_at,
        updated_at=orm_record.updated_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        upload_record_id=orm_transaction.upload_record_id,
        raw=dict(orm_transaction.raw),
        amount=Decimal(orm_transaction.amount),
        date=orm_transaction.date,
        vendor_label=orm_transaction.vendor_label,
        category_label=orm_transaction.category_label,
        description=orm_transaction.description,
        status=orm_transaction.status,
        category_id=orm_transaction.category_id,
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
    )


def transaction_to_view(
    orm_transaction: ORMTransaction,
    account_name: str,
    category_name: Optional[str],
    upload_created_at: Optional[datetime],
) -> domain.TransactionView:
    """Build a query result row from a transaction and its joined columns."""
    return domain.TransactionView(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        account_name=account_name,
        amount=Decimal(orm_transaction.amount),
        date=orm_transaction.date,
        vendor_label=orm_transaction.vendor_label,
        category_label=orm_transaction.category_label,
        description=orm_transaction.description,
        status=orm_transaction.status,
        category_id=orm_transaction.category_id,
        category_name=category_name,
        upload_record_id=orm_transaction.upload_record_id,
        upload_created_at=upload_created_at,
    )
