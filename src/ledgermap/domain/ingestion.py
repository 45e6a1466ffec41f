"""Ingestion of uploaded rows into transactions."""

import logging

from ledgermap.database.base import Database
from ledgermap.domain.derivation import collect_available_columns, derive, validate_mapping
from ledgermap.domain.entities import Mapping, NewTransaction, RawRow, UploadResult
from ledgermap.domain.errors import (
    MalformedDataError,
    NotFoundError,
    ValidationError,
    account_not_found,
    row_error,
)

logger = logging.getLogger(__name__)


class IngestionService:
    """Service for uploading a batch of raw rows against an account."""

    def __init__(self, db: Database):
        """Initialize ingestion service.

        Args:
            db: Database instance
        """
        self.db = db

    def upload(
        self, account_id: str, mapping: Mapping, rows: list[RawRow], user_id: str
    ) -> UploadResult:
        """Ingest rows under a mapping, creating one upload record.

        The upload record and every transaction are written together; if any
        row fails to derive or the insert fails, nothing is persisted.

        Args:
            account_id: Account the rows belong to; must be owned by the user
            mapping: Attribute to column-name mapping
            rows: Raw rows, one dict per transaction
            user_id: Acting user

        Returns:
            UploadResult with the new record ID and number of rows ingested

        Raises:
            NotFoundError: If the account does not exist or is not the user's
            ValidationError: If there are no rows or the mapping is invalid
            MalformedDataError: If a mapped amount or date cannot be parsed
        """
        account = self.db.get_owned_account(account_id, user_id)
        if account is None:
            logger.warning("Upload rejected: account %s not owned by user %s", account_id, user_id)
            raise NotFoundError(account_not_found(account_id))

        if not rows:
            raise ValidationError("At least one transaction row is required")

        available_columns = collect_available_columns(rows)
        validate_mapping(mapping, available_columns)

        transactions = []
        for row_num, raw in enumerate(rows, start=1):
            try:
                fields = derive(raw, mapping)
            except MalformedDataError as e:
                raise MalformedDataError(row_error(row_num, e)) from e
            transactions.append(NewTransaction(raw=dict(raw), fields=fields))

        upload_record_id = self.db.create_upload(
            user_id=user_id,
            account_id=account.id,
            mapping=mapping,
            available_columns=available_columns,
            transactions=transactions,
        )
        logger.info(
            "Ingested %d transactions into account %s (upload record %s)",
            len(transactions),
            account.id,
            upload_record_id,
        )
        return UploadResult(upload_record_id=upload_record_id, transaction_count=len(transactions))

