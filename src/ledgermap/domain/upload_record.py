"""Upload record domain service: view, remap and delete uploads."""

import logging

from ledgermap.database.base import Database
from ledgermap.domain.derivation import derive_labels, validate_mapping
from ledgermap.domain.entities import (
    DeleteResult,
    Mapping,
    UploadRecord,
    UploadRecordView,
)
from ledgermap.domain.errors import NotFoundError, upload_record_not_found

logger = logging.getLogger(__name__)

UNKNOWN_ACCOUNT_NAME = "Unknown"


class UploadRecordService:
    """Service for managing the mapping stored with each upload."""

    def __init__(self, db: Database):
        """Initialize upload record service.

        Args:
            db: Database instance
        """
        self.db = db

    def get(self, upload_record_id: str, user_id: str) -> UploadRecordView:
        """Fetch an upload record owned by the user.

        Raises:
            NotFoundError: If the record does not exist or belongs to someone else
        """
        record = self._get_owned(upload_record_id, user_id)
        return self._to_view(record)

    def update(self, upload_record_id: str, user_id: str, mapping: Mapping) -> UploadRecordView:
        """Replace the mapping and re-derive labels of every linked transaction.

        The new mapping is validated against the columns observed when the
        rows were uploaded. Vendor, category and description are recomputed
        from each transaction's raw row; a key dropped from the mapping clears
        the matching label. Amount, date and status are left as ingested.

        Args:
            upload_record_id: Upload record ID
            user_id: Acting user
            mapping: The new attribute to column-name mapping

        Returns:
            The updated record view

        Raises:
            NotFoundError: If the record does not exist or belongs to someone else
            ValidationError: If the mapping names unknown attributes or columns
        """
        record = self._get_owned(upload_record_id, user_id)
        validate_mapping(mapping, record.available_columns)

        labels = {
            txn.id: derive_labels(txn.raw, mapping)
            for txn in self.db.list_upload_transactions(record.id)
        }
        updated = self.db.update_upload_mapping(record.id, mapping, labels)
        logger.info(
            "Remapped upload record %s, re-derived %d transactions", record.id, len(labels)
        )
        return self._to_view(updated)

    def delete(self, upload_record_id: str, user_id: str) -> DeleteResult:
        """Delete an upload record together with all of its transactions.

        Raises:
            NotFoundError: If the record does not exist or belongs to someone else
        """
        record = self._get_owned(upload_record_id, user_id)
        deleted = self.db.delete_upload(record.id)
        logger.info("Deleted upload record %s and %d transactions", record.id, deleted)
        return DeleteResult(deleted_transaction_count=deleted)

    def _get_owned(self, upload_record_id: str, user_id: str) -> UploadRecord:
        record = self.db.get_owned_upload_record(upload_record_id, user_id)
        if record is None:
            logger.warning(
                "Upload record %s not found for user %s", upload_record_id, user_id
            )
            raise NotFoundError(upload_record_not_found(upload_record_id))
        return record

    def _to_view(self, record: UploadRecord) -> UploadRecordView:
        count, account_name = self.db.get_upload_stats(record.id)
        return UploadRecordView(
            id=record.id,
            user_id=record.user_id,
            mapping=record.mapping,
            available_columns=record.available_columns,
            created_at=record.created_at,
            updated_at=record.updated_at,
            transaction_count=count,
            account_name=account_name or UNKNOWN_ACCOUNT_NAME,
        )
