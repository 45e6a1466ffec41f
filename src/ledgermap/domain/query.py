"""Transaction query domain service."""

import logging
from typing import Optional

from ledgermap.database.base import Database
from ledgermap.domain.entities import TransactionFilter, TransactionPage
from ledgermap.domain.errors import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 100
MAX_LIMIT = 500


class TransactionQueryService:
    """Service for paginated, filtered reads over a user's transactions."""

    def __init__(self, db: Database):
        """Initialize query service.

        Args:
            db: Database instance
        """
        self.db = db

    def query(
        self,
        user_id: str,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
        transaction_filter: Optional[TransactionFilter] = None,
    ) -> TransactionPage:
        """Return one page of the user's transactions matching a filter.

        Only transactions on accounts the user owns are considered. Results
        are ordered most recent first; ``total`` counts every match, not just
        the returned page.

        Args:
            user_id: Acting user
            page: 1-based page number
            limit: Page size, 1 to 500
            transaction_filter: Optional predicates, AND-combined

        Raises:
            ValidationError: If page or limit is out of range
        """
        if page < 1:
            raise ValidationError(f"Page must be at least 1, got {page}")
        if not 1 <= limit <= MAX_LIMIT:
            raise ValidationError(f"Limit must be between 1 and {MAX_LIMIT}, got {limit}")
        transaction_filter = transaction_filter or TransactionFilter()

        logger.debug(
            "Querying transactions for user %s page=%d limit=%d filter=%s",
            user_id,
            page,
            limit,
            transaction_filter,
        )
        transactions, total = self.db.query_transactions(
            user_id=user_id,
            transaction_filter=transaction_filter,
            offset=(page - 1) * limit,
            limit=limit,
        )
        return TransactionPage(transactions=transactions, total=total)
