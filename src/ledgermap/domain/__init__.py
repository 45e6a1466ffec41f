"""Domain layer for ledgermap application.

Services live in their own modules (``ledgermap.domain.ingestion``,
``ledgermap.domain.upload_record``, ``ledgermap.domain.query``) and are
imported from there; the database layer depends on the entities here.
"""

from ledgermap.domain import entities, errors

__all__ = [
    "entities",
    "errors",
]
