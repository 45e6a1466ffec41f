"""Database layer for ledgermap application."""

from ledgermap.database.base import Database
from ledgermap.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
