"""Shared pytest fixtures for ledgermap tests."""

import tempfile
import os
import pytest

from ledgermap.database.factories import create_sqlite_database
from ledgermap.domain.ingestion import IngestionService
from ledgermap.domain.query import TransactionQueryService
from ledgermap.domain.upload_record import UploadRecordService

DEFAULT_MAPPING = {
    "date": "Date",
    "amount": "Amount",
    "vendor": "Vendor",
    "description": "Description",
}


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests that open their own connection
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def default_mapping():
    """Mapping used by the sample rows."""
    return dict(DEFAULT_MAPPING)


@pytest.fixture
def count_rows(temp_db):
    """Return a function counting persisted upload records or transactions."""

    def _count(model) -> int:
        session = temp_db._get_session()
        session.expire_all()
        return session.query(model).count()

    return _count


@pytest.fixture
def user_id(temp_db):
    """The acting user."""
    return temp_db.create_user("Alice")


@pytest.fixture
def other_user_id(temp_db):
    """A second user whose data must stay invisible to the first."""
    return temp_db.create_user("Bob")


@pytest.fixture
def account_id(temp_db, user_id):
    """An account owned by the acting user."""
    return temp_db.create_account(
        "Primary Checking",
        [user_id],
        institution="Test Bank",
        account_number="000111",
        routing_number="021000021",
    )


@pytest.fixture
def second_account_id(temp_db, user_id):
    """Another account owned by the acting user."""
    return temp_db.create_account("Savings", [user_id])


@pytest.fixture
def other_account_id(temp_db, other_user_id):
    """An account owned only by the other user."""
    return temp_db.create_account("Bob Checking", [other_user_id])


@pytest.fixture
def ingestion_service(temp_db):
    """Create an IngestionService with a temporary database."""
    return IngestionService(temp_db)


@pytest.fixture
def upload_record_service(temp_db):
    """Create an UploadRecordService with a temporary database."""
    return UploadRecordService(temp_db)


@pytest.fixture
def query_service(temp_db):
    """Create a TransactionQueryService with a temporary database."""
    return TransactionQueryService(temp_db)


@pytest.fixture
def sample_rows():
    """Three rows as a bank export would produce them."""
    return [
        {
            "Date": "2025-01-15",
            "Amount": "-42.10",
            "Vendor": "Whole Foods",
            "Category": "Groceries",
            "Description": "Weekly shop",
            "Status": "completed",
        },
        {
            "Date": "2025-01-16",
            "Amount": "-12.00",
            "Vendor": "Uber",
            "Category": "Transport",
            "Description": "Ride home",
            "Status": "Pending",
        },
        {
            "Date": "2025-01-17",
            "Amount": "2500.00",
            "Vendor": "Employer Inc",
            "Category": "Income",
            "Description": "Salary",
            "Status": "cleared",
        },
    ]


@pytest.fixture
def sample_upload(ingestion_service, account_id, user_id, sample_rows):
    """Upload the sample rows with the default mapping."""
    return ingestion_service.upload(
        account_id=account_id, mapping=dict(DEFAULT_MAPPING), rows=sample_rows, user_id=user_id
    )


@pytest.fixture
def seed_transactions(ingestion_service, user_id):
    """Return a function that uploads simple rows into an account.

    Each row is given as (date, amount) or (date, amount, description).
    """

    def _seed(account_id, rows, owner_id=None):
        raw_rows = []
        for row in rows:
            date_value, amount = row[0], row[1]
            description = row[2] if len(row) > 2 else ""
            raw_rows.append(
                {"Date": date_value, "Amount": amount, "Vendor": "", "Description": description}
            )
        return ingestion_service.upload(
            account_id=account_id,
            mapping=dict(DEFAULT_MAPPING),
            rows=raw_rows,
            user_id=owner_id or user_id,
        )

    return _seed


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()

