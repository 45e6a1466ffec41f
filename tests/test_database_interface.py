"""Tests for Database interface returning domain models."""

from datetime import datetime
from decimal import Decimal

import pytest

from ledgermap.domain import entities
from ledgermap.domain.entities import DerivedFields, DerivedLabels, NewTransaction, TransactionFilter
from ledgermap.domain.errors import NotFoundError


def _new_transaction(amount: str, description: str = "") -> NewTransaction:
    raw = {"Date": "2025-01-15", "Amount": amount, "Description": description}
    return NewTransaction(
        raw=raw,
        fields=DerivedFields(
            amount=Decimal(amount),
            date=datetime(2025, 1, 15),
            vendor_label=None,
            category_label=None,
            description=description or None,
            status=entities.TransactionStatus.COMPLETED,
        ),
    )


class TestSeeding:
    """Users, accounts and categories are seeded directly."""

    def test_get_user_returns_domain_model(self, temp_db):
        user_id = temp_db.create_user("Carol")

        user = temp_db.get_user(user_id)

        assert isinstance(user, entities.User)
        assert user.name == "Carol"
        assert isinstance(user.created_at, datetime)

    def test_get_missing_user(self, temp_db):
        assert temp_db.get_user("missing") is None

    def test_owned_account_returns_domain_model(self, temp_db, account_id, user_id):
        account = temp_db.get_owned_account(account_id, user_id)

        assert isinstance(account, entities.Account)
        assert account.name == "Primary Checking"
        assert account.institution == "Test Bank"
        assert account.account_number == "000111"
        assert account.routing_number == "021000021"

    def test_account_hidden_from_non_owner(self, temp_db, account_id, other_user_id):
        assert temp_db.get_owned_account(account_id, other_user_id) is None

    def test_add_account_owner(self, temp_db, account_id, other_user_id):
        temp_db.add_account_owner(account_id, other_user_id)
        temp_db.add_account_owner(account_id, other_user_id)

        assert temp_db.get_owned_account(account_id, other_user_id) is not None

    def test_add_owner_to_missing_account(self, temp_db, user_id):
        with pytest.raises(NotFoundError):
            temp_db.add_account_owner("missing", user_id)

    def test_category_returns_domain_model(self, temp_db, user_id):
        category_id = temp_db.create_category("Dining", description="Eating out", user_id=user_id)

        category = temp_db.get_category(category_id)

        assert isinstance(category, entities.Category)
        assert category.name == "Dining"
        assert category.description == "Eating out"
        assert category.user_id == user_id

    def test_assign_category_to_missing_transaction(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.assign_category("missing", None)


class TestUploads:
    def test_create_upload_persists_record_and_transactions(self, temp_db, user_id, account_id):
        record_id = temp_db.create_upload(
            user_id=user_id,
            account_id=account_id,
            mapping={"amount": "Amount"},
            available_columns=["Date", "Amount", "Description"],
            transactions=[_new_transaction("10.50", "Coffee"), _new_transaction("-3.00")],
        )

        record = temp_db.get_owned_upload_record(record_id, user_id)
        transactions = temp_db.list_upload_transactions(record_id)

        assert isinstance(record, entities.UploadRecord)
        assert record.mapping == {"amount": "Amount"}
        assert record.available_columns == ["Date", "Amount", "Description"]
        assert len(transactions) == 2
        assert all(isinstance(txn, entities.Transaction) for txn in transactions)
        assert {txn.amount for txn in transactions} == {Decimal("10.50"), Decimal("-3.00")}
        assert all(txn.account_id == account_id for txn in transactions)

    def test_raw_row_round_trips(self, temp_db, user_id, account_id):
        record_id = temp_db.create_upload(
            user_id, account_id, {}, ["Date", "Amount", "Description"], [_new_transaction("1.00", "x")]
        )

        [txn] = temp_db.list_upload_transactions(record_id)

        assert txn.raw == {"Date": "2025-01-15", "Amount": "1.00", "Description": "x"}

    def test_upload_record_hidden_from_other_user(self, temp_db, user_id, other_user_id, account_id):
        record_id = temp_db.create_upload(user_id, account_id, {}, ["Date"], [])

        assert temp_db.get_owned_upload_record(record_id, other_user_id) is None

    def test_upload_stats(self, temp_db, user_id, account_id):
        record_id = temp_db.create_upload(
            user_id, account_id, {}, ["Amount"], [_new_transaction("1.00"), _new_transaction("2.00")]
        )

        assert temp_db.get_upload_stats(record_id) == (2, "Primary Checking")

    def test_update_upload_mapping_missing_record(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.update_upload_mapping("missing", {}, {})

    def test_update_upload_mapping_rewrites_labels(self, temp_db, user_id, account_id):
        record_id = temp_db.create_upload(user_id, account_id, {}, ["Amount"], [_new_transaction("1.00")])
        [txn] = temp_db.list_upload_transactions(record_id)

        record = temp_db.update_upload_mapping(
            record_id,
            {"vendor": "Description"},
            {txn.id: DerivedLabels(vendor_label="Cafe", category_label=None, description=None)},
        )

        [updated] = temp_db.list_upload_transactions(record_id)
        assert record.mapping == {"vendor": "Description"}
        assert updated.vendor_label == "Cafe"
        assert updated.amount == Decimal("1.00")

    def test_delete_upload_returns_count(self, temp_db, user_id, account_id):
        record_id = temp_db.create_upload(
            user_id, account_id, {}, ["Amount"], [_new_transaction("1.00"), _new_transaction("2.00")]
        )

        assert temp_db.delete_upload(record_id) == 2
        assert temp_db.get_owned_upload_record(record_id, user_id) is None
        assert temp_db.list_upload_transactions(record_id) == []


def test_query_transactions_returns_views(temp_db, user_id, account_id):
    temp_db.create_upload(user_id, account_id, {}, ["Amount"], [_new_transaction("7.25", "Lunch")])

    views, total = temp_db.query_transactions(
        user_id=user_id, transaction_filter=TransactionFilter(), offset=0, limit=10
    )

    assert total == 1
    [view] = views
    assert isinstance(view, entities.TransactionView)
    assert view.amount == Decimal("7.25")
    assert view.account_name == "Primary Checking"
    assert view.description == "Lunch"
