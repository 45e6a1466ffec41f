"""Shared domain error messages and error types."""

from typing import Iterable


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. ``status`` is the HTTP-style
    code a request boundary should answer with.
    """

    status = 500


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    status = 400

    def __init__(self, message: str, invalid_columns: Iterable[str] = ()):
        super().__init__(message)
        self.invalid_columns = list(invalid_columns)


class NotFoundError(DomainError):
    """Requested entity does not exist or is not owned by the caller."""

    status = 404


class MalformedDataError(DomainError):
    """A raw row value could not be converted into a typed field."""

    status = 422


def account_not_found(account_id: str) -> str:
    """Return message for a missing or foreign account."""
    return f"Account {account_id} not found"


def upload_record_not_found(upload_record_id: str) -> str:
    """Return message for a missing or foreign upload record."""
    return f"Upload record {upload_record_id} not found"


def unknown_mapping_columns(columns: list[str]) -> str:
    """Return message for mapped columns absent from the uploaded data."""
    return f"Mapping references unknown columns: {', '.join(columns)}"


def unknown_mapping_attributes(attributes: list[str], valid: Iterable[str]) -> str:
    """Return message for mapping keys that are not application attributes."""
    return (
        f"Invalid mapping attribute(s) {', '.join(repr(a) for a in attributes)}. "
        f"Must be one of: {', '.join(sorted(valid))}"
    )


def row_error(row_num: int, error: Exception) -> str:
    """Prefix an error message with the 1-based row it came from."""
    return f"Row {row_num}: {error}"
