"""Derivation of typed transaction fields from raw rows.

A mapping associates application attributes with the column names of the
uploaded rows. The functions here are pure: the same raw row and mapping
always produce the same fields, which is what lets a mapping be edited and
re-applied later.
"""

import logging
from typing import Iterable, Optional

from ledgermap.domain.entities import (
    DerivedFields,
    DerivedLabels,
    Mapping,
    RawRow,
    TransactionStatus,
)
from ledgermap.domain.errors import (
    MalformedDataError,
    ValidationError,
    unknown_mapping_attributes,
    unknown_mapping_columns,
)
from ledgermap.utils.amount_parser import coerce_amount
from ledgermap.utils.date_parser import parse_timestamp, utc_now

logger = logging.getLogger(__name__)

MAPPABLE_ATTRIBUTES = frozenset(
    {"date", "vendor", "category", "description", "amount", "status"}
)
LABEL_ATTRIBUTES = {
    "vendor": "vendor_label",
    "category": "category_label",
    "description": "description",
}
VALID_STATUSES = {status.value for status in TransactionStatus}


def collect_available_columns(rows: Iterable[RawRow]) -> list[str]:
    """Return the union of keys across all rows, in first-seen order."""
    seen: dict[str, None] = {}
    for row in rows:
        for key in row:
            seen.setdefault(key, None)
    return list(seen)


def validate_mapping(mapping: Mapping, available_columns: Iterable[str]) -> None:
    """Check a mapping against the known attribute names and columns.

    Empty column names count as "unset" and are not checked.

    Raises:
        ValidationError: If an attribute is unknown or a mapped column is not
            among ``available_columns``
    """
    bad_attributes = sorted(set(mapping) - MAPPABLE_ATTRIBUTES)
    if bad_attributes:
        raise ValidationError(unknown_mapping_attributes(bad_attributes, MAPPABLE_ATTRIBUTES))

    columns = set(available_columns)
    invalid = [column for column in mapping.values() if column and column not in columns]
    if invalid:
        raise ValidationError(unknown_mapping_columns(invalid), invalid_columns=invalid)


def _mapped_column(mapping: Mapping, attribute: str) -> Optional[str]:
    column = mapping.get(attribute)
    return column or None


def _label(raw: RawRow, mapping: Mapping, attribute: str) -> Optional[str]:
    column = _mapped_column(mapping, attribute)
    if column is None:
        return None
    value = raw.get(column)
    if value is None:
        return None
    return _text(value)


def _text(value) -> str:
    """Render a raw cell as label text; whole floats drop their ``.0``."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _status(raw: RawRow, mapping: Mapping) -> TransactionStatus:
    column = _mapped_column(mapping, "status")
    if column is None:
        return TransactionStatus.COMPLETED
    value = raw.get(column)
    status = str(value).strip().lower() if value is not None else ""
    if status not in VALID_STATUSES:
        logger.debug("Unrecognised status %r, defaulting to completed", value)
        return TransactionStatus.COMPLETED
    return TransactionStatus(status)


def derive_labels(raw: RawRow, mapping: Mapping) -> DerivedLabels:
    """Derive only the free-text label fields (vendor, category, description)."""
    return DerivedLabels(
        **{field: _label(raw, mapping, attribute) for attribute, field in LABEL_ATTRIBUTES.items()}
    )


def derive(raw: RawRow, mapping: Mapping) -> DerivedFields:
    """Derive every typed field of a transaction from its raw row.

    Args:
        raw: The original uploaded row
        mapping: Attribute to column-name mapping

    Returns:
        DerivedFields for the row

    Raises:
        MalformedDataError: If a mapped amount or date cannot be parsed
    """
    amount_column = _mapped_column(mapping, "amount")
    try:
        amount = coerce_amount(raw.get(amount_column) if amount_column else 0)
    except ValueError as e:
        raise MalformedDataError(f"invalid amount: {e}") from e

    date_column = _mapped_column(mapping, "date")
    if date_column is not None:
        try:
            when = parse_timestamp(raw.get(date_column))
        except ValueError as e:
            raise MalformedDataError(f"invalid date: {e}") from e
    else:
        when = utc_now()

    labels = derive_labels(raw, mapping)
    return DerivedFields(
        amount=amount,
        date=when,
        vendor_label=labels.vendor_label,
        category_label=labels.category_label,
        description=labels.description,
        status=_status(raw, mapping),
    )
