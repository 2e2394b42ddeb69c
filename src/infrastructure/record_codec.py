"""Conversion between domain records and plain storage rows.

Amounts are stored as decimal strings and timestamps as ISO-8601 strings
so that both the JSON store and the SQL store keep full precision.
"""

from dataclasses import MISSING, fields
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, TypeVar

from src.domain.models import (
    Category,
    Loan,
    LoanPayment,
    Transaction,
    TransactionTemplate,
)
from src.domain.services.normalization import normalize_timestamp
from src.utils.decimal_utils import coerce_decimal

RecordT = TypeVar(
    "RecordT",
    Category,
    Transaction,
    TransactionTemplate,
    Loan,
    LoanPayment,
)

STORAGE_KEYS: dict[str, type] = {
    "financial-transactions": Transaction,
    "financial-templates": TransactionTemplate,
    "financial-categories": Category,
    "financial-loans": Loan,
    "financial-loan-payments": LoanPayment,
}


def record_to_row(record) -> dict[str, Any]:
    """Return the storage row of a record.

    Args:
        record: Any stored domain record.

    Returns:
        dict[str, Any]: Row keyed by field name with encoded values.
    """
    row: dict[str, Any] = {}
    for field in fields(record):
        value = getattr(record, field.name)
        if isinstance(value, Decimal):
            value = str(value)
        elif isinstance(value, datetime):
            value = value.isoformat()
        row[field.name] = value
    return row


def record_from_row(
    record_type: type[RecordT],
    row: dict[str, Any],
) -> RecordT:
    """Build a record from a storage row.

    Args:
        record_type: Domain record class to build.
        row: Row keyed by field name; extra keys are ignored.

    Returns:
        RecordT: Decoded record.

    Raises:
        KeyError: If a required field is missing.
        ValueError: If a value cannot be decoded.
    """
    values: dict[str, Any] = {}
    for field in fields(record_type):
        if field.name not in row:
            if field.default is MISSING and field.default_factory is MISSING:
                raise KeyError(
                    f"{record_type.__name__} row is missing '{field.name}'"
                )
            continue
        values[field.name] = _decode(field.type, row[field.name])
    return record_type(**values)


def _decode(field_type, value):
    if field_type is Decimal:
        if value is None or value == "":
            raise ValueError("Missing decimal value")
        try:
            decoded = coerce_decimal(value)
        except InvalidOperation as exc:
            raise ValueError(f"Invalid decimal value: {value!r}") from exc
        if not decoded.is_finite():
            raise ValueError(f"Non-finite decimal value: {value!r}")
        return decoded
    if field_type is datetime:
        if isinstance(value, datetime):
            return normalize_timestamp(value)
        return normalize_timestamp(datetime.fromisoformat(str(value)))
    if field_type is int:
        return int(value)
    if field_type is str:
        return "" if value is None else str(value)
    if value == "":
        return None
    return value


__all__ = ["STORAGE_KEYS", "record_to_row", "record_from_row"]
