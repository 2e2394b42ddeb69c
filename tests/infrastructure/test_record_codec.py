"""Tests for storage row encoding."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from src.domain.models import Category, Loan, Transaction
from src.infrastructure.record_codec import record_from_row, record_to_row


def test_record_to_row_encodes_decimals_and_timestamps() -> None:
    transaction = Transaction(
        id="tx-1",
        kind="expense",
        amount=Decimal("12.50"),
        category_name="Housing",
        description="Rent",
        date=datetime(2024, 3, 1, 8, 30, tzinfo=timezone.utc),
        revenue_stream="Salary",
    )

    row = record_to_row(transaction)

    assert row == {
        "id": "tx-1",
        "kind": "expense",
        "amount": "12.50",
        "category_name": "Housing",
        "description": "Rent",
        "date": "2024-03-01T08:30:00+00:00",
        "revenue_stream": "Salary",
    }


def test_record_from_row_decodes_loan_fields() -> None:
    """Strings become Decimal, int and aware datetime; blanks become None."""
    row = {
        "id": "loan-1",
        "direction": "borrowed",
        "name": "Car",
        "principal_amount": "1000",
        "current_balance": 921.15,
        "interest_rate": "12",
        "term_months": "12",
        "monthly_payment": "88.8487886783417",
        "start_date": "2024-01-15T00:00:00",
        "next_payment_date": "2024-02-15T00:00:00+02:00",
        "revenue_stream_allocation": "",
        "category_name": None,
        "legacy_field": "ignored",
    }

    loan = record_from_row(Loan, row)

    assert loan.principal_amount == Decimal("1000")
    assert loan.current_balance == Decimal("921.15")
    assert loan.term_months == 12
    assert loan.start_date == datetime(2024, 1, 15, tzinfo=timezone.utc)
    assert loan.next_payment_date.utcoffset() == timedelta(hours=2)
    assert loan.revenue_stream_allocation is None
    assert loan.category_name == ""
    assert loan.description == ""


def test_record_from_row_requires_mandatory_fields() -> None:
    with pytest.raises(KeyError):
        record_from_row(Category, {"id": "1", "name": "Salary"})


@pytest.mark.parametrize("amount", ["abc", "NaN", "", None])
def test_record_from_row_rejects_bad_amounts(amount) -> None:
    row = {
        "id": "tx-1",
        "kind": "income",
        "amount": amount,
        "category_name": "Salary",
        "description": "",
        "date": "2024-03-01T00:00:00+00:00",
    }

    with pytest.raises(ValueError):
        record_from_row(Transaction, row)
