"""Validation gate for transaction and loan forms.

Both predicates only check that required fields are present and that
numeric fields parse. Amounts and rates are not range checked.
"""

from decimal import Decimal

from src.domain.constants import BORROWED, EXPENSE
from src.domain.services.normalization import normalize_kind, normalize_name
from src.utils.decimal_utils import parse_decimal


def parse_term_months(text: str | None) -> int | None:
    """Parse a loan term into a positive number of months.

    Args:
        text: Raw term text, e.g. ``"12"``.

    Returns:
        int | None: Term in months, or None when missing, fractional or
        not strictly positive.
    """
    value = parse_decimal(text)
    if value is None or value != value.to_integral_value():
        return None
    months = int(value)
    return months if months > 0 else None


def validate_transaction(
    kind: str,
    amount_text: str | None,
    category_name: str | None,
    revenue_stream: str | None = None,
) -> bool:
    """Return True when a transaction form can be turned into a record.

    Args:
        kind: ``income`` or ``expense``.
        amount_text: Raw amount entered by the user.
        category_name: Selected category name.
        revenue_stream: Income stream funding an expense.

    Returns:
        bool: False when the amount is missing or unparseable, the category
        is blank, or an expense has no revenue stream.
    """
    if parse_decimal(amount_text) is None:
        return False
    if normalize_name(category_name) is None:
        return False
    if (
        normalize_kind(kind) == EXPENSE
        and normalize_name(revenue_stream) is None
    ):
        return False
    return True


def validate_loan(
    direction: str,
    name: str | None,
    principal_text: str | None,
    interest_rate_text: str | None,
    term_months_text: str | None,
    revenue_stream: str | None = None,
) -> bool:
    """Return True when a loan form can be turned into a record.

    Args:
        direction: ``borrowed`` or ``lent``.
        name: Loan display name.
        principal_text: Raw principal amount.
        interest_rate_text: Raw annual interest rate in percent.
        term_months_text: Raw term in months.
        revenue_stream: Income stream paying a borrowed loan.

    Returns:
        bool: False when a required field is blank or unparseable, the term
        is not a positive whole number, or a borrowed loan has no stream.
    """
    if normalize_name(name) is None:
        return False
    if parse_decimal(principal_text) is None:
        return False
    if parse_decimal(interest_rate_text) is None:
        return False
    if parse_term_months(term_months_text) is None:
        return False
    if (
        normalize_kind(direction) == BORROWED
        and normalize_name(revenue_stream) is None
    ):
        return False
    return True


def parse_amount(text: str | None) -> Decimal:
    """Parse an amount that already passed the validation gate.

    Raises:
        ValueError: If the text does not hold a finite number.
    """
    value = parse_decimal(text)
    if value is None:
        raise ValueError(f"Not a valid amount: {text!r}")
    return value


__all__ = [
    "validate_transaction",
    "validate_loan",
    "parse_term_months",
    "parse_amount",
]
