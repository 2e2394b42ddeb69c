"""Domain services package."""

from .amortization import (
    add_months,
    advance_payment_date,
    apply_loan_payment,
    compute_monthly_payment,
    first_payment_date,
    monthly_rate,
    split_payment,
)
from .finance import (
    available_revenue_streams,
    compute_financial_summary,
    compute_loan_totals,
    compute_revenue_streams,
    compute_totals,
)
from .normalization import normalize_kind, normalize_name, normalize_timestamp
from .validation import (
    parse_amount,
    parse_term_months,
    validate_loan,
    validate_transaction,
)

__all__ = [
    "add_months",
    "advance_payment_date",
    "apply_loan_payment",
    "compute_monthly_payment",
    "first_payment_date",
    "monthly_rate",
    "split_payment",
    "available_revenue_streams",
    "compute_financial_summary",
    "compute_loan_totals",
    "compute_revenue_streams",
    "compute_totals",
    "normalize_kind",
    "normalize_name",
    "normalize_timestamp",
    "parse_amount",
    "parse_term_months",
    "validate_loan",
    "validate_transaction",
]
