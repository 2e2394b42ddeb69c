"""Domain package for business rules and core models."""

from .constants import BORROWED, EXPENSE, INCOME, LENT
from .exceptions import (
    DuplicateCategoryError,
    EntityNotFoundError,
    FinanceError,
    InvalidLoanTermError,
    RecordValidationError,
)
from .models import (
    Category,
    FinanceSnapshot,
    FinanceTotals,
    FinancialSummary,
    Loan,
    LoanPayment,
    LoanTotals,
    PaymentSplit,
    RevenueStream,
    Transaction,
    TransactionTemplate,
)
from .policies import category_color, find_category
from .services import (
    apply_loan_payment,
    compute_financial_summary,
    compute_loan_totals,
    compute_monthly_payment,
    compute_revenue_streams,
    compute_totals,
    split_payment,
    validate_loan,
    validate_transaction,
)

__all__ = [
    "BORROWED",
    "EXPENSE",
    "INCOME",
    "LENT",
    "DuplicateCategoryError",
    "EntityNotFoundError",
    "FinanceError",
    "InvalidLoanTermError",
    "RecordValidationError",
    "Category",
    "FinanceSnapshot",
    "FinanceTotals",
    "FinancialSummary",
    "Loan",
    "LoanPayment",
    "LoanTotals",
    "PaymentSplit",
    "RevenueStream",
    "Transaction",
    "TransactionTemplate",
    "category_color",
    "find_category",
    "apply_loan_payment",
    "compute_financial_summary",
    "compute_loan_totals",
    "compute_monthly_payment",
    "compute_revenue_streams",
    "compute_totals",
    "split_payment",
    "validate_loan",
    "validate_transaction",
]
