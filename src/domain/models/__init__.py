"""Domain models package."""

from .finance import (
    FinanceTotals,
    FinancialSummary,
    LoanPaymentOutcome,
    LoanPortfolioView,
    LoanTotals,
    PaymentSplit,
    RevenueStream,
    RevenueStreamsView,
)
from .forms import LoanForm, TransactionForm
from .records import (
    Category,
    FinanceSnapshot,
    Loan,
    LoanPayment,
    Transaction,
    TransactionTemplate,
)

__all__ = [
    "Category",
    "FinanceSnapshot",
    "Loan",
    "LoanPayment",
    "Transaction",
    "TransactionTemplate",
    "TransactionForm",
    "LoanForm",
    "FinanceTotals",
    "FinancialSummary",
    "LoanPaymentOutcome",
    "LoanPortfolioView",
    "LoanTotals",
    "PaymentSplit",
    "RevenueStream",
    "RevenueStreamsView",
]
