"""Application use cases package."""

from .get_financial_summary import (
    FinancialSummary,
    GetFinancialSummaryUseCase,
)
from .get_loan_portfolio import GetLoanPortfolioUseCase, LoanPortfolioView
from .get_revenue_streams import (
    GetAvailableRevenueStreamsUseCase,
    GetRevenueStreamsUseCase,
    RevenueStreamsView,
)
from .manage_categories import SaveCategoryUseCase
from .manage_loans import (
    DeleteLoanUseCase,
    MakeLoanPaymentUseCase,
    SaveLoanUseCase,
)
from .manage_templates import (
    DeleteTemplateUseCase,
    SaveTemplateUseCase,
    UseTemplateUseCase,
)
from .manage_transactions import (
    DeleteTransactionUseCase,
    SaveTransactionUseCase,
)

__all__ = [
    "FinancialSummary",
    "GetFinancialSummaryUseCase",
    "GetLoanPortfolioUseCase",
    "LoanPortfolioView",
    "GetAvailableRevenueStreamsUseCase",
    "GetRevenueStreamsUseCase",
    "RevenueStreamsView",
    "SaveCategoryUseCase",
    "DeleteLoanUseCase",
    "MakeLoanPaymentUseCase",
    "SaveLoanUseCase",
    "DeleteTemplateUseCase",
    "SaveTemplateUseCase",
    "UseTemplateUseCase",
    "DeleteTransactionUseCase",
    "SaveTransactionUseCase",
]
