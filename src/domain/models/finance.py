"""Domain models for derived financial views."""

from dataclasses import dataclass, field
from decimal import Decimal

from .records import Loan, LoanPayment, Transaction


@dataclass(frozen=True)
class RevenueStream:
    """Income category with the expenses allocated against it.

    Attributes:
        name: Income category name.
        total_income: Sum of income recorded in the category.
        allocated_expenses: Sum of expenses funded by the stream.
        remaining: Income minus allocated expenses, may be negative.
        color: Presentation tag of the category.
        expenses: Contributing expenses, in the order encountered.
    """

    name: str
    total_income: Decimal
    allocated_expenses: Decimal
    remaining: Decimal
    color: str
    expenses: list[Transaction] = field(default_factory=list)


@dataclass(frozen=True)
class FinanceTotals:
    """Portfolio-wide sums across revenue streams."""

    total_income: Decimal
    total_expenses: Decimal
    total_remaining: Decimal


@dataclass(frozen=True)
class LoanTotals:
    """Outstanding balances by direction and monthly cash owed."""

    total_borrowed: Decimal
    total_lent: Decimal
    monthly_payments: Decimal


@dataclass(frozen=True)
class PaymentSplit:
    """Interest and principal portions of a payment."""

    interest_portion: Decimal
    principal_portion: Decimal


@dataclass(frozen=True)
class LoanPaymentOutcome:
    """Records produced by applying one payment to a loan."""

    loan: Loan
    payment: LoanPayment
    transaction: Transaction


@dataclass(frozen=True)
class RevenueStreamsView:
    """Revenue streams and their totals for UI rendering."""

    streams: list[RevenueStream]
    totals: FinanceTotals


@dataclass(frozen=True)
class LoanPortfolioView:
    """Loans split by direction with their totals and payment history."""

    borrowed: list[Loan]
    lent: list[Loan]
    totals: LoanTotals
    payments_by_loan: dict[str, list[LoanPayment]] = field(
        default_factory=dict
    )


@dataclass(frozen=True)
class FinancialSummary:
    """Dashboard overview figures."""

    total_income: Decimal
    total_expenses: Decimal
    loan_totals: LoanTotals
    active_loans: int
    borrowed_count: int
    lent_count: int
    recent_transactions: list[Transaction] = field(default_factory=list)

    @property
    def total_remaining(self) -> Decimal:
        """Return total_income minus total_expenses."""
        return self.total_income - self.total_expenses


__all__ = [
    "RevenueStream",
    "FinanceTotals",
    "LoanTotals",
    "PaymentSplit",
    "LoanPaymentOutcome",
    "RevenueStreamsView",
    "LoanPortfolioView",
    "FinancialSummary",
]
