"""Domain models for stored finance records."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Category:
    """Named bucket for income or expense transactions.

    The name of an income category doubles as the revenue stream
    identifier referenced by expenses and loans.
    """

    id: str
    name: str
    kind: str
    color: str


@dataclass(frozen=True)
class Transaction:
    """Single recorded cash movement.

    Attributes:
        id: Opaque unique identifier.
        kind: ``income`` or ``expense``.
        amount: Non-negative amount.
        category_name: Name of the category the transaction belongs to.
        description: Free text.
        date: Timestamp of the movement.
        revenue_stream: Income category name funding an expense.
    """

    id: str
    kind: str
    amount: Decimal
    category_name: str
    description: str
    date: datetime
    revenue_stream: str | None = None


@dataclass(frozen=True)
class TransactionTemplate:
    """Reusable preset for quickly recording a transaction."""

    id: str
    kind: str
    amount: Decimal
    category_name: str
    description: str
    revenue_stream: str | None = None


@dataclass(frozen=True)
class Loan:
    """Borrowing or lending agreement with a fixed monthly payment.

    Attributes:
        id: Opaque unique identifier.
        direction: ``borrowed`` or ``lent``.
        name: Display name.
        principal_amount: Amount originally borrowed or lent.
        current_balance: Outstanding balance, never negative.
        interest_rate: Annual interest rate in percent.
        term_months: Number of monthly installments.
        monthly_payment: Payment computed when the loan was saved.
        start_date: Start of the agreement.
        next_payment_date: Due date of the next installment.
        revenue_stream_allocation: Income stream paying a borrowed loan.
        category_name: Category of the loan.
        description: Free text.
    """

    id: str
    direction: str
    name: str
    principal_amount: Decimal
    current_balance: Decimal
    interest_rate: Decimal
    term_months: int
    monthly_payment: Decimal
    start_date: datetime
    next_payment_date: datetime
    revenue_stream_allocation: str | None = None
    category_name: str = ""
    description: str = ""


@dataclass(frozen=True)
class LoanPayment:
    """Immutable record of one payment made against a loan."""

    id: str
    loan_id: str
    amount: Decimal
    principal_amount: Decimal
    interest_amount: Decimal
    date: datetime
    revenue_stream: str | None = None


@dataclass(frozen=True)
class FinanceSnapshot:
    """Every stored collection, as loaded from or saved to a repository."""

    transactions: list[Transaction] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
    templates: list[TransactionTemplate] = field(default_factory=list)
    loans: list[Loan] = field(default_factory=list)
    loan_payments: list[LoanPayment] = field(default_factory=list)


__all__ = [
    "Category",
    "Transaction",
    "TransactionTemplate",
    "Loan",
    "LoanPayment",
    "FinanceSnapshot",
]
