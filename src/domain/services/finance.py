"""Domain services for revenue stream and loan aggregates."""

from collections.abc import Iterable
from decimal import Decimal

from src.domain.constants import BORROWED, EXPENSE, INCOME, LENT
from src.domain.models import (
    Category,
    FinanceTotals,
    FinancialSummary,
    Loan,
    LoanTotals,
    RevenueStream,
    Transaction,
)

_ZERO = Decimal("0")


def compute_revenue_streams(
    transactions: list[Transaction],
    categories: list[Category],
) -> list[RevenueStream]:
    """Compute one revenue stream per active income category.

    Streams follow category order. Income categories with neither income
    nor allocated expenses are left out. References to unknown categories
    are ignored.

    Args:
        transactions: Recorded transactions.
        categories: Known categories, income and expense.

    Returns:
        list[RevenueStream]: Streams with income, allocations and remaining.
    """
    streams: list[RevenueStream] = []
    for category in categories:
        if category.kind != INCOME:
            continue
        total_income = sum(
            (
                transaction.amount
                for transaction in transactions
                if transaction.kind == INCOME
                and transaction.category_name == category.name
            ),
            _ZERO,
        )
        expenses = [
            transaction
            for transaction in transactions
            if transaction.kind == EXPENSE
            and transaction.revenue_stream == category.name
        ]
        allocated = sum((expense.amount for expense in expenses), _ZERO)
        if total_income <= 0 and allocated <= 0:
            continue
        streams.append(
            RevenueStream(
                name=category.name,
                total_income=total_income,
                allocated_expenses=allocated,
                remaining=total_income - allocated,
                color=category.color,
                expenses=expenses,
            )
        )
    return streams


def compute_totals(streams: Iterable[RevenueStream]) -> FinanceTotals:
    """Sum income, allocated expenses and remaining across streams."""
    total_income = _ZERO
    total_expenses = _ZERO
    total_remaining = _ZERO
    for stream in streams:
        total_income += stream.total_income
        total_expenses += stream.allocated_expenses
        total_remaining += stream.remaining
    return FinanceTotals(
        total_income=total_income,
        total_expenses=total_expenses,
        total_remaining=total_remaining,
    )


def compute_loan_totals(loans: Iterable[Loan]) -> LoanTotals:
    """Sum loan balances by direction.

    Only borrowed loans count towards monthly payments since those are
    the installments the user pays out.
    """
    total_borrowed = _ZERO
    total_lent = _ZERO
    monthly_payments = _ZERO
    for loan in loans:
        if loan.direction == BORROWED:
            total_borrowed += loan.current_balance
            monthly_payments += loan.monthly_payment
        elif loan.direction == LENT:
            total_lent += loan.current_balance
    return LoanTotals(
        total_borrowed=total_borrowed,
        total_lent=total_lent,
        monthly_payments=monthly_payments,
    )


def available_revenue_streams(
    transactions: list[Transaction],
    categories: list[Category],
) -> list[Category]:
    """Return income categories that received at least one income."""
    funded = {
        transaction.category_name
        for transaction in transactions
        if transaction.kind == INCOME
    }
    return [
        category
        for category in categories
        if category.kind == INCOME and category.name in funded
    ]


def compute_financial_summary(
    transactions: list[Transaction],
    loans: list[Loan],
    *,
    recent_limit: int = 5,
) -> FinancialSummary:
    """Compute dashboard figures over every recorded transaction.

    Unlike compute_totals, income and expenses are summed regardless of
    categories or revenue streams.

    Args:
        transactions: Recorded transactions.
        loans: Recorded loans.
        recent_limit: Number of most recent transactions to keep.

    Returns:
        FinancialSummary: Totals, loan figures and recent transactions.
    """
    total_income = sum(
        (t.amount for t in transactions if t.kind == INCOME),
        _ZERO,
    )
    total_expenses = sum(
        (t.amount for t in transactions if t.kind == EXPENSE),
        _ZERO,
    )
    recent = sorted(transactions, key=lambda t: t.date, reverse=True)
    return FinancialSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        loan_totals=compute_loan_totals(loans),
        active_loans=len(loans),
        borrowed_count=sum(1 for loan in loans if loan.direction == BORROWED),
        lent_count=sum(1 for loan in loans if loan.direction == LENT),
        recent_transactions=recent[: max(recent_limit, 0)],
    )


__all__ = [
    "compute_revenue_streams",
    "compute_totals",
    "compute_loan_totals",
    "available_revenue_streams",
    "compute_financial_summary",
]
