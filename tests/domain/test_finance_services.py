"""Tests for revenue stream and loan aggregates."""

from datetime import datetime, timezone
from decimal import Decimal

from src.domain.constants import BORROWED, EXPENSE, INCOME, LENT
from src.domain.defaults import default_categories
from src.domain.models import Category, Loan, Transaction
from src.domain.services.finance import (
    available_revenue_streams,
    compute_financial_summary,
    compute_loan_totals,
    compute_revenue_streams,
    compute_totals,
)


def _tx(
    tx_id: str,
    kind: str,
    amount: str,
    category: str,
    stream: str | None = None,
    day: int = 1,
) -> Transaction:
    return Transaction(
        id=tx_id,
        kind=kind,
        amount=Decimal(amount),
        category_name=category,
        description="",
        date=datetime(2024, 3, day, tzinfo=timezone.utc),
        revenue_stream=stream,
    )


def _loan(loan_id: str, direction: str, balance: str, monthly: str) -> Loan:
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return Loan(
        id=loan_id,
        direction=direction,
        name=loan_id,
        principal_amount=Decimal(balance),
        current_balance=Decimal(balance),
        interest_rate=Decimal("0"),
        term_months=10,
        monthly_payment=Decimal(monthly),
        start_date=start,
        next_payment_date=start,
    )


def test_salary_stream_funds_housing() -> None:
    """Income and allocated expenses should net into the remaining."""
    transactions = [
        _tx("1", INCOME, "3000", "Salary"),
        _tx("2", EXPENSE, "1200", "Housing", stream="Salary"),
    ]

    streams = compute_revenue_streams(transactions, default_categories())

    assert [stream.name for stream in streams] == ["Salary"]
    salary = streams[0]
    assert salary.total_income == Decimal("3000")
    assert salary.allocated_expenses == Decimal("1200")
    assert salary.remaining == Decimal("1800")
    assert salary.color == "bg-emerald-400"
    assert [expense.id for expense in salary.expenses] == ["2"]


def test_streams_follow_category_order_and_skip_idle_categories() -> None:
    """Only income categories with activity become streams, in order."""
    transactions = [
        _tx("1", INCOME, "500", "Investments"),
        _tx("2", INCOME, "100", "Salary"),
        _tx("3", EXPENSE, "40", "Shopping", stream="Freelance"),
    ]

    streams = compute_revenue_streams(transactions, default_categories())

    assert [stream.name for stream in streams] == [
        "Salary",
        "Freelance",
        "Investments",
    ]
    freelance = streams[1]
    assert freelance.total_income == Decimal("0")
    assert freelance.remaining == Decimal("-40")


def test_streams_ignore_unknown_categories_and_unallocated_expenses() -> None:
    """Unknown names and expenses without a stream are left out."""
    transactions = [
        _tx("1", INCOME, "100", "Lottery"),
        _tx("2", EXPENSE, "30", "Housing", stream="Lottery"),
        _tx("3", EXPENSE, "30", "Housing"),
    ]

    assert compute_revenue_streams(transactions, default_categories()) == []


def test_streams_only_consider_income_categories() -> None:
    """An expense category sharing a stream name is not a stream."""
    categories = [Category(id="x", name="Side", kind=EXPENSE, color="c")]
    transactions = [_tx("1", INCOME, "10", "Side")]

    assert compute_revenue_streams(transactions, categories) == []


def test_salary_and_housing_scenario() -> None:
    transactions = [
        _tx("1", INCOME, "1000", "Salary"),
        _tx("2", EXPENSE, "400", "Housing", stream="Salary"),
    ]

    streams = compute_revenue_streams(transactions, default_categories())

    assert len(streams) == 1
    assert streams[0].total_income == Decimal("1000")
    assert streams[0].allocated_expenses == Decimal("400")
    assert streams[0].remaining == Decimal("600")


def test_compute_revenue_streams_is_repeatable() -> None:
    """Computing twice over the same inputs gives equal results."""
    transactions = [
        _tx("1", INCOME, "3000", "Salary"),
        _tx("2", EXPENSE, "1200", "Housing", stream="Salary"),
    ]
    categories = default_categories()

    first = compute_revenue_streams(transactions, categories)
    second = compute_revenue_streams(transactions, categories)

    assert first == second


def test_compute_totals_sums_streams() -> None:
    """Totals should add up income, allocations and remaining."""
    transactions = [
        _tx("1", INCOME, "3000", "Salary"),
        _tx("2", INCOME, "800", "Freelance"),
        _tx("3", EXPENSE, "1200", "Housing", stream="Salary"),
        _tx("4", EXPENSE, "1000", "Shopping", stream="Freelance"),
    ]
    streams = compute_revenue_streams(transactions, default_categories())

    totals = compute_totals(streams)

    assert totals.total_income == Decimal("3800")
    assert totals.total_expenses == Decimal("2200")
    assert totals.total_remaining == Decimal("1600")


def test_compute_totals_of_nothing_is_zero() -> None:
    """No streams should give zero totals."""
    totals = compute_totals([])

    assert totals.total_income == Decimal("0")
    assert totals.total_expenses == Decimal("0")
    assert totals.total_remaining == Decimal("0")


def test_compute_loan_totals_by_direction() -> None:
    """Monthly payments should only count borrowed loans."""
    loans = [
        _loan("car", BORROWED, "900", "100"),
        _loan("flat", BORROWED, "5000", "250"),
        _loan("friend", LENT, "300", "30"),
    ]

    totals = compute_loan_totals(loans)

    assert totals.total_borrowed == Decimal("5900")
    assert totals.total_lent == Decimal("300")
    assert totals.monthly_payments == Decimal("350")


def test_available_revenue_streams_require_income() -> None:
    """Only income categories with recorded income are offered."""
    transactions = [
        _tx("1", INCOME, "10", "Business"),
        _tx("2", EXPENSE, "5", "Housing", stream="Salary"),
    ]

    available = available_revenue_streams(transactions, default_categories())

    assert [category.name for category in available] == ["Business"]


def test_financial_summary_totals_every_transaction() -> None:
    """The summary sums all transactions regardless of streams."""
    transactions = [
        _tx("1", INCOME, "100", "Salary", day=1),
        _tx("2", EXPENSE, "30", "Housing", day=3),
        _tx("3", EXPENSE, "20", "Housing", stream="Salary", day=2),
    ]
    loans = [
        _loan("car", BORROWED, "900", "100"),
        _loan("friend", LENT, "300", "30"),
    ]

    summary = compute_financial_summary(transactions, loans, recent_limit=2)

    assert summary.total_income == Decimal("100")
    assert summary.total_expenses == Decimal("50")
    assert summary.total_remaining == Decimal("50")
    assert summary.active_loans == 2
    assert summary.borrowed_count == 1
    assert summary.lent_count == 1
    assert summary.loan_totals.total_borrowed == Decimal("900")
    assert [t.id for t in summary.recent_transactions] == ["2", "3"]
