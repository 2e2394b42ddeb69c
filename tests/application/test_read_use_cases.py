"""Tests for the read-only use cases."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.get_financial_summary import (
    GetFinancialSummaryUseCase,
)
from src.application.use_cases.get_loan_portfolio import (
    GetLoanPortfolioUseCase,
)
from src.application.use_cases.get_revenue_streams import (
    GetAvailableRevenueStreamsUseCase,
    GetRevenueStreamsUseCase,
)
from src.domain.defaults import default_categories
from src.domain.models import (
    FinanceSnapshot,
    Loan,
    LoanPayment,
    Transaction,
)


def _tx(tx_id, kind, amount, category, stream=None, day=1):
    return Transaction(
        id=tx_id,
        kind=kind,
        amount=Decimal(amount),
        category_name=category,
        description="",
        date=datetime(2024, 3, day, tzinfo=timezone.utc),
        revenue_stream=stream,
    )


def _loan(loan_id, direction):
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return Loan(
        id=loan_id,
        direction=direction,
        name=loan_id,
        principal_amount=Decimal("1000"),
        current_balance=Decimal("800"),
        interest_rate=Decimal("0"),
        term_months=10,
        monthly_payment=Decimal("100"),
        start_date=start,
        next_payment_date=start,
    )


def _payment(payment_id, loan_id, day):
    return LoanPayment(
        id=payment_id,
        loan_id=loan_id,
        amount=Decimal("100"),
        principal_amount=Decimal("100"),
        interest_amount=Decimal("0"),
        date=datetime(2024, 2, day, tzinfo=timezone.utc),
    )


def _repository(snapshot: FinanceSnapshot) -> MagicMock:
    repository = MagicMock()
    repository.load_snapshot.return_value = snapshot
    return repository


def test_revenue_streams_use_case_returns_streams_and_totals() -> None:
    snapshot = FinanceSnapshot(
        transactions=[
            _tx("1", "income", "3000", "Salary"),
            _tx("2", "expense", "1200", "Housing", stream="Salary"),
        ],
        categories=default_categories(),
    )
    logger = MagicMock()

    view = GetRevenueStreamsUseCase(
        _repository(snapshot),
        logger=logger,
    ).execute()

    assert [stream.name for stream in view.streams] == ["Salary"]
    assert view.totals.total_remaining == Decimal("1800")
    logger.info.assert_called_once()


def test_available_streams_use_case() -> None:
    snapshot = FinanceSnapshot(
        transactions=[_tx("1", "income", "10", "Freelance")],
        categories=default_categories(),
    )

    streams = GetAvailableRevenueStreamsUseCase(
        _repository(snapshot),
        logger=MagicMock(),
    ).execute()

    assert [category.name for category in streams] == ["Freelance"]


def test_loan_portfolio_groups_loans_and_payments() -> None:
    """Payments are grouped per loan, newest first; orphans are skipped."""
    snapshot = FinanceSnapshot(
        loans=[_loan("car", "borrowed"), _loan("friend", "lent")],
        loan_payments=[
            _payment("p1", "car", 1),
            _payment("p2", "car", 20),
            _payment("p3", "ghost", 5),
        ],
    )
    logger = MagicMock()

    view = GetLoanPortfolioUseCase(
        _repository(snapshot),
        logger=logger,
    ).execute()

    assert [loan.id for loan in view.borrowed] == ["car"]
    assert [loan.id for loan in view.lent] == ["friend"]
    assert view.totals.total_borrowed == Decimal("800")
    assert view.totals.total_lent == Decimal("800")
    assert view.totals.monthly_payments == Decimal("100")
    assert [p.id for p in view.payments_by_loan["car"]] == ["p2", "p1"]
    assert view.payments_by_loan["friend"] == []
    logger.warning.assert_called_once()


def test_financial_summary_use_case_limits_recent() -> None:
    snapshot = FinanceSnapshot(
        transactions=[
            _tx(str(day), "income", "10", "Salary", day=day)
            for day in range(1, 8)
        ],
    )

    summary = GetFinancialSummaryUseCase(
        _repository(snapshot),
        logger=MagicMock(),
    ).execute(recent_limit=3)

    assert summary.total_income == Decimal("70")
    assert [t.id for t in summary.recent_transactions] == ["7", "6", "5"]
