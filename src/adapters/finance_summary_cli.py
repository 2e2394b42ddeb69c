"""CLI adapter printing the financial summary and revenue streams.

This module wires the read-only use cases to the repository selected by
the environment and prints a plain-text report.
"""

from src.application.use_cases.get_financial_summary import (
    GetFinancialSummaryUseCase,
)
from src.application.use_cases.get_revenue_streams import (
    GetRevenueStreamsUseCase,
)
from src.infrastructure.container import build_finance_repository
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import FinanceSettings


def main() -> None:
    """Print totals, loan figures and the per-stream breakdown."""
    logger = get_app_logger()
    settings = FinanceSettings.from_env()
    repository = build_finance_repository(settings)

    summary = GetFinancialSummaryUseCase(repository, logger=logger).execute()
    view = GetRevenueStreamsUseCase(repository, logger=logger).execute()
    currency = settings.currency_code

    print(f"Financial summary ({currency})")
    print(
        f"income={summary.total_income:.2f}, "
        f"expenses={summary.total_expenses:.2f}, "
        f"remaining={summary.total_remaining:.2f}"
    )
    print(
        f"loans={summary.active_loans} "
        f"(borrowed={summary.borrowed_count}, lent={summary.lent_count}), "
        f"borrowed_balance={summary.loan_totals.total_borrowed:.2f}, "
        f"lent_balance={summary.loan_totals.total_lent:.2f}, "
        f"monthly_payments={summary.loan_totals.monthly_payments:.2f}"
    )
    if not view.streams:
        print("No revenue streams.")
        return
    print("Revenue streams")
    for stream in view.streams:
        print(
            f"{stream.name}: income={stream.total_income:.2f}, "
            f"allocated={stream.allocated_expenses:.2f}, "
            f"remaining={stream.remaining:.2f}"
        )


if __name__ == "__main__":  # pragma: no cover
    main()
