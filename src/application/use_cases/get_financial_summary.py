"""Use case to compute the dashboard overview."""

from src.application.ports.finance_repository import FinanceRepositoryPort
from src.domain.models import FinancialSummary
from src.domain.services.finance import compute_financial_summary
from src.infrastructure.logging.logger import get_app_logger


class GetFinancialSummaryUseCase:
    """Compute overview figures from every stored transaction and loan."""

    def __init__(
        self,
        finance_repository: FinanceRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            finance_repository: Port providing stored finance records.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._finance_repository = finance_repository
        self._logger = logger or get_app_logger()

    def execute(self, recent_limit: int = 5) -> FinancialSummary:
        """Return the financial summary.

        Args:
            recent_limit: Number of most recent transactions to include.

        Returns:
            FinancialSummary: Totals, loan figures and recent activity.
        """
        snapshot = self._finance_repository.load_snapshot()
        summary = compute_financial_summary(
            snapshot.transactions,
            snapshot.loans,
            recent_limit=recent_limit,
        )
        self._logger.info(
            f"Financial summary computed: income={summary.total_income}, "
            f"expenses={summary.total_expenses}, "
            f"loans={summary.active_loans}"
        )
        return summary


__all__ = ["GetFinancialSummaryUseCase", "FinancialSummary"]
