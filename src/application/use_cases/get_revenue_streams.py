"""Use cases reading revenue streams from the finance store."""

from src.application.ports.finance_repository import FinanceRepositoryPort
from src.domain.models import Category, RevenueStreamsView
from src.domain.services.finance import (
    available_revenue_streams,
    compute_revenue_streams,
    compute_totals,
)
from src.infrastructure.logging.logger import get_app_logger


class GetRevenueStreamsUseCase:
    """Compute revenue streams and their totals."""

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

    def execute(self) -> RevenueStreamsView:
        """Return every active revenue stream with portfolio totals.

        Returns:
            RevenueStreamsView: Streams in category order and their totals.
        """
        snapshot = self._finance_repository.load_snapshot()
        streams = compute_revenue_streams(
            snapshot.transactions,
            snapshot.categories,
        )
        totals = compute_totals(streams)
        self._logger.info(
            f"Computed {len(streams)} revenue streams: "
            f"income={totals.total_income}, "
            f"allocated={totals.total_expenses}"
        )
        return RevenueStreamsView(streams=streams, totals=totals)


class GetAvailableRevenueStreamsUseCase:
    """List income categories that can fund expenses and loan payments."""

    def __init__(
        self,
        finance_repository: FinanceRepositoryPort,
        logger=None,
    ) -> None:
        self._finance_repository = finance_repository
        self._logger = logger or get_app_logger()

    def execute(self) -> list[Category]:
        """Return income categories with at least one income recorded."""
        snapshot = self._finance_repository.load_snapshot()
        return available_revenue_streams(
            snapshot.transactions,
            snapshot.categories,
        )


__all__ = [
    "GetRevenueStreamsUseCase",
    "GetAvailableRevenueStreamsUseCase",
    "RevenueStreamsView",
]
