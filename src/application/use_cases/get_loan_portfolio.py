"""Use case to read the loan portfolio."""

from src.application.ports.finance_repository import FinanceRepositoryPort
from src.domain.constants import BORROWED, LENT
from src.domain.models import LoanPayment, LoanPortfolioView
from src.domain.services.finance import compute_loan_totals
from src.infrastructure.logging.logger import get_app_logger


class GetLoanPortfolioUseCase:
    """Split loans by direction and compute their totals."""

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

    def execute(self) -> LoanPortfolioView:
        """Return borrowed and lent loans with totals and payment history.

        Returns:
            LoanPortfolioView: Loans in stored order, payments newest first.
        """
        snapshot = self._finance_repository.load_snapshot()
        borrowed = [
            loan for loan in snapshot.loans if loan.direction == BORROWED
        ]
        lent = [loan for loan in snapshot.loans if loan.direction == LENT]
        payments_by_loan: dict[str, list[LoanPayment]] = {
            loan.id: [] for loan in snapshot.loans
        }
        for payment in snapshot.loan_payments:
            if payment.loan_id not in payments_by_loan:
                self._logger.warning(
                    f"Ignoring payment {payment.id} for unknown loan "
                    f"{payment.loan_id}"
                )
                continue
            payments_by_loan[payment.loan_id].append(payment)
        for payments in payments_by_loan.values():
            payments.sort(key=lambda payment: payment.date, reverse=True)

        totals = compute_loan_totals(snapshot.loans)
        self._logger.info(
            f"Loan totals computed: borrowed={totals.total_borrowed}, "
            f"lent={totals.total_lent}, monthly={totals.monthly_payments}"
        )
        return LoanPortfolioView(
            borrowed=borrowed,
            lent=lent,
            totals=totals,
            payments_by_loan=payments_by_loan,
        )


__all__ = ["GetLoanPortfolioUseCase", "LoanPortfolioView"]
