"""Use cases managing loans and their payments."""

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from src.application.ports.finance_repository import FinanceRepositoryPort
from src.application.use_cases.record_factory import (
    index_of,
    loan_from_form,
    new_record_id,
    utc_now,
)
from src.domain.exceptions import RecordValidationError
from src.domain.models import (
    FinanceSnapshot,
    Loan,
    LoanForm,
    LoanPaymentOutcome,
)
from src.domain.services.amortization import apply_loan_payment
from src.domain.services.normalization import (
    normalize_name,
    normalize_timestamp,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import parse_decimal


class SaveLoanUseCase:
    """Add a loan, or replace an existing one.

    Editing recomputes the monthly payment. The balance restarts from the
    new principal minus the principal already repaid, rather than being
    reset to the full principal, so recorded payments keep counting. The
    next due date is kept unless the start date changed.
    """

    def __init__(
        self,
        finance_repository: FinanceRepositoryPort,
        logger=None,
        id_factory: Callable[[], str] = new_record_id,
    ) -> None:
        """Initialize the use case.

        Args:
            finance_repository: Port persisting finance records.
            logger: Optional logger compatible with logging.Logger-like API.
            id_factory: Callable returning identifiers for new records.
        """
        self._finance_repository = finance_repository
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory

    def execute(self, form: LoanForm, loan_id: str | None = None) -> Loan:
        """Validate the form and store the resulting loan.

        Args:
            form: Raw loan fields.
            loan_id: Id of the loan to replace, if editing.

        Returns:
            Loan: The stored record.

        Raises:
            RecordValidationError: If the form is rejected.
            EntityNotFoundError: If loan_id is unknown.
        """
        record_id = loan_id or self._id_factory()
        try:
            loan = loan_from_form(form, record_id=record_id)
        except RecordValidationError as exc:
            self._logger.warning(f"Loan rejected: {exc}")
            raise
        saved: list[Loan] = []

        def _mutate(snapshot: FinanceSnapshot) -> FinanceSnapshot:
            loans = list(snapshot.loans)
            if loan_id is None:
                loans.append(loan)
                saved.append(loan)
                return replace(snapshot, loans=loans)
            index = index_of(loans, loan_id, "loan")
            existing = loans[index]
            repaid = sum(
                (
                    payment.principal_amount
                    for payment in snapshot.loan_payments
                    if payment.loan_id == loan_id
                ),
                Decimal("0"),
            )
            keep_schedule = existing.start_date == loan.start_date
            edited = loan_from_form(
                form,
                record_id=record_id,
                repaid_principal=repaid,
                next_payment_date=(
                    existing.next_payment_date if keep_schedule else None
                ),
            )
            loans[index] = edited
            saved.append(edited)
            return replace(snapshot, loans=loans)

        self._finance_repository.apply(_mutate)
        stored = saved[0]
        self._logger.info(
            f"Saved {stored.direction} loan {stored.id} ({stored.name}): "
            f"principal={stored.principal_amount}, "
            f"monthly={stored.monthly_payment:.2f}"
        )
        return stored


class DeleteLoanUseCase:
    """Delete a loan together with its payments."""

    def __init__(
        self,
        finance_repository: FinanceRepositoryPort,
        logger=None,
    ) -> None:
        self._finance_repository = finance_repository
        self._logger = logger or get_app_logger()

    def execute(self, loan_id: str) -> None:
        """Remove the loan and cascade to its payments.

        Transactions recorded for past payments are kept.

        Raises:
            EntityNotFoundError: If loan_id is unknown.
        """

        def _mutate(snapshot: FinanceSnapshot) -> FinanceSnapshot:
            index_of(snapshot.loans, loan_id, "loan")
            return replace(
                snapshot,
                loans=[loan for loan in snapshot.loans if loan.id != loan_id],
                loan_payments=[
                    payment
                    for payment in snapshot.loan_payments
                    if payment.loan_id != loan_id
                ],
            )

        self._finance_repository.apply(_mutate)
        self._logger.info(f"Deleted loan {loan_id} and its payments")


class MakeLoanPaymentUseCase:
    """Record a payment against a loan.

    The payment record, the balance decrease, the due date advance and the
    linked expense transaction are saved together in one repository call.
    """

    def __init__(
        self,
        finance_repository: FinanceRepositoryPort,
        logger=None,
        id_factory: Callable[[], str] = new_record_id,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the use case.

        Args:
            finance_repository: Port persisting finance records.
            logger: Optional logger compatible with logging.Logger-like API.
            id_factory: Callable returning identifiers for new records.
            clock: Callable returning the current timestamp.
        """
        self._finance_repository = finance_repository
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory
        self._clock = clock

    def execute(
        self,
        loan_id: str,
        amount_text: str,
        revenue_stream: str | None = None,
        paid_at: datetime | None = None,
    ) -> LoanPaymentOutcome:
        """Apply a payment to the loan.

        Args:
            loan_id: Loan being paid.
            amount_text: Raw payment amount.
            revenue_stream: Income stream funding the payment; defaults to
                the loan's allocation.
            paid_at: Payment timestamp; defaults to now.

        Returns:
            LoanPaymentOutcome: Updated loan, payment and expense records.

        Raises:
            RecordValidationError: If the amount or the stream is missing.
            EntityNotFoundError: If loan_id is unknown.
        """
        amount = parse_decimal(amount_text)
        if amount is None:
            self._logger.warning(
                f"Payment rejected for loan {loan_id}: "
                f"invalid amount {amount_text!r}"
            )
            raise RecordValidationError(
                f"Invalid payment amount: {amount_text!r}"
            )
        when = normalize_timestamp(paid_at or self._clock())
        payment_id = self._id_factory()
        transaction_id = self._id_factory()
        outcomes: list[LoanPaymentOutcome] = []

        def _mutate(snapshot: FinanceSnapshot) -> FinanceSnapshot:
            loans = list(snapshot.loans)
            index = index_of(loans, loan_id, "loan")
            loan = loans[index]
            stream = normalize_name(revenue_stream) or normalize_name(
                loan.revenue_stream_allocation
            )
            if stream is None:
                raise RecordValidationError(
                    f"A revenue stream is required to pay loan {loan_id}"
                )
            outcome = apply_loan_payment(
                loan,
                amount,
                stream,
                when,
                payment_id=payment_id,
                transaction_id=transaction_id,
                logger=self._logger,
            )
            loans[index] = outcome.loan
            outcomes.append(outcome)
            return replace(
                snapshot,
                loans=loans,
                loan_payments=[*snapshot.loan_payments, outcome.payment],
                transactions=[*snapshot.transactions, outcome.transaction],
            )

        self._finance_repository.apply(_mutate)
        outcome = outcomes[0]
        self._logger.info(
            f"Payment {payment_id} of {amount} on loan {loan_id}: "
            f"principal={outcome.payment.principal_amount:.2f}, "
            f"interest={outcome.payment.interest_amount:.2f}, "
            f"balance={outcome.loan.current_balance:.2f}"
        )
        return outcome


__all__ = ["SaveLoanUseCase", "DeleteLoanUseCase", "MakeLoanPaymentUseCase"]
