"""Use cases recording, editing and deleting transactions."""

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from src.application.ports.finance_repository import FinanceRepositoryPort
from src.application.use_cases.record_factory import (
    index_of,
    new_record_id,
    transaction_from_form,
    utc_now,
)
from src.domain.exceptions import RecordValidationError
from src.domain.models import FinanceSnapshot, Transaction, TransactionForm
from src.infrastructure.logging.logger import get_app_logger


class SaveTransactionUseCase:
    """Add a transaction, or replace an existing one as a whole."""

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
        form: TransactionForm,
        transaction_id: str | None = None,
    ) -> Transaction:
        """Validate the form and store the resulting transaction.

        Args:
            form: Raw transaction fields.
            transaction_id: Id of the transaction to replace, if editing.

        Returns:
            Transaction: The stored record.

        Raises:
            RecordValidationError: If the form is rejected.
            EntityNotFoundError: If transaction_id is unknown.
        """
        try:
            record = transaction_from_form(
                form,
                record_id=transaction_id or self._id_factory(),
                fallback_date=self._clock(),
            )
        except RecordValidationError as exc:
            self._logger.warning(f"Transaction rejected: {exc}")
            raise
        saved: list[Transaction] = []

        def _mutate(snapshot: FinanceSnapshot) -> FinanceSnapshot:
            transactions = list(snapshot.transactions)
            if transaction_id is None:
                transactions.append(record)
                saved.append(record)
            else:
                index = index_of(transactions, transaction_id, "transaction")
                edited = record
                if form.date is None:
                    edited = replace(record, date=transactions[index].date)
                transactions[index] = edited
                saved.append(edited)
            return replace(snapshot, transactions=transactions)

        self._finance_repository.apply(_mutate)
        action = "Added" if transaction_id is None else "Updated"
        self._logger.info(
            f"{action} {record.kind} transaction {record.id} "
            f"of {record.amount} in {record.category_name}"
        )
        return saved[0]


class DeleteTransactionUseCase:
    """Delete a transaction by id."""

    def __init__(
        self,
        finance_repository: FinanceRepositoryPort,
        logger=None,
    ) -> None:
        self._finance_repository = finance_repository
        self._logger = logger or get_app_logger()

    def execute(self, transaction_id: str) -> None:
        """Remove the transaction.

        Raises:
            EntityNotFoundError: If transaction_id is unknown.
        """

        def _mutate(snapshot: FinanceSnapshot) -> FinanceSnapshot:
            index_of(snapshot.transactions, transaction_id, "transaction")
            return replace(
                snapshot,
                transactions=[
                    transaction
                    for transaction in snapshot.transactions
                    if transaction.id != transaction_id
                ],
            )

        self._finance_repository.apply(_mutate)
        self._logger.info(f"Deleted transaction {transaction_id}")


__all__ = ["SaveTransactionUseCase", "DeleteTransactionUseCase"]
