"""Use cases managing transaction templates and quick-add."""

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from src.application.ports.finance_repository import FinanceRepositoryPort
from src.application.use_cases.record_factory import (
    index_of,
    new_record_id,
    template_from_form,
    utc_now,
)
from src.domain.constants import EXPENSE
from src.domain.exceptions import RecordValidationError
from src.domain.models import (
    FinanceSnapshot,
    Transaction,
    TransactionForm,
    TransactionTemplate,
)
from src.domain.services.normalization import normalize_timestamp
from src.infrastructure.logging.logger import get_app_logger


class SaveTemplateUseCase:
    """Add a template, or replace an existing one."""

    def __init__(
        self,
        finance_repository: FinanceRepositoryPort,
        logger=None,
        id_factory: Callable[[], str] = new_record_id,
    ) -> None:
        self._finance_repository = finance_repository
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory

    def execute(
        self,
        form: TransactionForm,
        template_id: str | None = None,
    ) -> TransactionTemplate:
        """Validate the form and store the resulting template.

        Raises:
            RecordValidationError: If the form is rejected.
            EntityNotFoundError: If template_id is unknown.
        """
        try:
            record = template_from_form(
                form,
                record_id=template_id or self._id_factory(),
            )
        except RecordValidationError as exc:
            self._logger.warning(f"Template rejected: {exc}")
            raise

        def _mutate(snapshot: FinanceSnapshot) -> FinanceSnapshot:
            templates = list(snapshot.templates)
            if template_id is None:
                templates.append(record)
            else:
                index = index_of(templates, template_id, "template")
                templates[index] = record
            return replace(snapshot, templates=templates)

        self._finance_repository.apply(_mutate)
        self._logger.info(f"Saved template {record.id}: {record.description}")
        return record


class DeleteTemplateUseCase:
    """Delete a template by id."""

    def __init__(
        self,
        finance_repository: FinanceRepositoryPort,
        logger=None,
    ) -> None:
        self._finance_repository = finance_repository
        self._logger = logger or get_app_logger()

    def execute(self, template_id: str) -> None:
        """Remove the template.

        Raises:
            EntityNotFoundError: If template_id is unknown.
        """

        def _mutate(snapshot: FinanceSnapshot) -> FinanceSnapshot:
            index_of(snapshot.templates, template_id, "template")
            return replace(
                snapshot,
                templates=[
                    template
                    for template in snapshot.templates
                    if template.id != template_id
                ],
            )

        self._finance_repository.apply(_mutate)
        self._logger.info(f"Deleted template {template_id}")


class UseTemplateUseCase:
    """Record a new transaction from a template, dated now."""

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

    def execute(self, template_id: str) -> Transaction:
        """Copy the template into a new transaction.

        Returns:
            Transaction: The recorded transaction.

        Raises:
            EntityNotFoundError: If template_id is unknown.
        """
        created: list[Transaction] = []
        transaction_id = self._id_factory()
        now = normalize_timestamp(self._clock())

        def _mutate(snapshot: FinanceSnapshot) -> FinanceSnapshot:
            template = snapshot.templates[
                index_of(snapshot.templates, template_id, "template")
            ]
            transaction = Transaction(
                id=transaction_id,
                kind=template.kind,
                amount=template.amount,
                category_name=template.category_name,
                description=template.description,
                date=now,
                revenue_stream=(
                    template.revenue_stream
                    if template.kind == EXPENSE
                    else None
                ),
            )
            created.append(transaction)
            return replace(
                snapshot,
                transactions=[*snapshot.transactions, transaction],
            )

        self._finance_repository.apply(_mutate)
        self._logger.info(
            f"Recorded transaction {transaction_id} from template "
            f"{template_id}"
        )
        return created[0]


__all__ = [
    "SaveTemplateUseCase",
    "DeleteTemplateUseCase",
    "UseTemplateUseCase",
]
