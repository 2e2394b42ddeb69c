"""Use case adding categories."""

from collections.abc import Callable
from dataclasses import replace

from src.application.ports.finance_repository import FinanceRepositoryPort
from src.application.use_cases.record_factory import new_record_id
from src.domain.constants import DEFAULT_CATEGORY_COLOR, TRANSACTION_KINDS
from src.domain.exceptions import DuplicateCategoryError, RecordValidationError
from src.domain.models import Category, FinanceSnapshot
from src.domain.policies.category_lookup import find_category
from src.domain.services.normalization import normalize_kind, normalize_name
from src.infrastructure.logging.logger import get_app_logger


class SaveCategoryUseCase:
    """Add a category while keeping (name, kind) pairs unique."""

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
        name: str,
        kind: str,
        color: str = DEFAULT_CATEGORY_COLOR,
    ) -> Category:
        """Store a new category.

        Args:
            name: Category name; for income, also the revenue stream name.
            kind: ``income`` or ``expense``.
            color: Presentation tag.

        Returns:
            Category: The stored category.

        Raises:
            RecordValidationError: If the name is blank or the kind unknown.
            DuplicateCategoryError: If the (name, kind) pair exists.
        """
        cleaned_name = normalize_name(name)
        cleaned_kind = normalize_kind(kind)
        if cleaned_name is None or cleaned_kind not in TRANSACTION_KINDS:
            raise RecordValidationError(
                f"Invalid category: name={name!r}, kind={kind!r}"
            )
        category = Category(
            id=self._id_factory(),
            name=cleaned_name,
            kind=cleaned_kind,
            color=color or DEFAULT_CATEGORY_COLOR,
        )

        def _mutate(snapshot: FinanceSnapshot) -> FinanceSnapshot:
            if find_category(snapshot.categories, cleaned_name, cleaned_kind):
                raise DuplicateCategoryError(
                    f"Category already exists: {cleaned_name} ({cleaned_kind})"
                )
            return replace(
                snapshot,
                categories=[*snapshot.categories, category],
            )

        self._finance_repository.apply(_mutate)
        self._logger.info(f"Added {cleaned_kind} category {cleaned_name}")
        return category


__all__ = ["SaveCategoryUseCase"]
