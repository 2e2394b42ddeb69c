"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.finance_repository import FinanceRepositoryPort
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.json_repository import JsonFileFinanceRepository
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import FinanceSettings
from src.infrastructure.sqlalchemy_repository import (
    SqlAlchemyFinanceRepository,
)


def build_database_adapter(
    settings: FinanceSettings | None = None,
) -> DatabaseEnginePort:
    """Return the database adapter instance."""
    db_url = settings.db_url if settings is not None else None
    return SqlAlchemyDatabaseEngineAdapter(db_url)


def build_finance_repository(
    settings: FinanceSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> FinanceRepositoryPort:
    """Return the configured finance repository.

    Args:
        settings: Optional settings; read from the environment when omitted.
        db_port: Optional database adapter for the sqlalchemy backend.

    Returns:
        FinanceRepositoryPort: JSON-file or SQLAlchemy repository.
    """
    resolved = settings or FinanceSettings.from_env()
    logger = get_app_logger()
    if resolved.backend == "sqlalchemy":
        repository = SqlAlchemyFinanceRepository(
            db_port or build_database_adapter(resolved),
            table_prefix=resolved.table_prefix,
            logger=logger,
        )
        repository.ensure_schema()
        return repository
    if resolved.data_file is None:
        raise RuntimeError("JSON backend requires a FINANCE_DATA_FILE value.")
    return JsonFileFinanceRepository(resolved.data_file, logger=logger)


__all__ = ["build_database_adapter", "build_finance_repository"]
