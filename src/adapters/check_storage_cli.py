"""Simple CLI to validate the configured finance store.

This adapter is meant for local operations: it builds the repository
selected by the environment, loads every collection and reports the
record counts. For the sqlalchemy backend it also runs a basic health
check against the database.
"""

from src.infrastructure.container import (
    build_database_adapter,
    build_finance_repository,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import FinanceSettings


def main() -> None:
    """Run basic reachability checks against the configured store."""
    logger = get_app_logger()
    settings = FinanceSettings.from_env()

    if settings.backend == "sqlalchemy":
        adapter = build_database_adapter(settings)
        engine = adapter.get_finance_engine()
        logger.info(f"Finance DB: {engine.url}")
        with engine.connect() as conn:
            conn.exec_driver_sql("SELECT 1")
        repository = build_finance_repository(settings, db_port=adapter)
    else:
        logger.info(f"Finance file: {settings.data_file}")
        repository = build_finance_repository(settings)

    snapshot = repository.load_snapshot()
    logger.info(
        f"Store is reachable: {len(snapshot.categories)} categories, "
        f"{len(snapshot.transactions)} transactions, "
        f"{len(snapshot.templates)} templates, "
        f"{len(snapshot.loans)} loans, "
        f"{len(snapshot.loan_payments)} loan payments."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
