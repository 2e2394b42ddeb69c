"""SQLAlchemy-backed repository for finance records."""

from dataclasses import fields
import threading

from sqlalchemy import (
    Column,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    delete,
    func,
    insert,
    select,
    update,
)
from sqlalchemy.engine import Connection

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.finance_repository import (
    FinanceRepositoryPort,
    SnapshotMutation,
)
from src.domain.defaults import default_categories, default_templates
from src.domain.models import (
    Category,
    FinanceSnapshot,
    Loan,
    LoanPayment,
    Transaction,
    TransactionTemplate,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.record_codec import record_from_row, record_to_row

_TABLES = (
    ("category", "categories", Category),
    ("transaction", "transactions", Transaction),
    ("transaction_template", "templates", TransactionTemplate),
    ("loan", "loans", Loan),
    ("loan_payment", "loan_payments", LoanPayment),
)

_TEXT_FIELDS = {"description"}

_LOCK_TABLE = "write_lock"


def build_metadata(table_prefix: str = "misi_") -> MetaData:
    """Describe one table per record type.

    Columns mirror the record fields. Amounts and timestamps are stored
    as text and a ``position`` column keeps insertion order. A one-row
    ``write_lock`` table is updated first by every writer.

    Args:
        table_prefix: Prefix prepended to every table name.

    Returns:
        MetaData: Table definitions.
    """
    metadata = MetaData()
    for table_name, _, record_type in _TABLES:
        columns = [Column("position", Integer, nullable=False)]
        for field in fields(record_type):
            if field.name == "id":
                columns.append(Column("id", String(255), primary_key=True))
            elif field.type is int:
                columns.append(Column(field.name, Integer, nullable=False))
            elif field.name in _TEXT_FIELDS:
                columns.append(Column(field.name, Text, nullable=False))
            else:
                columns.append(Column(field.name, String(255)))
        Table(f"{table_prefix}{table_name}", metadata, *columns)
    Table(
        f"{table_prefix}{_LOCK_TABLE}",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("version", Integer, nullable=False),
    )
    return metadata


class SqlAlchemyFinanceRepository(FinanceRepositoryPort):
    """Repository storing each collection in its own table.

    Every save rewrites all tables inside a single database transaction.
    Writers are serialized by a thread lock within the process and by an
    update of the ``write_lock`` row, issued before any read, across
    processes.
    """

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        table_prefix: str = "misi_",
        logger=None,
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the finance engine.
            table_prefix: Prefix prepended to every table name.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._table_prefix = table_prefix
        self._metadata = build_metadata(table_prefix)
        self._logger = logger or get_app_logger()
        self._lock = threading.RLock()

    def _table(self, table_name: str) -> Table:
        return self._metadata.tables[f"{self._table_prefix}{table_name}"]

    def ensure_schema(self) -> None:
        """Create missing tables and seed an empty store with defaults."""
        engine = self._db_port.get_finance_engine()
        self._metadata.create_all(engine)
        with engine.begin() as conn:
            if not self._count(conn, _LOCK_TABLE):
                conn.execute(
                    insert(self._table(_LOCK_TABLE)), {"id": 1, "version": 0}
                )
            if self._count(conn, "category"):
                return
            self._write_rows(conn, "category", default_categories())
            self._write_rows(conn, "transaction_template", default_templates())
        self._logger.info("Seeded default categories and templates")

    def _count(self, conn: Connection, table_name: str) -> int:
        return conn.execute(
            select(func.count()).select_from(self._table(table_name))
        ).scalar_one()

    def load_snapshot(self) -> FinanceSnapshot:
        """Return every stored collection."""
        engine = self._db_port.get_finance_engine()
        with engine.connect() as conn:
            return self._read_snapshot(conn)

    def save_snapshot(self, snapshot: FinanceSnapshot) -> None:
        """Replace every table with the snapshot in one transaction."""
        engine = self._db_port.get_finance_engine()
        with self._lock, engine.begin() as conn:
            self._acquire_write_lock(conn)
            self._write_snapshot(conn, snapshot)

    def apply(self, mutation: SnapshotMutation) -> FinanceSnapshot:
        """Read, mutate and rewrite inside one database transaction.

        The write lock is taken before the snapshot is read. The
        transaction rolls back when the mutation raises.
        """
        engine = self._db_port.get_finance_engine()
        with self._lock, engine.begin() as conn:
            self._acquire_write_lock(conn)
            updated = mutation(self._read_snapshot(conn))
            self._write_snapshot(conn, updated)
        return updated

    def _acquire_write_lock(self, conn: Connection) -> None:
        lock = self._table(_LOCK_TABLE)
        conn.execute(update(lock).values(version=lock.c.version + 1))

    def _read_snapshot(self, conn: Connection) -> FinanceSnapshot:
        values = {}
        for table_name, field_name, record_type in _TABLES:
            table = self._table(table_name)
            rows = conn.execute(
                select(table).order_by(table.c.position)
            ).all()
            values[field_name] = [
                record_from_row(record_type, dict(row._mapping))
                for row in rows
            ]
        return FinanceSnapshot(**values)

    def _write_snapshot(
        self,
        conn: Connection,
        snapshot: FinanceSnapshot,
    ) -> None:
        for table_name, _, _ in _TABLES:
            conn.execute(delete(self._table(table_name)))
        for table_name, field_name, _ in _TABLES:
            self._write_rows(conn, table_name, getattr(snapshot, field_name))
        self._logger.info(
            f"Saved {len(snapshot.transactions)} transactions and "
            f"{len(snapshot.loans)} loans"
        )

    def _write_rows(self, conn: Connection, table_name: str, records) -> None:
        payload = [
            {**record_to_row(record), "position": position}
            for position, record in enumerate(records)
        ]
        if payload:
            conn.execute(insert(self._table(table_name)), payload)


__all__ = ["SqlAlchemyFinanceRepository", "build_metadata"]
