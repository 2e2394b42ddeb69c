"""Tests for the SQLAlchemy finance repository on in-memory SQLite."""

from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
import threading
import time
from unittest.mock import MagicMock

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError

from src.domain.defaults import default_categories, default_templates
from src.domain.models import (
    FinanceSnapshot,
    Loan,
    LoanPayment,
    Transaction,
)
from src.infrastructure.db import _create_engine
from src.infrastructure.sqlalchemy_repository import (
    SqlAlchemyFinanceRepository,
    build_metadata,
)

WHEN = datetime(2024, 2, 15, tzinfo=timezone.utc)


class _EngineAdapter:
    def __init__(self, db_url: str = "sqlite://") -> None:
        self.engine = _create_engine(db_url)

    def get_finance_engine(self):
        return self.engine


@pytest.fixture
def repository() -> SqlAlchemyFinanceRepository:
    repo = SqlAlchemyFinanceRepository(
        _EngineAdapter(),
        table_prefix="test_",
        logger=MagicMock(),
    )
    repo.ensure_schema()
    return repo


def _loan() -> Loan:
    return Loan(
        id="loan-1",
        direction="borrowed",
        name="Car",
        principal_amount=Decimal("1000"),
        current_balance=Decimal("921.15"),
        interest_rate=Decimal("12"),
        term_months=12,
        monthly_payment=Decimal("88.84878867834166"),
        start_date=datetime(2024, 1, 15, tzinfo=timezone.utc),
        next_payment_date=WHEN,
        revenue_stream_allocation="Salary",
        description="Dealer financing",
    )


def _transaction(tx_id: str) -> Transaction:
    return Transaction(
        id=tx_id,
        kind="expense",
        amount=Decimal("88.85"),
        category_name="Loan Payment",
        description="Car - Payment",
        date=WHEN,
        revenue_stream="Salary",
    )


def test_build_metadata_prefixes_every_table() -> None:
    metadata = build_metadata("misi_")

    assert set(metadata.tables) == {
        "misi_category",
        "misi_transaction",
        "misi_transaction_template",
        "misi_loan",
        "misi_loan_payment",
        "misi_write_lock",
    }
    loan_table = metadata.tables["misi_loan"]
    assert loan_table.c.id.primary_key
    assert "position" in loan_table.c


def test_ensure_schema_creates_tables_and_seeds_once(repository) -> None:
    engine = repository._db_port.get_finance_engine()
    assert "test_loan_payment" in inspect(engine).get_table_names()

    repository.ensure_schema()
    snapshot = repository.load_snapshot()

    assert snapshot.categories == default_categories()
    assert snapshot.templates == default_templates()
    assert snapshot.transactions == []


def test_save_snapshot_round_trips_records_in_order(repository) -> None:
    """Decimals keep full precision and insertion order is preserved."""
    payment = LoanPayment(
        id="pay-1",
        loan_id="loan-1",
        amount=Decimal("88.85"),
        principal_amount=Decimal("78.85"),
        interest_amount=Decimal("10.00"),
        date=WHEN,
        revenue_stream="Salary",
    )
    snapshot = FinanceSnapshot(
        transactions=[_transaction("tx-b"), _transaction("tx-a")],
        categories=default_categories()[:2],
        loans=[_loan()],
        loan_payments=[payment],
    )

    repository.save_snapshot(snapshot)

    assert repository.load_snapshot() == snapshot


def test_apply_runs_in_one_transaction(repository) -> None:
    """A write failure rolls back the whole mutation."""
    repository.apply(
        lambda snapshot: replace(
            snapshot,
            transactions=[_transaction("tx-1")],
        )
    )

    with pytest.raises(IntegrityError):
        repository.apply(
            lambda snapshot: replace(
                snapshot,
                transactions=[_transaction("dup"), _transaction("dup")],
                loans=[_loan()],
            )
        )

    snapshot = repository.load_snapshot()
    assert [t.id for t in snapshot.transactions] == ["tx-1"]
    assert snapshot.loans == []


def _file_repository(db_url: str) -> SqlAlchemyFinanceRepository:
    repo = SqlAlchemyFinanceRepository(
        _EngineAdapter(db_url),
        table_prefix="test_",
        logger=MagicMock(),
    )
    repo.ensure_schema()
    return repo


def _add_transaction(tx_id: str):
    def _mutate(snapshot: FinanceSnapshot) -> FinanceSnapshot:
        return replace(
            snapshot,
            transactions=[*snapshot.transactions, _transaction(tx_id)],
        )

    return _mutate


def _run_overlapping_writes(first, second) -> None:
    """Start a write on ``second`` while ``first`` is inside its mutation."""
    inside = threading.Event()
    release = threading.Event()
    add_first = _add_transaction("tx-0")

    def _slow_mutation(snapshot: FinanceSnapshot) -> FinanceSnapshot:
        inside.set()
        release.wait(timeout=5)
        return add_first(snapshot)

    slow = threading.Thread(target=first.apply, args=(_slow_mutation,))
    slow.start()
    assert inside.wait(timeout=5)
    fast = threading.Thread(
        target=second.apply,
        args=(_add_transaction("tx-1"),),
    )
    fast.start()
    time.sleep(0.2)
    release.set()
    slow.join(timeout=10)
    fast.join(timeout=10)


def test_apply_serializes_threads_sharing_a_repository(tmp_path) -> None:
    repo = _file_repository(f"sqlite:///{tmp_path / 'finance.db'}")

    _run_overlapping_writes(repo, repo)

    ids = [t.id for t in repo.load_snapshot().transactions]
    assert ids == ["tx-0", "tx-1"]


def test_apply_serializes_repositories_sharing_a_database(tmp_path) -> None:
    db_url = f"sqlite:///{tmp_path / 'finance.db'}"
    first = _file_repository(db_url)
    second = _file_repository(db_url)

    _run_overlapping_writes(first, second)

    ids = [t.id for t in second.load_snapshot().transactions]
    assert ids == ["tx-0", "tx-1"]


def test_ensure_schema_seeds_a_single_lock_row(repository) -> None:
    repository.ensure_schema()
    engine = repository._db_port.get_finance_engine()

    with engine.connect() as conn:
        rows = conn.execute(
            repository._table("write_lock").select()
        ).all()

    assert [row.id for row in rows] == [1]
