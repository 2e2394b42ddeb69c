"""Tests for the infrastructure.db module."""

import pytest
from sqlalchemy.pool import StaticPool

from src.infrastructure import db as db_module


def test_get_env_var_reads_environment(monkeypatch):
    """_get_env_var should load .env and return the requested value."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("FINANCE_DB_URL", "postgresql://finance")

    assert db_module._get_env_var("FINANCE_DB_URL") == "postgresql://finance"


def test_get_env_var_raises_when_missing(monkeypatch):
    """Missing env vars should raise a RuntimeError."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.delenv("FINANCE_DB_URL", raising=False)

    with pytest.raises(RuntimeError):
        db_module._get_env_var("FINANCE_DB_URL")


def test_create_engine_pools_server_databases(monkeypatch):
    """Server URLs should get a QueuePool with health checks."""
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured["db_url"] = db_url
        captured["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    engine = db_module._create_engine("postgresql://finance")

    assert engine == "engine"
    assert captured["db_url"] == "postgresql://finance"
    assert captured["kwargs"]["poolclass"] is db_module.QueuePool
    assert captured["kwargs"]["pool_size"] == 5
    assert captured["kwargs"]["max_overflow"] == 5
    assert captured["kwargs"]["pool_pre_ping"] is True
    assert captured["kwargs"]["future"] is True


def test_create_engine_shares_in_memory_sqlite_connection():
    """In-memory SQLite should keep one connection for every checkout."""
    engine = db_module._create_engine("sqlite://")

    assert isinstance(engine.pool, StaticPool)
    with engine.connect() as conn:
        conn.exec_driver_sql("CREATE TABLE probe (id INTEGER)")
    with engine.connect() as conn:
        rows = conn.exec_driver_sql("SELECT count(*) FROM probe").scalar()
    assert rows == 0


def test_get_finance_engine_caches_engine(monkeypatch):
    """get_finance_engine should memoize the created engine."""
    monkeypatch.setattr(db_module, "_finance_engine", None)
    created = []

    def fake_create_engine(url):
        created.append(url)
        return f"engine:{url}"

    monkeypatch.setattr(db_module, "_create_engine", fake_create_engine)
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("FINANCE_DB_URL", "postgresql://finance")

    engine_one = db_module.get_finance_engine()
    engine_two = db_module.get_finance_engine()

    assert engine_one is engine_two
    assert engine_one == "engine:postgresql://finance"
    assert created == ["postgresql://finance"]


def test_adapter_proxies_global_engine(monkeypatch):
    """Without a URL the adapter should return the shared engine."""
    monkeypatch.setattr(db_module, "get_finance_engine", lambda: "shared")

    adapter = db_module.SqlAlchemyDatabaseEngineAdapter()

    assert adapter.get_finance_engine() == "shared"


def test_adapter_with_url_builds_its_own_engine_once(monkeypatch):
    created = []

    def fake_create_engine(url):
        created.append(url)
        return f"engine:{url}"

    monkeypatch.setattr(db_module, "_create_engine", fake_create_engine)
    adapter = db_module.SqlAlchemyDatabaseEngineAdapter("sqlite://")

    assert adapter.get_finance_engine() == "engine:sqlite://"
    assert adapter.get_finance_engine() == "engine:sqlite://"
    assert created == ["sqlite://"]
