"""Shared fixtures for use case tests."""

from datetime import datetime, timezone
from itertools import count
from unittest.mock import MagicMock

import pytest

from src.infrastructure.json_repository import JsonFileFinanceRepository

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def repository(tmp_path, logger) -> JsonFileFinanceRepository:
    """A JSON repository seeded with the default categories."""
    return JsonFileFinanceRepository(tmp_path / "finance.json", logger=logger)


@pytest.fixture
def id_factory():
    """Deterministic ids: id-1, id-2, ..."""
    counter = count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def clock():
    return lambda: NOW
