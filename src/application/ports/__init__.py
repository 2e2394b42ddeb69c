"""Application ports package."""

from .database import DatabaseEnginePort
from .finance_repository import FinanceRepositoryPort, SnapshotMutation

__all__ = [
    "DatabaseEnginePort",
    "FinanceRepositoryPort",
    "SnapshotMutation",
]
