"""Port for loading and persisting finance records."""

from collections.abc import Callable
from typing import Protocol

from src.domain.models import FinanceSnapshot

SnapshotMutation = Callable[[FinanceSnapshot], FinanceSnapshot]


class FinanceRepositoryPort(Protocol):
    """Port exposing the storage collaborator of the finance engine.

    Implementations own writer serialization: ``apply`` must run its
    load, mutation and save as a single unit.
    """

    def load_snapshot(self) -> FinanceSnapshot:
        """Return every stored collection."""

    def save_snapshot(self, snapshot: FinanceSnapshot) -> None:
        """Replace every stored collection with the given snapshot."""

    def apply(self, mutation: SnapshotMutation) -> FinanceSnapshot:
        """Load, mutate and save atomically, returning the saved snapshot."""


__all__ = ["FinanceRepositoryPort", "SnapshotMutation"]
