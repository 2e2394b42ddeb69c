"""Finance repository backed by a local JSON document."""

import json
import os
from pathlib import Path
import tempfile
import threading
from typing import Any

from src.application.ports.finance_repository import (
    FinanceRepositoryPort,
    SnapshotMutation,
)
from src.domain.defaults import default_categories, default_templates
from src.domain.models import FinanceSnapshot
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.record_codec import (
    STORAGE_KEYS,
    record_from_row,
    record_to_row,
)

_SNAPSHOT_FIELDS = {
    "financial-transactions": "transactions",
    "financial-templates": "templates",
    "financial-categories": "categories",
    "financial-loans": "loans",
    "financial-loan-payments": "loan_payments",
}


class JsonFileFinanceRepository(FinanceRepositoryPort):
    """Repository storing every collection in one JSON document.

    Each collection lives under its own key. A missing key, or one whose
    content cannot be decoded, falls back to its default: seeded categories
    and templates, empty lists otherwise.
    """

    def __init__(self, path: Path | str, logger=None) -> None:
        """Initialize the repository.

        Args:
            path: Location of the JSON document.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._path = Path(path)
        self._logger = logger or get_app_logger()
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        """Return the location of the JSON document."""
        return self._path

    def load_snapshot(self) -> FinanceSnapshot:
        """Return every stored collection."""
        with self._lock:
            document = self._read_document()
        values: dict[str, list] = {}
        for key, field_name in _SNAPSHOT_FIELDS.items():
            values[field_name] = self._decode_collection(document, key)
        return FinanceSnapshot(**values)

    def save_snapshot(self, snapshot: FinanceSnapshot) -> None:
        """Replace the JSON document with the snapshot."""
        with self._lock:
            self._write_document(snapshot)

    def apply(self, mutation: SnapshotMutation) -> FinanceSnapshot:
        """Load, mutate and save under the repository lock.

        Nothing is written when the mutation raises.
        """
        with self._lock:
            updated = mutation(self.load_snapshot())
            self._write_document(updated)
        return updated

    def _read_document(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            self._logger.error(f"Error reading {self._path}: {exc}")
            return {}
        if not isinstance(document, dict):
            self._logger.error(
                f"Error reading {self._path}: expected a JSON object"
            )
            return {}
        return document

    def _decode_collection(self, document: dict[str, Any], key: str) -> list:
        if key not in document:
            return self._default_collection(key)
        record_type = STORAGE_KEYS[key]
        try:
            return [record_from_row(record_type, row) for row in document[key]]
        except (KeyError, TypeError, ValueError) as exc:
            self._logger.error(f"Error parsing {key}: {exc}")
            return self._default_collection(key)

    @staticmethod
    def _default_collection(key: str) -> list:
        if key == "financial-categories":
            return default_categories()
        if key == "financial-templates":
            return default_templates()
        return []

    def _write_document(self, snapshot: FinanceSnapshot) -> None:
        document = {
            key: [
                record_to_row(record)
                for record in getattr(snapshot, field_name)
            ]
            for key, field_name in _SNAPSHOT_FIELDS.items()
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(document, handle, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        self._logger.info(
            f"Saved {len(snapshot.transactions)} transactions and "
            f"{len(snapshot.loans)} loans to {self._path}"
        )


__all__ = ["JsonFileFinanceRepository"]
