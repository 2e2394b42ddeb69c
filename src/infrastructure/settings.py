"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

from src.infrastructure.logging.logger import get_app_logger
from src.utils.utils import get_project_root

SUPPORTED_BACKENDS = ("json", "sqlalchemy")


@dataclass(frozen=True)
class FinanceSettings:
    """Settings for selecting and locating the finance store.

    Attributes:
        backend: Store identifier (json or sqlalchemy).
        data_file: Path to the JSON document used by the json backend.
        db_url: Optional SQLAlchemy URL used by the sqlalchemy backend.
        table_prefix: Prefix prepended to every table name.
        currency_code: Currency used when formatting amounts.
    """

    backend: str = "json"
    data_file: Optional[Path] = None
    db_url: Optional[str] = None
    table_prefix: str = "misi_"
    currency_code: str = "EUR"

    @classmethod
    def from_env(cls) -> "FinanceSettings":
        """Build settings from environment variables.

        Returns:
            FinanceSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        backend = os.getenv("FINANCE_BACKEND", "json").strip().lower()
        if backend not in SUPPORTED_BACKENDS:
            logger.warning(
                f"Unknown FINANCE_BACKEND '{backend}', falling back to json"
            )
            backend = "json"
        raw_file = os.getenv("FINANCE_DATA_FILE")
        data_file = (
            cls._normalize_path(raw_file)
            if raw_file
            else cls._default_data_file()
        )
        return cls(
            backend=backend,
            data_file=data_file,
            db_url=os.getenv("FINANCE_DB_URL") or None,
            table_prefix=os.getenv("FINANCE_TABLE_PREFIX", "misi_"),
            currency_code=os.getenv("FINANCE_CURRENCY", "EUR").strip().upper(),
        )

    @staticmethod
    def _normalize_path(raw_path: str) -> Path:
        """Normalize the data file path, accepting ``file://`` URIs.

        Args:
            raw_path: Raw file path string.

        Returns:
            Path: Absolute filesystem path.
        """
        parsed = urlparse(raw_path)
        if parsed.scheme == "file":
            raw_path = unquote(parsed.path)
        return Path(raw_path).expanduser().resolve()

    @staticmethod
    def _default_data_file() -> Path:
        """Return the default JSON store under the project data/ folder."""
        return get_project_root() / "data" / "finance.json"


__all__ = ["FinanceSettings", "SUPPORTED_BACKENDS"]
