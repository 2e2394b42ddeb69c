"""Domain normalization helpers."""

from datetime import date, datetime, time, timezone


def normalize_name(value: str | None) -> str | None:
    """Normalize category and revenue stream names.

    Args:
        value: Raw name from a form or a repository.

    Returns:
        str | None: Stripped name, or None when blank.
    """
    if not value:
        return None
    cleaned = value.strip()
    return cleaned or None


def normalize_kind(value: str | None) -> str:
    """Normalize transaction kinds and loan directions.

    Args:
        value: Raw kind such as ``" Expense "``.

    Returns:
        str: Lower-cased kind, empty when missing.
    """
    if not value:
        return ""
    return value.strip().lower()


def normalize_timestamp(value: datetime | date) -> datetime:
    """Return a timezone-aware timestamp.

    Plain dates become midnight and naive timestamps are taken as UTC.

    Args:
        value: Date or timestamp from a form or a repository.

    Returns:
        datetime: Aware timestamp.
    """
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


__all__ = ["normalize_name", "normalize_kind", "normalize_timestamp"]
