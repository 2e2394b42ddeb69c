"""Helpers for Decimal normalization."""

from decimal import Decimal, InvalidOperation


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, JSON or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def parse_decimal(text: str | None) -> Decimal | None:
    """Parse user-entered text into a finite Decimal.

    Args:
        text: Raw text, e.g. ``"12.50"``.

    Returns:
        Decimal | None: Parsed value, or None when the text is empty,
        malformed, NaN or infinite.
    """
    if text is None:
        return None
    cleaned = str(text).strip()
    if not cleaned:
        return None
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


__all__ = ["coerce_decimal", "parse_decimal"]
