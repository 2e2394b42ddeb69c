"""Raw form inputs handed over by presentation adapters."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TransactionForm:
    """User-entered transaction or template fields, still unparsed."""

    kind: str
    amount_text: str
    category_name: str
    description: str = ""
    revenue_stream: str | None = None
    date: datetime | None = None


@dataclass(frozen=True)
class LoanForm:
    """User-entered loan fields, still unparsed."""

    direction: str
    name: str
    principal_text: str
    interest_rate_text: str
    term_months_text: str
    start_date: datetime
    revenue_stream: str | None = None
    category_name: str = ""
    description: str = ""


__all__ = ["TransactionForm", "LoanForm"]
