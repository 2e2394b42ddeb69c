"""Shared helpers turning validated forms into domain records."""

from collections.abc import Sequence
from datetime import datetime, timezone
from decimal import Decimal
from typing import Protocol, TypeVar
from uuid import uuid4

from src.domain.constants import (
    EXPENSE,
    LENT,
    LOAN_DIRECTIONS,
    TRANSACTION_KINDS,
)
from src.domain.exceptions import (
    EntityNotFoundError,
    InvalidLoanTermError,
    RecordValidationError,
)
from src.domain.models import (
    Loan,
    LoanForm,
    Transaction,
    TransactionForm,
    TransactionTemplate,
)
from src.domain.services.amortization import (
    compute_monthly_payment,
    first_payment_date,
)
from src.domain.services.normalization import (
    normalize_kind,
    normalize_name,
    normalize_timestamp,
)
from src.domain.services.validation import (
    parse_amount,
    parse_term_months,
    validate_loan,
    validate_transaction,
)


class _Identified(Protocol):
    id: str


RecordT = TypeVar("RecordT", bound=_Identified)


def new_record_id() -> str:
    """Return a fresh opaque record identifier."""
    return uuid4().hex


def utc_now() -> datetime:
    """Return the current timestamp in UTC."""
    return datetime.now(timezone.utc)


def index_of(records: Sequence[RecordT], record_id: str, label: str) -> int:
    """Return the position of a record by id.

    Raises:
        EntityNotFoundError: If no record carries the id.
    """
    for index, record in enumerate(records):
        if record.id == record_id:
            return index
    raise EntityNotFoundError(f"Unknown {label}: {record_id}")


def _checked_transaction_fields(
    form: TransactionForm,
    label: str,
) -> tuple[str, Decimal, str, str | None]:
    kind = normalize_kind(form.kind)
    if kind not in TRANSACTION_KINDS:
        raise RecordValidationError(f"Unknown {label} kind: {form.kind!r}")
    if not validate_transaction(
        kind,
        form.amount_text,
        form.category_name,
        form.revenue_stream,
    ):
        raise RecordValidationError(
            f"Incomplete {label}: amount, category and, for expenses, "
            "a revenue stream are required"
        )
    revenue_stream = (
        normalize_name(form.revenue_stream) if kind == EXPENSE else None
    )
    return (
        kind,
        parse_amount(form.amount_text),
        normalize_name(form.category_name) or "",
        revenue_stream,
    )


def transaction_from_form(
    form: TransactionForm,
    *,
    record_id: str,
    fallback_date: datetime,
) -> Transaction:
    """Build a transaction from a form that passes the validation gate.

    Args:
        form: Raw transaction fields.
        record_id: Identifier of the record.
        fallback_date: Timestamp used when the form carries no date.

    Returns:
        Transaction: The new record.

    Raises:
        RecordValidationError: If the form is rejected.
    """
    kind, amount, category_name, revenue_stream = _checked_transaction_fields(
        form,
        "transaction",
    )
    return Transaction(
        id=record_id,
        kind=kind,
        amount=amount,
        category_name=category_name,
        description=form.description.strip(),
        date=normalize_timestamp(form.date or fallback_date),
        revenue_stream=revenue_stream,
    )


def template_from_form(
    form: TransactionForm,
    *,
    record_id: str,
) -> TransactionTemplate:
    """Build a template from a form that passes the validation gate.

    Raises:
        RecordValidationError: If the form is rejected.
    """
    kind, amount, category_name, revenue_stream = _checked_transaction_fields(
        form,
        "template",
    )
    return TransactionTemplate(
        id=record_id,
        kind=kind,
        amount=amount,
        category_name=category_name,
        description=form.description.strip(),
        revenue_stream=revenue_stream,
    )


def loan_from_form(
    form: LoanForm,
    *,
    record_id: str,
    repaid_principal: Decimal = Decimal("0"),
    next_payment_date: datetime | None = None,
) -> Loan:
    """Build a loan from a form that passes the validation gate.

    The monthly payment is computed here once and kept fixed afterwards.

    Args:
        form: Raw loan fields.
        record_id: Identifier of the record.
        repaid_principal: Principal already repaid through payments.
        next_payment_date: Due date to keep; defaults to one month after
            the start date.

    Returns:
        Loan: The new record.

    Raises:
        RecordValidationError: If the form is rejected, including rates
            and terms with no finite monthly payment.
    """
    direction = normalize_kind(form.direction)
    if direction not in LOAN_DIRECTIONS:
        raise RecordValidationError(
            f"Unknown loan direction: {form.direction!r}"
        )
    if not validate_loan(
        direction,
        form.name,
        form.principal_text,
        form.interest_rate_text,
        form.term_months_text,
        form.revenue_stream,
    ):
        raise RecordValidationError(
            "Incomplete loan: name, principal, interest rate, a positive "
            "term and, for borrowed loans, a revenue stream are required"
        )
    principal = parse_amount(form.principal_text)
    rate = parse_amount(form.interest_rate_text)
    term_months = parse_term_months(form.term_months_text)
    try:
        monthly_payment = compute_monthly_payment(principal, rate, term_months)
    except InvalidLoanTermError as exc:
        raise RecordValidationError(str(exc)) from exc
    start_date = normalize_timestamp(form.start_date)
    return Loan(
        id=record_id,
        direction=direction,
        name=normalize_name(form.name) or "",
        principal_amount=principal,
        current_balance=max(Decimal("0"), principal - repaid_principal),
        interest_rate=rate,
        term_months=term_months,
        monthly_payment=monthly_payment,
        start_date=start_date,
        next_payment_date=next_payment_date or first_payment_date(start_date),
        revenue_stream_allocation=(
            None if direction == LENT else normalize_name(form.revenue_stream)
        ),
        category_name=normalize_name(form.category_name) or "",
        description=form.description.strip(),
    )


__all__ = [
    "new_record_id",
    "utc_now",
    "index_of",
    "transaction_from_form",
    "template_from_form",
    "loan_from_form",
]
