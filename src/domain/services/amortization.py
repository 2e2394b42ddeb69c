"""Loan amortization and payment application."""

import calendar
from dataclasses import replace
from datetime import datetime, timedelta
from decimal import Decimal, DivisionByZero, InvalidOperation, Overflow
from logging import Logger

from src.domain.constants import (
    EXPENSE,
    LOAN_PAYMENT_CATEGORY,
    MONTHS_PER_YEAR,
    PAYMENT_INTERVAL_DAYS,
)
from src.domain.exceptions import InvalidLoanTermError
from src.domain.models import (
    Loan,
    LoanPayment,
    LoanPaymentOutcome,
    PaymentSplit,
    Transaction,
)
from src.utils.decimal_utils import coerce_decimal

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    """Convert an annual percent rate into a monthly fraction."""
    return coerce_decimal(annual_rate_percent) / _HUNDRED / MONTHS_PER_YEAR


def compute_monthly_payment(
    principal: Decimal,
    annual_rate_percent: Decimal,
    term_months: int,
) -> Decimal:
    """Compute the fixed monthly payment of an amortized loan.

    A zero rate falls back to straight-line repayment. The result is not
    rounded.

    Args:
        principal: Amount borrowed or lent.
        annual_rate_percent: Annual interest rate in percent.
        term_months: Number of monthly installments.

    Returns:
        Decimal: Monthly payment.

    Raises:
        InvalidLoanTermError: If term_months is not strictly positive, or
            if the rate and term give no finite payment.
    """
    if term_months <= 0:
        raise InvalidLoanTermError(
            f"Loan term must be a positive number of months: {term_months}"
        )
    principal = coerce_decimal(principal)
    rate = monthly_rate(annual_rate_percent)
    if rate == 0:
        return principal / term_months
    try:
        growth = (1 + rate) ** term_months
        return principal * rate * growth / (growth - 1)
    except (DivisionByZero, InvalidOperation, Overflow) as exc:
        raise InvalidLoanTermError(
            f"No finite monthly payment for rate {annual_rate_percent}% "
            f"over {term_months} months"
        ) from exc


def split_payment(
    payment_amount: Decimal,
    current_balance: Decimal,
    annual_rate_percent: Decimal,
) -> PaymentSplit:
    """Split a payment into its interest and principal portions.

    Interest accrues on the current balance for one month and is not
    capped by the payment: a payment smaller than the interest due repays
    no principal while the full interest is still reported.

    Args:
        payment_amount: Amount paid.
        current_balance: Outstanding balance before the payment.
        annual_rate_percent: Annual interest rate in percent.

    Returns:
        PaymentSplit: Interest and principal portions.
    """
    interest = coerce_decimal(current_balance) * monthly_rate(
        annual_rate_percent
    )
    principal = max(_ZERO, coerce_decimal(payment_amount) - interest)
    return PaymentSplit(interest_portion=interest, principal_portion=principal)


def add_months(moment: datetime, months: int) -> datetime:
    """Shift a timestamp by calendar months, clamping to the month end."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def first_payment_date(start_date: datetime) -> datetime:
    """Return the first due date of a loan, one month after its start."""
    return add_months(start_date, 1)


def advance_payment_date(next_payment_date: datetime) -> datetime:
    """Return the due date following a recorded payment."""
    return next_payment_date + timedelta(days=PAYMENT_INTERVAL_DAYS)


def apply_loan_payment(
    loan: Loan,
    payment_amount: Decimal,
    revenue_stream: str | None,
    paid_at: datetime,
    *,
    payment_id: str,
    transaction_id: str,
    logger: Logger | None = None,
) -> LoanPaymentOutcome:
    """Build every record produced by a payment against a loan.

    Args:
        loan: Loan being paid.
        payment_amount: Amount paid.
        revenue_stream: Income stream funding the payment.
        paid_at: Payment timestamp.
        payment_id: Identifier of the new payment record.
        transaction_id: Identifier of the linked expense transaction.
        logger: Optional logger used for warnings.

    Returns:
        LoanPaymentOutcome: Updated loan, payment record and expense.
    """
    amount = coerce_decimal(payment_amount)
    split = split_payment(amount, loan.current_balance, loan.interest_rate)
    if logger is not None and split.interest_portion > amount:
        logger.warning(
            f"Payment of {amount} on loan {loan.id} is below the interest "
            f"due ({split.interest_portion}); no principal repaid"
        )
    updated_loan = replace(
        loan,
        current_balance=max(
            _ZERO,
            loan.current_balance - split.principal_portion,
        ),
        next_payment_date=advance_payment_date(loan.next_payment_date),
    )
    payment = LoanPayment(
        id=payment_id,
        loan_id=loan.id,
        amount=amount,
        principal_amount=split.principal_portion,
        interest_amount=split.interest_portion,
        date=paid_at,
        revenue_stream=revenue_stream,
    )
    transaction = Transaction(
        id=transaction_id,
        kind=EXPENSE,
        amount=amount,
        category_name=LOAN_PAYMENT_CATEGORY,
        description=f"{loan.name} - Payment",
        date=paid_at,
        revenue_stream=revenue_stream,
    )
    return LoanPaymentOutcome(
        loan=updated_loan,
        payment=payment,
        transaction=transaction,
    )


__all__ = [
    "monthly_rate",
    "compute_monthly_payment",
    "split_payment",
    "add_months",
    "first_payment_date",
    "advance_payment_date",
    "apply_loan_payment",
]
