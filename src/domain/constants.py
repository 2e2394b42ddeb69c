"""Domain constants for revenue streams and loans."""

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_KINDS = (INCOME, EXPENSE)

BORROWED = "borrowed"
LENT = "lent"
LOAN_DIRECTIONS = (BORROWED, LENT)

PAYMENT_INTERVAL_DAYS = 30
MONTHS_PER_YEAR = 12

LOAN_PAYMENT_CATEGORY = "Loan Payment"
DEFAULT_CATEGORY_COLOR = "bg-slate-400"


__all__ = [
    "INCOME",
    "EXPENSE",
    "TRANSACTION_KINDS",
    "BORROWED",
    "LENT",
    "LOAN_DIRECTIONS",
    "PAYMENT_INTERVAL_DAYS",
    "MONTHS_PER_YEAR",
    "LOAN_PAYMENT_CATEGORY",
    "DEFAULT_CATEGORY_COLOR",
]
