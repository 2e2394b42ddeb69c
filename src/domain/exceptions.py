"""Exception hierarchy for the finance domain."""


class FinanceError(Exception):
    """Base exception for all finance tracker errors."""


class RecordValidationError(FinanceError):
    """Raised when a submitted form does not pass the validation gate."""


class EntityNotFoundError(FinanceError):
    """Raised when a referenced transaction, template or loan is missing."""


class DuplicateCategoryError(FinanceError):
    """Raised when a category with the same name and kind already exists."""


class InvalidLoanTermError(FinanceError, ValueError):
    """Raised when loan terms cannot be amortized.

    Covers a term that is not a positive number of months and a rate and
    term whose monthly payment is not finite.
    """


__all__ = [
    "FinanceError",
    "RecordValidationError",
    "EntityNotFoundError",
    "DuplicateCategoryError",
    "InvalidLoanTermError",
]
