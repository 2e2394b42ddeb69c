"""Seed categories and templates for a fresh store."""

from decimal import Decimal

from src.domain.constants import EXPENSE, INCOME
from src.domain.models import Category, TransactionTemplate


_INCOME_CATEGORIES = (
    ("1", "Salary", "bg-emerald-400"),
    ("2", "Freelance", "bg-cyan-400"),
    ("3", "Business", "bg-blue-400"),
    ("4", "Investments", "bg-indigo-400"),
    ("5", "Other Income", "bg-slate-400"),
)

_EXPENSE_CATEGORIES = (
    ("6", "Housing", "bg-rose-400"),
    ("7", "Transportation", "bg-orange-400"),
    ("8", "Food & Dining", "bg-pink-400"),
    ("9", "Utilities", "bg-purple-400"),
    ("10", "Healthcare", "bg-teal-400"),
    ("11", "Entertainment", "bg-cyan-400"),
    ("12", "Shopping", "bg-violet-400"),
    ("13", "Other Expenses", "bg-slate-400"),
)

_TEMPLATES = (
    ("t1", "4.50", "Food & Dining", "Coffee", "Salary"),
    ("t2", "45.00", "Transportation", "Gas Fill-up", "Salary"),
    ("t3", "120.00", "Food & Dining", "Groceries", "Salary"),
    ("t4", "12.00", "Food & Dining", "Lunch", "Freelance"),
    ("t5", "25.00", "Entertainment", "Movie Ticket", "Freelance"),
)


def default_categories() -> list[Category]:
    """Return the income categories followed by the expense categories."""
    categories = [
        Category(id=cat_id, name=name, kind=INCOME, color=color)
        for cat_id, name, color in _INCOME_CATEGORIES
    ]
    categories.extend(
        Category(id=cat_id, name=name, kind=EXPENSE, color=color)
        for cat_id, name, color in _EXPENSE_CATEGORIES
    )
    return categories


def default_templates() -> list[TransactionTemplate]:
    """Return the quick-add expense templates."""
    return [
        TransactionTemplate(
            id=template_id,
            kind=EXPENSE,
            amount=Decimal(amount),
            category_name=category_name,
            description=description,
            revenue_stream=revenue_stream,
        )
        for template_id, amount, category_name, description, revenue_stream
        in _TEMPLATES
    ]


__all__ = ["default_categories", "default_templates"]
