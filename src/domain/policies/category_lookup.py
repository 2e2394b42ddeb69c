"""Name-based category lookups."""

from src.domain.constants import DEFAULT_CATEGORY_COLOR
from src.domain.models import Category


def find_category(
    categories: list[Category],
    name: str,
    kind: str | None = None,
) -> Category | None:
    """Return the first category matching a name and optional kind."""
    for category in categories:
        if category.name != name:
            continue
        if kind is not None and category.kind != kind:
            continue
        return category
    return None


def category_color(name: str, categories: list[Category]) -> str:
    """Return the color tag of a category, or the neutral default."""
    category = find_category(categories, name)
    return category.color if category is not None else DEFAULT_CATEGORY_COLOR


__all__ = ["find_category", "category_color"]
