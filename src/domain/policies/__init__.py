"""Domain policies package."""

from .category_lookup import category_color, find_category

__all__ = ["category_color", "find_category"]
