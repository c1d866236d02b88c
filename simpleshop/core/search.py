"""Catalog search and category filtering."""

from collections.abc import Iterable
from dataclasses import dataclass

from .catalog import CATEGORIES
from .models import CATCH_ALL_CATEGORY, Product


def filter_products(
    catalog: Iterable[Product], category: str, query: str
) -> tuple[Product, ...]:
    """Return the products visible for a category and search query.

    The catch-all category skips category filtering; any other category
    must match exactly. A non-empty query must be a case-insensitive
    substring of the product name or category. Both conditions must hold.
    Catalog order is preserved.
    """
    needle = query.casefold()

    def matches(product: Product) -> bool:
        if category != CATCH_ALL_CATEGORY and product.category != category:
            return False
        if not needle:
            return True
        return (
            needle in product.name.casefold()
            or needle in product.category.casefold()
        )

    return tuple(product for product in catalog if matches(product))


@dataclass(frozen=True)
class FilterState:
    """Transient category/query selection; never persisted."""

    category: str = CATCH_ALL_CATEGORY
    query: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.query, str):
            raise TypeError(f"query must be text, got {type(self.query).__name__}")
        if self.category not in CATEGORIES:
            raise ValueError(
                f"Unknown category {self.category!r}; expected one of {', '.join(CATEGORIES)}"
            )

    def apply(self, catalog: Iterable[Product]) -> tuple[Product, ...]:
        return filter_products(catalog, self.category, self.query)
