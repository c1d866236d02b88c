"""Static product catalog.

The catalog is a fixed configuration constant. It is read-only: callers
get immutable Product values and tuples, never the backing storage.
"""

from collections.abc import Iterable, Iterator

from .models import CATCH_ALL_CATEGORY, Product

CATEGORIES: tuple[str, ...] = (CATCH_ALL_CATEGORY, "Cloths", "Grocery", "Games")

SAMPLE_PRODUCTS: tuple[Product, ...] = (
    Product(id=1, category="Cloths", name="Blue T-Shirt", price=299, stock=12),
    Product(id=2, category="Cloths", name="Formal Shirt", price=799, stock=5),
    Product(id=3, category="Grocery", name="Rice 5kg", price=499, stock=20),
    Product(id=4, category="Grocery", name="Olive Oil 1L", price=899, stock=8),
    Product(id=5, category="Games", name="Board Game - Strategy", price=699, stock=6),
    Product(id=6, category="Games", name="Action Figure", price=349, stock=10),
)


class ProductCatalog:
    """Read-only, ordered collection of products keyed by id."""

    def __init__(self, products: Iterable[Product] = SAMPLE_PRODUCTS):
        """Initialize the catalog.

        Args:
            products: Products in display order.

        Raises:
            ValueError: If two products share an id.
        """
        self._products = tuple(products)
        self._by_id: dict[int, Product] = {}
        for product in self._products:
            if product.id in self._by_id:
                raise ValueError(f"Duplicate product id in catalog: {product.id}")
            self._by_id[product.id] = product

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def get(self, product_id: int) -> Product:
        """Look up a product by id.

        Raises:
            ValueError: If no product has this id.
        """
        product = self._by_id.get(product_id)
        if product is None:
            raise ValueError(f"Product {product_id} not found")
        return product

    def describe(self, product_id: int, currency_symbol: str = "₹") -> str:
        """One-line product details, as shown by the Details action."""
        product = self.get(product_id)
        return (
            f"{product.name} - {currency_symbol}{product.price} - stock {product.stock}"
        )
