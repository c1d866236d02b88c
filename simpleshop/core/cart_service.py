"""Cart service: implements CartPort.

Owns the in-memory cart. Every mutating operation ends by writing the
entire cart back through the PersistenceAdapter, so the durable copy is
current by the time the operation returns.
"""

import json
import logging
from typing import Any

from .models import CartItem, Loaded, Product
from .persistence import DEFAULT_CART_KEY, PersistenceAdapter
from .ports import CartPort

logger = logging.getLogger(__name__)


def decode_cart(data: Any) -> list[CartItem]:
    """Convert parsed JSON into cart lines.

    Raises:
        TypeError: If data is not a list of objects or a field has the wrong type.
        KeyError: If a line is missing a field.
        ValueError: If a line violates an invariant or an id repeats.
    """
    if not isinstance(data, list):
        raise TypeError(f"cart must be an array, got {type(data).__name__}")

    items = [CartItem.from_dict(entry) for entry in data]
    seen: set[int] = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"duplicate cart line for product {item.id}")
        seen.add(item.id)
    return items


class CartService(CartPort):
    """Core implementation of CartPort.

    Stock is informational only: adding past a product's stock is allowed
    and nothing is decremented.
    """

    def __init__(self, persistence: PersistenceAdapter, key: str = DEFAULT_CART_KEY):
        """Initialize the cart service.

        Args:
            persistence: PersistenceAdapter used to save the cart.
            key: Storage key holding the cart.
        """
        self.persistence = persistence
        self.key = key
        self._items: list[CartItem] = []

    async def initialize(self) -> None:
        """Load the persisted cart, falling back to an empty cart."""
        result = await self.persistence.load(self.key, decode_cart)
        if isinstance(result, Loaded):
            self._items = result.value
        else:
            self._items = []
        logger.info(
            f"Cart loaded with {len(self._items)} line(s)",
            extra={"key": self.key, "source": type(result).__name__},
        )

    @property
    def items(self) -> tuple[CartItem, ...]:
        return tuple(self._items)

    def get_item(self, product_id: int) -> CartItem | None:
        for item in self._items:
            if item.id == product_id:
                return item
        return None

    def count(self) -> int:
        """Total number of units across all lines."""
        return sum(item.quantity for item in self._items)

    def _index_of(self, product_id: int) -> int | None:
        for index, item in enumerate(self._items):
            if item.id == product_id:
                return index
        return None

    async def _persist(self) -> None:
        await self.persistence.save(self.key, [item.to_dict() for item in self._items])

    async def add_item(self, product: Product) -> CartItem:
        """Add one unit of a product to the cart.

        An existing line keeps its position and its add-time snapshot;
        only the quantity grows.
        """
        index = self._index_of(product.id)
        if index is None:
            item = CartItem.from_product(product)
            self._items.append(item)
        else:
            item = self._items[index].with_quantity(self._items[index].quantity + 1)
            self._items[index] = item

        await self._persist()

        logger.info(
            f"Added {product.name} to cart",
            extra={"product_id": product.id, "quantity": item.quantity},
        )
        return item

    async def remove_item(self, product_id: int) -> None:
        """Remove a product's line. No-op if absent."""
        self._items = [item for item in self._items if item.id != product_id]
        await self._persist()

        logger.info(
            f"Removed product {product_id} from cart",
            extra={"product_id": product_id},
        )

    async def set_quantity(self, product_id: int, quantity: int) -> None:
        """Set a line's quantity to an absolute value.

        A quantity of zero or less removes the line instead.
        """
        if quantity <= 0:
            await self.remove_item(product_id)
            return

        index = self._index_of(product_id)
        if index is not None:
            self._items[index] = self._items[index].with_quantity(quantity)

        await self._persist()

        logger.info(
            f"Set quantity of product {product_id} to {quantity}",
            extra={"product_id": product_id, "quantity": quantity, "present": index is not None},
        )

    async def clear(self) -> None:
        """Empty the cart."""
        self._items = []
        await self._persist()
        logger.info("Cart cleared")

    def total(self) -> int:
        return sum(item.subtotal for item in self._items)

    def serialize(self, indent: int | None = None) -> str:
        """Encode the cart as a JSON array of cart lines.

        Args:
            indent: Pretty-print indentation, or None for compact output.
        """
        return json.dumps(
            [item.to_dict() for item in self._items],
            indent=indent,
            ensure_ascii=False,
        )

    async def restore(self, blob: str) -> bool:
        """Replace the cart with the contents of a JSON blob.

        Malformed text never raises; the cart becomes empty instead.

        Returns:
            True if the blob decoded cleanly, False otherwise.
        """
        try:
            items = decode_cart(json.loads(blob))
            restored = True
        except (ValueError, TypeError, KeyError, RecursionError) as e:
            # RecursionError: nesting too deep for the JSON decoder
            logger.warning(f"Could not restore cart, starting empty: {e}")
            items = []
            restored = False

        self._items = items
        await self._persist()
        return restored

    def checkout_notice(self, currency_symbol: str = "₹") -> str:
        """Text for the demo Pay Now action. No payment provider is contacted."""
        return (
            f"Opening Razorpay (demo)... total {currency_symbol}{self.total()}. "
            "No payment will be taken."
        )
