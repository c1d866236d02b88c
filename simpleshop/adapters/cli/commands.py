"""CLI command implementations for the SimpleShop demo.

Provides user actions through a command-line interface.

This adapter maps CLI commands (products, add, qty, login, export, ...) to
the CartPort, SessionPort and ExportPort operations. It handles CLI-specific
formatting and turns validation failures into error results.
"""

import logging
from typing import Any

from simpleshop.core.catalog import ProductCatalog
from simpleshop.core.models import CartItem, Product
from simpleshop.core.ports import CartPort, ExportPort, SessionPort
from simpleshop.core.search import FilterState
from simpleshop.core.session_service import DEMO_CREDENTIALS

logger = logging.getLogger(__name__)


def _product_to_dict(product: Product) -> dict[str, Any]:
    return {
        "id": product.id,
        "category": product.category,
        "name": product.name,
        "price": product.price,
        "stock": product.stock,
    }


class CLICommandHandler:
    """Handles CLI commands by delegating to the core driving ports."""

    def __init__(
        self,
        catalog: ProductCatalog,
        cart: CartPort,
        session: SessionPort,
        exporter: ExportPort,
        currency_symbol: str = "₹",
    ):
        """Initialize the CLI command handler.

        Args:
            catalog: ProductCatalog listed and searched by the shell.
            cart: CartPort implementation for cart commands.
            session: SessionPort implementation for login/logout.
            exporter: ExportPort implementation for export/copy.
            currency_symbol: Symbol shown in front of prices.
        """
        self.catalog = catalog
        self.cart = cart
        self.session = session
        self.exporter = exporter
        self.currency_symbol = currency_symbol

    @staticmethod
    def _error(operation: str, message: str, **fields: Any) -> dict[str, Any]:
        return {"status": "error", "operation": operation, "message": message, **fields}

    def _format_cart_line(self, item: CartItem) -> str:
        return f"{item.name}: {self.currency_symbol}{item.price} x {item.quantity}"

    async def list_products(
        self, category: str = "All", query: str = "", output_format: str = "json"
    ) -> dict[str, Any]:
        """List catalog products matching a category and search query.

        Args:
            category: One of the fixed categories, "All" for every category.
            query: Case-insensitive text matched against name and category.
            output_format: "json" for records, "text" for display lines.

        Returns:
            Dictionary with the matching products.
        """
        try:
            state = FilterState(category=category, query=query)
        except (ValueError, TypeError) as e:
            return self._error("products", str(e))

        products = state.apply(self.catalog)
        result: dict[str, Any] = {
            "status": "success",
            "operation": "products",
            "category": state.category,
            "query": state.query,
            "count": len(products),
        }

        if not products:
            result["message"] = "No products match your search."

        if output_format == "text":
            result["lines"] = [
                f"[{p.id}] {p.name} ({p.category}) {self.currency_symbol}{p.price} - stock {p.stock}"
                for p in products
            ]
        else:
            result["products"] = [_product_to_dict(p) for p in products]

        return result

    async def product_details(self, product_id: int) -> dict[str, Any]:
        """Show one product's details."""
        try:
            description = self.catalog.describe(product_id, self.currency_symbol)
        except ValueError as e:
            return self._error("details", str(e), product_id=product_id)

        return {
            "status": "success",
            "operation": "details",
            "product_id": product_id,
            "message": f"Product details: {description}",
        }

    async def add_to_cart(self, product_id: int) -> dict[str, Any]:
        """Add one unit of a catalog product to the cart."""
        try:
            product = self.catalog.get(product_id)
        except ValueError as e:
            logger.error(f"Failed to add product: {e}")
            return self._error("add", str(e), product_id=product_id)

        item = await self.cart.add_item(product)
        return {
            "status": "success",
            "operation": "add",
            "product_id": product_id,
            "quantity": item.quantity,
            "message": f"Added {product.name} to cart",
        }

    async def remove_from_cart(self, product_id: int) -> dict[str, Any]:
        await self.cart.remove_item(product_id)
        return {
            "status": "success",
            "operation": "remove",
            "product_id": product_id,
            "message": f"Product {product_id} removed from cart",
        }

    async def change_quantity(self, product_id: int, quantity: int) -> dict[str, Any]:
        """Set a cart line's quantity; zero or less removes the line."""
        await self.cart.set_quantity(product_id, quantity)
        if quantity <= 0:
            message = f"Product {product_id} removed from cart"
        else:
            message = f"Quantity of product {product_id} set to {quantity}"
        return {
            "status": "success",
            "operation": "qty",
            "product_id": product_id,
            "quantity": max(quantity, 0),
            "message": message,
        }

    async def show_cart(self, output_format: str = "json") -> dict[str, Any]:
        """Show cart lines and the total."""
        items = self.cart.items
        result: dict[str, Any] = {
            "status": "success",
            "operation": "cart",
            "count": len(items),
            "total": self.cart.total(),
        }

        if not items:
            result["message"] = "Cart is empty."

        if output_format == "text":
            result["lines"] = [self._format_cart_line(item) for item in items]
            result["lines"].append(f"Total: {self.currency_symbol}{self.cart.total()}")
        else:
            result["items"] = [item.to_dict() for item in items]

        return result

    async def cart_total(self) -> dict[str, Any]:
        total = self.cart.total()
        return {
            "status": "success",
            "operation": "total",
            "total": total,
            "message": f"Total: {self.currency_symbol}{total}",
        }

    async def clear_cart(self) -> dict[str, Any]:
        await self.cart.clear()
        return {"status": "success", "operation": "clear", "message": "Cart cleared"}

    async def export_cart(self) -> dict[str, Any]:
        """Save the cart as cart.json."""
        outcome = await self.exporter.download()
        result: dict[str, Any] = {
            "status": "success" if outcome.success else "error",
            "operation": "export",
            "message": outcome.message,
        }
        if outcome.location:
            result["location"] = outcome.location
        return result

    async def copy_cart(self) -> dict[str, Any]:
        """Copy the cart JSON to the clipboard."""
        outcome = await self.exporter.copy()
        return {
            "status": "success" if outcome.success else "error",
            "operation": "copy",
            "message": outcome.message,
        }

    async def pay(self) -> dict[str, Any]:
        """Demo Pay Now action; no payment is taken."""
        return {
            "status": "success",
            "operation": "pay",
            "message": self.cart.checkout_notice(self.currency_symbol),
        }

    async def login(
        self, email: str = "", password: str = "", demo: bool = False
    ) -> dict[str, Any]:
        """Log in with any non-empty credentials, or the demo pair."""
        if demo:
            email, password = DEMO_CREDENTIALS

        outcome = await self.session.login(email, password)
        if not outcome.success:
            return self._error("login", outcome.message)

        return {
            "status": "success",
            "operation": "login",
            "email": email,
            "message": outcome.message,
        }

    async def logout(self) -> dict[str, Any]:
        await self.session.logout()
        return {"status": "success", "operation": "logout", "message": "Logged out"}

    async def whoami(self) -> dict[str, Any]:
        current = self.session.current
        if current is None:
            return {
                "status": "success",
                "operation": "whoami",
                "email": None,
                "message": "Not logged in",
            }
        return {
            "status": "success",
            "operation": "whoami",
            "email": current.email,
            "message": f"Logged in as {current.email}",
        }
