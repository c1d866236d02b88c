"""Unit tests for CLI command handling.

Tests verify that shell commands reach the right port operations,
produce JSON-ready result dictionaries, and report validation failures
as error results instead of raising.
"""

import json

import pytest

from simpleshop.adapters.cli.commands import CLICommandHandler
from simpleshop.core.cart_service import CartService
from simpleshop.core.catalog import ProductCatalog
from simpleshop.core.export_service import CartExportService
from simpleshop.core.persistence import PersistenceAdapter
from simpleshop.core.session_service import SessionService
from simpleshop.main import _execute_cli_command
from simpleshop.tests.fakes import FakeClipboard, FakeExportSink, FakeKeyValueStore

# ============================================================================
# Test Fixtures
# ============================================================================


@pytest.fixture
def store() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture
def clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture
def sink() -> FakeExportSink:
    return FakeExportSink()


@pytest.fixture
def handler(
    store: FakeKeyValueStore, clipboard: FakeClipboard, sink: FakeExportSink
) -> CLICommandHandler:
    """CLI handler wired to in-memory fakes."""
    persistence = PersistenceAdapter(store)
    cart = CartService(persistence)
    return CLICommandHandler(
        catalog=ProductCatalog(),
        cart=cart,
        session=SessionService(persistence),
        exporter=CartExportService(cart, sink, clipboard),
    )


# ============================================================================
# Catalog commands
# ============================================================================


class TestCatalogCommands:
    @pytest.mark.asyncio
    async def test_list_all_products(self, handler: CLICommandHandler) -> None:
        result = await handler.list_products()

        assert result["status"] == "success"
        assert result["count"] == 6
        assert [p["id"] for p in result["products"]] == [1, 2, 3, 4, 5, 6]

    @pytest.mark.asyncio
    async def test_list_filtered_text(self, handler: CLICommandHandler) -> None:
        result = await handler.list_products("Games", "action", output_format="text")

        assert result["count"] == 1
        assert result["lines"] == ["[6] Action Figure (Games) ₹349 - stock 10"]

    @pytest.mark.asyncio
    async def test_list_no_match(self, handler: CLICommandHandler) -> None:
        result = await handler.list_products("Cloths", "rice")

        assert result["status"] == "success"
        assert result["count"] == 0
        assert result["message"] == "No products match your search."

    @pytest.mark.asyncio
    async def test_list_unknown_category(self, handler: CLICommandHandler) -> None:
        result = await handler.list_products("Toys")
        assert result["status"] == "error"

    @pytest.mark.asyncio
    async def test_list_non_text_query(self, handler: CLICommandHandler) -> None:
        result = await handler.list_products(query=5)  # type: ignore[arg-type]

        assert result["status"] == "error"
        assert "query must be text" in result["message"]

    @pytest.mark.asyncio
    async def test_details(self, handler: CLICommandHandler) -> None:
        result = await handler.product_details(2)
        assert result["message"] == "Product details: Formal Shirt - ₹799 - stock 5"

    @pytest.mark.asyncio
    async def test_details_unknown(self, handler: CLICommandHandler) -> None:
        result = await handler.product_details(42)
        assert result["status"] == "error"


# ============================================================================
# Cart commands
# ============================================================================


class TestCartCommands:
    @pytest.mark.asyncio
    async def test_add_and_show(self, handler: CLICommandHandler) -> None:
        await handler.add_to_cart(3)
        result = await handler.add_to_cart(3)

        assert result["quantity"] == 2
        cart = await handler.show_cart()
        assert cart["total"] == 998
        assert cart["items"][0]["quantity"] == 2

    @pytest.mark.asyncio
    async def test_add_unknown_product(self, handler: CLICommandHandler, store: FakeKeyValueStore) -> None:
        result = await handler.add_to_cart(99)

        assert result["status"] == "error"
        assert store.set_calls == []

    @pytest.mark.asyncio
    async def test_show_empty_cart_text(self, handler: CLICommandHandler) -> None:
        result = await handler.show_cart(output_format="text")

        assert result["message"] == "Cart is empty."
        assert result["lines"] == ["Total: ₹0"]

    @pytest.mark.asyncio
    async def test_show_cart_text(self, handler: CLICommandHandler) -> None:
        await handler.add_to_cart(1)
        result = await handler.show_cart(output_format="text")
        assert result["lines"] == ["Blue T-Shirt: ₹299 x 1", "Total: ₹299"]

    @pytest.mark.asyncio
    async def test_qty_zero_removes(self, handler: CLICommandHandler) -> None:
        await handler.add_to_cart(1)
        result = await handler.change_quantity(1, 0)

        assert result["message"] == "Product 1 removed from cart"
        assert (await handler.show_cart())["count"] == 0

    @pytest.mark.asyncio
    async def test_remove_and_clear(self, handler: CLICommandHandler) -> None:
        await handler.add_to_cart(1)
        await handler.add_to_cart(2)
        await handler.remove_from_cart(1)
        assert (await handler.cart_total())["total"] == 799

        await handler.clear_cart()
        assert (await handler.cart_total())["total"] == 0

    @pytest.mark.asyncio
    async def test_pay_is_demo_only(self, handler: CLICommandHandler, store: FakeKeyValueStore) -> None:
        await handler.add_to_cart(4)
        writes = len(store.set_calls)

        result = await handler.pay()

        assert result["status"] == "success"
        assert "₹899" in result["message"]
        assert len(store.set_calls) == writes


# ============================================================================
# Export commands
# ============================================================================


class TestExportCommands:
    @pytest.mark.asyncio
    async def test_export(self, handler: CLICommandHandler, sink: FakeExportSink) -> None:
        await handler.add_to_cart(5)
        result = await handler.export_cart()

        assert result["status"] == "success"
        assert result["location"] == "memory://cart.json"
        assert json.loads(sink.files["cart.json"])[0]["id"] == 5

    @pytest.mark.asyncio
    async def test_copy_denied(self, handler: CLICommandHandler, clipboard: FakeClipboard) -> None:
        clipboard.should_fail = True
        result = await handler.copy_cart()

        assert result["status"] == "error"
        assert "clipboard permission" in result["message"]


# ============================================================================
# Session commands
# ============================================================================


class TestSessionCommands:
    @pytest.mark.asyncio
    async def test_login_logout(self, handler: CLICommandHandler, store: FakeKeyValueStore) -> None:
        result = await handler.login("a@b.com", "x")
        assert result["status"] == "success"
        assert (await handler.whoami())["email"] == "a@b.com"

        await handler.logout()
        assert (await handler.whoami())["email"] is None
        assert "shop_user" not in store.data

    @pytest.mark.asyncio
    async def test_login_missing_password(self, handler: CLICommandHandler) -> None:
        result = await handler.login("a@b.com", "")

        assert result["status"] == "error"
        assert result["message"] == "Please enter email and password (demo)"

    @pytest.mark.asyncio
    async def test_demo_login(self, handler: CLICommandHandler) -> None:
        result = await handler.login(demo=True)
        assert result["email"] == "demo@demo.com"


# ============================================================================
# Command dispatch
# ============================================================================


class TestCommandDispatch:
    @pytest.mark.asyncio
    async def test_dispatch_add(self, handler: CLICommandHandler) -> None:
        result = await _execute_cli_command(handler, "add", {"product_id": 2})
        assert result["operation"] == "add"

    @pytest.mark.asyncio
    async def test_dispatch_products_defaults_to_text(self, handler: CLICommandHandler) -> None:
        result = await _execute_cli_command(handler, "products", {"category": "Grocery"})
        assert len(result["lines"]) == 2

    @pytest.mark.asyncio
    async def test_dispatch_qty(self, handler: CLICommandHandler) -> None:
        await _execute_cli_command(handler, "add", {"product_id": 2})
        result = await _execute_cli_command(handler, "qty", {"product_id": 2, "quantity": 3})

        assert result["quantity"] == 3

    @pytest.mark.asyncio
    async def test_dispatch_missing_product_id(self, handler: CLICommandHandler) -> None:
        with pytest.raises(ValueError, match="product_id"):
            await _execute_cli_command(handler, "add", {})

    @pytest.mark.asyncio
    async def test_dispatch_missing_quantity(self, handler: CLICommandHandler) -> None:
        with pytest.raises(ValueError, match="quantity"):
            await _execute_cli_command(handler, "qty", {"product_id": 1})

    @pytest.mark.asyncio
    async def test_dispatch_unknown_command(self, handler: CLICommandHandler) -> None:
        with pytest.raises(ValueError, match="Unknown command"):
            await _execute_cli_command(handler, "checkout", {})

    @pytest.mark.asyncio
    async def test_dispatch_rejects_fractional_quantity(
        self, handler: CLICommandHandler, store: FakeKeyValueStore
    ) -> None:
        await _execute_cli_command(handler, "add", {"product_id": 2})
        writes = len(store.set_calls)

        with pytest.raises(ValueError, match="quantity must be an integer"):
            await _execute_cli_command(handler, "qty", {"product_id": 2, "quantity": 2.9})
        assert len(store.set_calls) == writes

    @pytest.mark.asyncio
    @pytest.mark.parametrize("product_id", [True, "1", 1.0, None])
    async def test_dispatch_rejects_non_integer_product_id(
        self, handler: CLICommandHandler, store: FakeKeyValueStore, product_id: object
    ) -> None:
        with pytest.raises(ValueError, match="product_id must be an integer"):
            await _execute_cli_command(handler, "add", {"product_id": product_id})
        assert store.set_calls == []
