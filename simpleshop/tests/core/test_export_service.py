"""Unit tests for cart export (download and clipboard copy)."""

import json

import pytest

from simpleshop.core.cart_service import CartService
from simpleshop.core.catalog import SAMPLE_PRODUCTS
from simpleshop.core.export_service import (
    COPY_FAILURE_MESSAGE,
    COPY_SUCCESS_MESSAGE,
    EXPORT_FILENAME,
    CartExportService,
)
from simpleshop.core.persistence import PersistenceAdapter
from simpleshop.tests.fakes import FakeClipboard, FakeExportSink, FakeKeyValueStore


@pytest.fixture
def cart() -> CartService:
    return CartService(PersistenceAdapter(FakeKeyValueStore()))


class TestDownload:
    @pytest.mark.asyncio
    async def test_download_writes_pretty_cart_json(self, cart: CartService) -> None:
        await cart.add_item(SAMPLE_PRODUCTS[0])
        sink = FakeExportSink()
        exporter = CartExportService(cart, sink, FakeClipboard())

        result = await exporter.download()

        assert result.success
        assert result.location == "memory://cart.json"
        content = sink.files[EXPORT_FILENAME]
        assert content == cart.serialize(indent=2)
        assert json.loads(content)[0]["quantity"] == 1

    @pytest.mark.asyncio
    async def test_download_empty_cart(self, cart: CartService) -> None:
        sink = FakeExportSink()
        result = await CartExportService(cart, sink, FakeClipboard()).download()

        assert result.success
        assert sink.files[EXPORT_FILENAME] == "[]"

    @pytest.mark.asyncio
    async def test_download_failure_reported(self, cart: CartService) -> None:
        result = await CartExportService(
            cart, FakeExportSink(should_fail=True), FakeClipboard()
        ).download()

        assert result.success is False
        assert "Disk full" in result.message


class TestCopy:
    @pytest.mark.asyncio
    async def test_copy_places_same_text(self, cart: CartService) -> None:
        await cart.add_item(SAMPLE_PRODUCTS[3])
        clipboard = FakeClipboard()
        sink = FakeExportSink()
        exporter = CartExportService(cart, sink, clipboard)

        result = await exporter.copy()
        await exporter.download()

        assert result.success
        assert result.message == COPY_SUCCESS_MESSAGE
        assert clipboard.text == sink.files[EXPORT_FILENAME]

    @pytest.mark.asyncio
    async def test_copy_denied_leaves_cart_unchanged(self, cart: CartService) -> None:
        await cart.add_item(SAMPLE_PRODUCTS[3])
        before = cart.items

        result = await CartExportService(
            cart, FakeExportSink(), FakeClipboard(should_fail=True)
        ).copy()

        assert result.success is False
        assert result.message == COPY_FAILURE_MESSAGE
        assert cart.items == before
