"""JSON persistence on top of the key-value store port.

Decode failures never leave this module: a missing or corrupt value is
reported as NothingStored and the caller substitutes its default.
Failures of the storage medium itself are not decode failures and
propagate unchanged.
"""

import json
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from .models import Loaded, LoadResult, NothingStored
from .ports import KeyValueStorePort

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_CART_KEY = "shop_cart"
DEFAULT_SESSION_KEY = "shop_user"


class PersistenceAdapter:
    """Loads and saves JSON-encoded values under fixed keys."""

    def __init__(self, store: KeyValueStorePort):
        """Initialize the adapter.

        Args:
            store: KeyValueStorePort implementation holding the raw strings.
        """
        self.store = store

    async def load(self, key: str, decode: Callable[[Any], T]) -> LoadResult[T]:
        """Read and decode the value stored under a key.

        Args:
            key: Storage key.
            decode: Converts the parsed JSON into a domain value. Signals a
                shape mismatch by raising ValueError, TypeError or KeyError.

        Returns:
            Loaded with the decoded value, or NothingStored("absent") /
            NothingStored("malformed").
        """
        raw = await self.store.get(key)
        if raw is None:
            return NothingStored("absent")

        try:
            parsed = json.loads(raw)
            value = decode(parsed)
        except (ValueError, TypeError, KeyError, RecursionError) as e:
            # json.JSONDecodeError is a ValueError; RecursionError on deep nesting
            logger.warning(
                f"Discarding malformed value stored under {key!r}: {e}",
                extra={"key": key},
            )
            return NothingStored("malformed")

        return Loaded(value)

    async def save(self, key: str, value: Any) -> None:
        """JSON-encode a value and overwrite the key."""
        await self.store.set(key, json.dumps(value, ensure_ascii=False))
        logger.debug(f"Saved {key!r}", extra={"key": key})

    async def remove(self, key: str) -> None:
        """Delete the key entirely."""
        await self.store.remove(key)
        logger.debug(f"Removed {key!r}", extra={"key": key})
