"""Port interfaces for the SimpleShop demo.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - KeyValueStorePort: Durable string store (get/set/remove by key)
   - ClipboardPort: Place exported text on the system clipboard
   - ExportSinkPort: Receive the downloadable cart.json file

2. **Driving Ports** (adapters/external systems call into core)
   - CartPort: Cart mutations, totals and (de)serialization
   - SessionPort: Demo login and logout
   - ExportPort: Download and copy the cart
"""

from abc import ABC, abstractmethod

from .models import CartItem, ExportResult, LoginResult, Product, Session


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class KeyValueStorePort(ABC):
    """Port for the durable key-value store.

    The store is an opaque string medium. It knows nothing about JSON
    or the shape of the values; encoding is done by the core's
    PersistenceAdapter.

    Implementations must handle:
    - Overwriting an existing key on set
    - Removing a key entirely (a later get returns None)
    - Creating their backing storage on first use
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Read the value stored under a key.

        Args:
            key: Storage key.

        Returns:
            The stored string, or None if the key is absent.

        Raises:
            Exception: If the storage medium is unavailable.
        """

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Write a value, replacing any previous value for the key.

        Args:
            key: Storage key.
            value: String to store.

        Raises:
            Exception: If the storage medium is unavailable.
        """

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Delete a key. Removing an absent key is a no-op.

        Args:
            key: Storage key.

        Raises:
            Exception: If the storage medium is unavailable.
        """

    @abstractmethod
    async def close(self) -> None:
        """Release any resources held by the store."""


class ClipboardPort(ABC):
    """Port for writing text to the system clipboard."""

    @abstractmethod
    async def write_text(self, text: str) -> None:
        """Place text on the clipboard.

        Raises:
            Exception: If the clipboard is unavailable or the write is denied.
                Caller reports the failure to the user; state is unaffected.
        """


class ExportSinkPort(ABC):
    """Port for delivering a downloadable file."""

    @abstractmethod
    async def save(self, filename: str, content: str) -> str:
        """Deliver a file.

        Args:
            filename: Name the file should carry (e.g. "cart.json").
            content: Full text content of the file.

        Returns:
            Human-readable location of the delivered file.

        Raises:
            OSError: If the file cannot be written.
        """


# ============================================================================
# DRIVING PORTS (Adapters/external systems call into core)
# ============================================================================


class CartPort(ABC):
    """Port for cart operations.

    Driving port: the command shell invokes these methods in response
    to user actions. Every mutating method returns only after the full
    cart has been persisted.
    """

    @property
    @abstractmethod
    def items(self) -> tuple[CartItem, ...]:
        """Cart lines in insertion order."""

    @abstractmethod
    async def add_item(self, product: Product) -> CartItem:
        """Add one unit of a product, merging with an existing line.

        Returns:
            The cart line for the product after the add.
        """

    @abstractmethod
    async def remove_item(self, product_id: int) -> None:
        """Remove a product's line. No-op if absent."""

    @abstractmethod
    async def set_quantity(self, product_id: int, quantity: int) -> None:
        """Set a line's quantity; a quantity <= 0 removes the line."""

    @abstractmethod
    async def clear(self) -> None:
        """Empty the cart."""

    @abstractmethod
    def total(self) -> int:
        """Sum of price times quantity over all lines."""

    @abstractmethod
    def serialize(self, indent: int | None = None) -> str:
        """Encode the full cart as a JSON array."""

    @abstractmethod
    async def restore(self, blob: str) -> bool:
        """Replace the cart from JSON text.

        Returns:
            True if the text decoded cleanly, False if it was malformed
            and the cart fell back to empty.
        """

    @abstractmethod
    def checkout_notice(self, currency_symbol: str = "₹") -> str:
        """Text for the demo Pay Now action; never contacts a payment provider."""


class SessionPort(ABC):
    """Port for the demo login session."""

    @property
    @abstractmethod
    def current(self) -> Session | None:
        """The active session, if logged in."""

    @abstractmethod
    async def login(self, email: str, password: str) -> LoginResult:
        """Start a demo session. Empty fields fail validation without raising."""

    @abstractmethod
    async def logout(self) -> None:
        """End the session and remove it from storage."""


class ExportPort(ABC):
    """Port for exporting the cart outside the process."""

    @abstractmethod
    async def download(self) -> ExportResult:
        """Save the cart as a cart.json file."""

    @abstractmethod
    async def copy(self) -> ExportResult:
        """Copy the cart JSON to the clipboard."""
