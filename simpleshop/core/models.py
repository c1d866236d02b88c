"""Domain models for the SimpleShop demo.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, Generic, Literal, TypeAlias, TypeVar

T = TypeVar("T")

CATCH_ALL_CATEGORY = "All"


def _is_int(value: Any) -> bool:
    # bool is an int subclass; JSON true/false must not pass as a number
    return isinstance(value, int) and not isinstance(value, bool)


def _require_non_negative_int(name: str, value: Any) -> None:
    if not _is_int(value):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def _require_text(name: str, value: Any) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string, got {type(value).__name__}")
    if not value.strip():
        raise ValueError(f"{name} must be a non-empty string")


@dataclass(frozen=True)
class Product:
    """A purchasable catalog entry.

    Prices are integers in the minor currency unit.
    """

    id: int
    category: str
    name: str
    price: int
    stock: int

    def __post_init__(self) -> None:
        """Validate product invariants on creation."""
        _require_non_negative_int("id", self.id)
        _require_text("category", self.category)
        _require_text("name", self.name)
        _require_non_negative_int("price", self.price)
        _require_non_negative_int("stock", self.stock)


@dataclass(frozen=True)
class CartItem:
    """Snapshot of a product taken when it was first added, plus a quantity.

    The product fields are copied, not referenced, so later catalog
    changes never leak into an existing cart line.
    """

    id: int
    category: str
    name: str
    price: int
    stock: int
    quantity: int

    def __post_init__(self) -> None:
        """Validate cart item invariants on creation or deserialization."""
        _require_non_negative_int("id", self.id)
        _require_text("category", self.category)
        _require_text("name", self.name)
        _require_non_negative_int("price", self.price)
        _require_non_negative_int("stock", self.stock)
        if not _is_int(self.quantity):
            raise TypeError(
                f"quantity must be an integer, got {type(self.quantity).__name__}"
            )
        if self.quantity < 1:
            raise ValueError(f"quantity must be >= 1, got {self.quantity}")

    @classmethod
    def from_product(cls, product: Product, quantity: int = 1) -> "CartItem":
        """Build a cart line from the product's current fields."""
        return cls(
            id=product.id,
            category=product.category,
            name=product.name,
            price=product.price,
            stock=product.stock,
            quantity=quantity,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CartItem":
        """Deserialize a cart line.

        Raises:
            TypeError: If data is not a mapping or a field has the wrong type.
            KeyError: If a required field is missing.
            ValueError: If a field violates an invariant.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"cart item must be an object, got {type(data).__name__}")
        return cls(
            id=data["id"],
            category=data["category"],
            name=data["name"],
            price=data["price"],
            stock=data["stock"],
            quantity=data["quantity"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category,
            "name": self.name,
            "price": self.price,
            "stock": self.stock,
            "quantity": self.quantity,
        }

    def with_quantity(self, quantity: int) -> "CartItem":
        return replace(self, quantity=quantity)

    @property
    def subtotal(self) -> int:
        return self.price * self.quantity


@dataclass(frozen=True)
class Session:
    """A demo-authenticated user identity.

    Holds the email only; credentials are never kept.
    """

    email: str

    def __post_init__(self) -> None:
        if not isinstance(self.email, str) or not self.email:
            raise ValueError("email must be a non-empty string")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Session":
        if not isinstance(data, Mapping):
            raise TypeError(f"session must be an object, got {type(data).__name__}")
        return cls(email=data["email"])

    def to_dict(self) -> dict[str, Any]:
        return {"email": self.email}


@dataclass(frozen=True)
class Loaded(Generic[T]):
    """A persisted value that was present and decoded cleanly."""

    value: T


NothingStoredReason: TypeAlias = Literal["absent", "malformed"]


@dataclass(frozen=True)
class NothingStored:
    """Marker for a key that is missing or holds an undecodable value."""

    reason: NothingStoredReason


LoadResult: TypeAlias = Loaded[T] | NothingStored


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a demo login attempt."""

    success: bool
    message: str
    session: Session | None = None


@dataclass(frozen=True)
class ExportResult:
    """Outcome of exporting the cart to a file or the clipboard."""

    success: bool
    message: str
    location: str | None = None
