"""Core domain logic for the SimpleShop demo.

This package contains zero external dependencies and represents
the pure business logic of the application. All adapters and
external integrations are handled by the adapters package.
"""

from .models import (
    CATCH_ALL_CATEGORY,
    CartItem,
    ExportResult,
    Loaded,
    LoadResult,
    LoginResult,
    NothingStored,
    Product,
    Session,
)

__all__ = [
    "CATCH_ALL_CATEGORY",
    "CartItem",
    "ExportResult",
    "Loaded",
    "LoadResult",
    "LoginResult",
    "NothingStored",
    "Product",
    "Session",
]
