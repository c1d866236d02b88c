"""SimpleShop: a client-only catalog and cart demo.

Browse a fixed catalog, filter and search it, build a cart, and keep the
cart and a demo login session across runs in a local key-value store.
"""

__version__ = "0.1.0"
