"""API routes package"""

from . import health, stock, catalog, cart

__all__ = ["health", "stock", "catalog", "cart"]
