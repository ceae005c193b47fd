"""Services package - Business logic layer"""

from services.stock_service import StockService
from services.catalog_service import CatalogService
from services.cart_service import CartService, CartSession, CartSessionStore, cart_sessions
from services.checkout_service import CheckoutService

__all__ = [
    "StockService",
    "CatalogService",
    "CartService",
    "CartSession",
    "CartSessionStore",
    "cart_sessions",
    "CheckoutService",
]
