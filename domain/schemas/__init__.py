"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.stock_schemas import (
    StockItemSet,
    StockBulkUpdateRequest,
    StockSetRequest,
    DecrementItem,
    StockDecrementRequest,
    ProductResponse,
)
from domain.schemas.catalog_schemas import (
    MenuItemResponse,
    MenuResponse,
    KitResponse,
    DeliveryZoneResponse,
)
from domain.schemas.cart_schemas import (
    CartSessionCreate,
    SelectKitRequest,
    AddItemRequest,
    ChangeQuantityRequest,
    CartItemResponse,
    LimitReachedNotification,
    CartResponse,
    CartActionResponse,
)
from domain.schemas.checkout_schemas import (
    CheckoutRequest,
    OrderLine,
    OrderResponse,
)

__all__ = [
    # Stock schemas
    "StockItemSet",
    "StockBulkUpdateRequest",
    "StockSetRequest",
    "DecrementItem",
    "StockDecrementRequest",
    "ProductResponse",
    # Catalog schemas
    "MenuItemResponse",
    "MenuResponse",
    "KitResponse",
    "DeliveryZoneResponse",
    # Cart schemas
    "CartSessionCreate",
    "SelectKitRequest",
    "AddItemRequest",
    "ChangeQuantityRequest",
    "CartItemResponse",
    "LimitReachedNotification",
    "CartResponse",
    "CartActionResponse",
    # Checkout schemas
    "CheckoutRequest",
    "OrderLine",
    "OrderResponse",
]
