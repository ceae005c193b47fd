"""
Domain enums for the PratoFit application.
Contains the enumeration types shared by the cart, checkout and API layers.
"""

import enum


class CartState(str, enum.Enum):
    """Lifecycle of a cart within one kit selection"""

    EMPTY = "empty"
    FILLING = "filling"
    COMPLETE = "complete"


class CartOutcome(str, enum.Enum):
    """Result of a cart mutation"""

    ADDED = "added"
    UPDATED = "updated"
    REMOVED = "removed"
    NOOP = "noop"
    NO_KIT = "no_kit"
    UNKNOWN_ITEM = "unknown_item"
    OUT_OF_STOCK = "out_of_stock"
    KIT_LIMIT_REACHED = "kit_limit_reached"
    ITEM_STOCK_LIMIT_REACHED = "item_stock_limit_reached"


class FulfillmentType(str, enum.Enum):
    """How the order reaches the customer"""

    DELIVERY = "delivery"
    PICKUP = "pickup"


class PaymentMethod(str, enum.Enum):
    """Payment option chosen at checkout"""

    PIX = "pix"
    LINK = "link"
