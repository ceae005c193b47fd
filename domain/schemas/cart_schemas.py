from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from domain.enums import CartOutcome, CartState
from domain.schemas.catalog_schemas import KitResponse


class CartSessionCreate(BaseModel):
    """Schema for opening a cart session, optionally with a kit already chosen"""

    kit_id: Optional[str] = None


class SelectKitRequest(BaseModel):
    kit_id: str = Field(..., min_length=1)


class AddItemRequest(BaseModel):
    item_id: str = Field(..., min_length=1)


class ChangeQuantityRequest(BaseModel):
    delta: int = Field(..., description="Units to add (positive) or remove (negative)")


class CartItemResponse(BaseModel):
    item_id: str
    title: str
    quantity: int
    stock: int
    stock_limit_reached: bool


class LimitReachedNotification(BaseModel):
    """Raised once the kit is full; the storefront shows the review prompt"""

    kit_id: str
    total_meals: int
    total_reserved: int
    trigger: str


class CartResponse(BaseModel):
    session_id: UUID
    kit: Optional[KitResponse]
    items: List[CartItemResponse]
    total_reserved: int
    total_meals: Optional[int]
    state: CartState
    is_complete: bool
    checkout_enabled: bool
    notifications: List[LimitReachedNotification] = []
    created_at: datetime


class CartActionResponse(BaseModel):
    """Outcome of one cart mutation together with the resulting cart"""

    outcome: CartOutcome
    accepted: bool
    message: str
    item_id: Optional[str] = None
    quantity: int = 0
    cart: CartResponse
