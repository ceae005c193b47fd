from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class StockItemSet(BaseModel):
    """One product row in a bulk stock update"""

    id: str = Field(..., min_length=1, description="Menu item / product ID")
    title: Optional[str] = Field(None, description="Display title stored alongside stock")
    stock: int = Field(..., ge=0, description="New absolute stock")


class StockBulkUpdateRequest(BaseModel):
    """Schema for replacing the stock of several products at once"""

    items: List[StockItemSet] = Field(..., description="Products to upsert")


class StockSetRequest(BaseModel):
    """Schema for setting the stock of a single product"""

    stock: int = Field(..., ge=0)
    title: Optional[str] = None


class DecrementItem(BaseModel):
    id: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0, description="Units to take out of stock")


class StockDecrementRequest(BaseModel):
    """Schema for an all-or-nothing stock decrement batch"""

    items: List[DecrementItem] = Field(..., min_length=1)


class ProductResponse(BaseModel):
    """Schema for a stored product stock row"""

    product_id: str
    title: Optional[str]
    stock: int
    last_updated: Optional[datetime]

    model_config = {"from_attributes": True}
