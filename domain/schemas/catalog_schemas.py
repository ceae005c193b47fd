from pydantic import BaseModel
from typing import Optional, List, Dict
from decimal import Decimal


class MenuItemResponse(BaseModel):
    id: str
    title: str
    description: str
    price: Decimal
    original_price: Optional[Decimal] = None
    serving: str
    image_url: str
    category: str
    tags: List[str]
    stock: int
    is_out_of_stock: bool
    is_low_stock: bool

    model_config = {"from_attributes": True}


class MenuResponse(BaseModel):
    """Menu grouped by category, after search filtering"""

    categories: Dict[str, List[MenuItemResponse]]
    total_items: int


class KitResponse(BaseModel):
    id: str
    name: str
    total_meals: int
    price: Decimal
    price_per_meal: Decimal
    description: Optional[str] = None
    highlight: bool = False

    model_config = {"from_attributes": True}


class DeliveryZoneResponse(BaseModel):
    label: str
    price: Decimal
    neighborhoods: List[str]

    model_config = {"from_attributes": True}
