from pydantic import BaseModel, Field
from typing import Optional, List
from decimal import Decimal

from domain.enums import FulfillmentType, PaymentMethod


class CheckoutRequest(BaseModel):
    """Customer, fulfilment and payment choices submitted at checkout"""

    customer_name: str = Field(..., description="Full name (first and last)")
    fulfillment_type: FulfillmentType = FulfillmentType.DELIVERY
    address: Optional[str] = None
    number: Optional[str] = None
    cep: Optional[str] = Field(None, description="Brazilian postal code, 8 digits")
    neighborhood: Optional[str] = None
    pickup_time: Optional[str] = None
    payment_method: PaymentMethod = PaymentMethod.PIX
    observation: Optional[str] = None


class OrderLine(BaseModel):
    item_id: str
    title: str
    quantity: int


class OrderResponse(BaseModel):
    """Order payload handed to the shop's WhatsApp channel"""

    kit_id: str
    kit_name: str
    kit_price: Decimal
    delivery_fee: Decimal
    total: Decimal
    fulfillment_type: FulfillmentType
    payment_method: PaymentMethod
    neighborhood: Optional[str] = None
    lines: List[OrderLine]
    message: str
    whatsapp_url: str
