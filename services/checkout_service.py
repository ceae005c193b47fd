from decimal import Decimal
from typing import Iterable, List, Optional, Tuple
from urllib.parse import quote
import logging
import re
import unicodedata

from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import ServiceValidationError
from domain.cart import CartItem
from domain.catalog import CatalogStore, DeliveryZone, KitDefinition
from domain.constants import DELIVERY_ZONES
from domain.enums import FulfillmentType, PaymentMethod
from domain.schemas.checkout_schemas import CheckoutRequest, OrderLine, OrderResponse
from domain.schemas.stock_schemas import DecrementItem
from services.cart_service import CartService, CartSessionStore
from services.catalog_service import CatalogService
from services.stock_service import StockService

logger = logging.getLogger("pratofit.checkout")

SEPARATOR = "--------------------------------"


def normalize_text(text: str) -> str:
    """Lower-case and strip accents ("Catolé" -> "catole")."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).lower().strip()


def format_brl(value: Decimal) -> str:
    """Format as Brazilian reais: Decimal("1234.5") -> "R$ 1.234,50"."""
    text = f"{value:,.2f}"
    return "R$ " + text.replace(",", "_").replace(".", ",").replace("_", ".")


def resolve_neighborhood(
    name: str, zones: Iterable[DeliveryZone] = DELIVERY_ZONES
) -> Optional[Tuple[str, DeliveryZone]]:
    """
    Find the delivery zone for a neighbourhood name.

    Exact match (ignoring accents and case) wins; otherwise the first
    neighbourhood where either name contains the other.
    """
    wanted = normalize_text(name)
    if not wanted:
        return None
    zones = list(zones)
    for zone in zones:
        for nb in zone.neighborhoods:
            if normalize_text(nb) == wanted:
                return nb, zone
    for zone in zones:
        for nb in zone.neighborhoods:
            candidate = normalize_text(nb)
            if wanted in candidate or candidate in wanted:
                return nb, zone
    return None


class CheckoutService:
    @staticmethod
    def validate_request(request: CheckoutRequest) -> dict:
        """Return the field errors of a checkout form (empty when valid)."""
        errors = {}
        name = request.customer_name.strip()
        if not name or len(name.split()) < 2:
            errors["customer_name"] = "Enter first and last name"

        if request.fulfillment_type == FulfillmentType.DELIVERY:
            if not (request.address or "").strip():
                errors["address"] = "Address is required for delivery"
            if not (request.number or "").strip():
                errors["number"] = "House number is required for delivery"
            if not (request.neighborhood or "").strip():
                errors["neighborhood"] = "Neighborhood is required for delivery"
            if len(re.sub(r"\D", "", request.cep or "")) != 8:
                errors["cep"] = "CEP must have 8 digits"
        else:
            if not (request.pickup_time or "").strip():
                errors["pickup_time"] = "Pickup time is required"
        return errors

    @staticmethod
    def delivery_fee(request: CheckoutRequest) -> Tuple[Decimal, Optional[str]]:
        if request.fulfillment_type == FulfillmentType.PICKUP:
            return Decimal("0"), None
        match = resolve_neighborhood(request.neighborhood or "")
        if match is None:
            raise ServiceValidationError(
                f"We do not deliver to {request.neighborhood}",
                details={"neighborhood": request.neighborhood},
            )
        neighborhood, zone = match
        return zone.price, neighborhood

    @staticmethod
    def build_message(
        request: CheckoutRequest,
        kit: KitDefinition,
        lines: List[CartItem],
        fee: Decimal,
        neighborhood: Optional[str],
    ) -> str:
        total = kit.price + fee
        parts = ["*NOVO PEDIDO - PRATOFIT*", "", f"*Cliente:* {request.customer_name.strip()}"]

        if request.fulfillment_type == FulfillmentType.DELIVERY:
            parts.append("*MODO:* ENTREGA")
            parts.append(f"*Endereço:* {request.address.strip()}, Nº {request.number.strip()}")
            parts.append(f"*CEP:* {request.cep}")
            parts.append(f"*Bairro:* {neighborhood} (+{format_brl(fee)})")
        else:
            parts.append("*MODO:* RETIRADA NA LOJA")
            parts.append(f"*Horário de Retirada:* {request.pickup_time}")

        if request.observation:
            parts.append(f"*Obs:* {request.observation}")
        parts.append(SEPARATOR)
        parts.append(f"*Plano:* {kit.name}")
        parts.append(f"*Kit:* {format_brl(kit.price)}")
        if request.fulfillment_type == FulfillmentType.DELIVERY:
            parts.append(f"*Taxa:* {format_brl(fee)}")
        parts.append(f"*TOTAL:* {format_brl(total)}")
        parts.append(SEPARATOR)
        parts.extend(f"• {line.quantity}x {line.item.title}" for line in lines)
        parts.append(SEPARATOR)
        parts.append(
            "*LINK DE PAGAMENTO*"
            if request.payment_method == PaymentMethod.LINK
            else "*PIX*"
        )
        return "\n".join(parts)

    @staticmethod
    def place_order(
        db: Session,
        store: CartSessionStore,
        catalog: CatalogStore,
        session_id,
        request: CheckoutRequest,
    ) -> OrderResponse:
        """
        Turn a complete cart into an order.

        This method:
        1. Refuses carts that are not complete
        2. Validates the customer/fulfilment form
        3. Resolves the delivery fee from the neighbourhood
        4. Decrements stock for every cart line (all or nothing)
        5. Builds the order message and clears the cart

        Raises:
            NotFoundError: If the cart session does not exist
            ServiceValidationError: If the cart is incomplete or the form is invalid
            InsufficientStockError: If stock no longer covers the cart
        """
        session = CartService.get_session(store, session_id)
        engine = session.engine
        if not engine.is_complete():
            kit = engine.kit
            raise ServiceValidationError(
                "Cart is not complete",
                details={
                    "total_reserved": engine.total_reserved(),
                    "total_meals": kit.total_meals if kit else None,
                },
                code="CART_INCOMPLETE",
            )

        errors = CheckoutService.validate_request(request)
        if errors:
            raise ServiceValidationError(
                "Invalid checkout data", details=errors, code="CHECKOUT_INVALID"
            )

        fee, neighborhood = CheckoutService.delivery_fee(request)
        kit = engine.kit
        lines = engine.items()

        try:
            StockService.decrement(
                db, [DecrementItem(id=line.id, quantity=line.quantity) for line in lines]
            )
        finally:
            # Success or not, the shared catalog should show what is left
            CatalogService.refresh(db, catalog)

        message = CheckoutService.build_message(request, kit, lines, fee, neighborhood)
        whatsapp_url = (
            f"{settings.whatsapp_base_url}/{settings.whatsapp_number}?text={quote(message, safe='')}"
        )
        order = OrderResponse(
            kit_id=kit.id,
            kit_name=kit.name,
            kit_price=kit.price,
            delivery_fee=fee,
            total=kit.price + fee,
            fulfillment_type=request.fulfillment_type,
            payment_method=request.payment_method,
            neighborhood=neighborhood,
            lines=[
                OrderLine(item_id=line.id, title=line.item.title, quantity=line.quantity)
                for line in lines
            ],
            message=message,
            whatsapp_url=whatsapp_url,
        )

        engine.clear()
        logger.info(
            f"Order placed from cart {session_id}: kit={kit.id}, "
            f"meals={sum(line.quantity for line in lines)}, total={order.total}"
        )
        return order
