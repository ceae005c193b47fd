"""Cart session routes: kit selection, adding/removing meals and checkout"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID

from api.dependencies import get_db, get_catalog_store, get_cart_store
from domain.cart import CartResult
from domain.catalog import CatalogStore
from domain.enums import CartOutcome
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
from domain.schemas.catalog_schemas import KitResponse
from domain.schemas.checkout_schemas import CheckoutRequest, OrderResponse
from services.cart_service import CartService, CartSession, CartSessionStore
from services.checkout_service import CheckoutService

router = APIRouter(prefix="/cart/sessions", tags=["Cart"])
logger = logging.getLogger("pratofit.api.cart")

OUTCOME_MESSAGES = {
    CartOutcome.ADDED: "Item added to the kit",
    CartOutcome.UPDATED: "Quantity updated",
    CartOutcome.REMOVED: "Item removed from the kit",
    CartOutcome.NOOP: "Nothing to change",
    CartOutcome.NO_KIT: "Choose a kit first",
    CartOutcome.UNKNOWN_ITEM: "This item is not on the menu",
    CartOutcome.OUT_OF_STOCK: "Sorry! This item is sold out right now",
    CartOutcome.KIT_LIMIT_REACHED: "Your kit is complete, review your order",
    CartOutcome.ITEM_STOCK_LIMIT_REACHED: "You already added every available unit of this item",
}


def _cart_response(session: CartSession) -> CartResponse:
    engine = session.engine
    kit = engine.kit
    return CartResponse(
        session_id=session.session_id,
        kit=KitResponse.model_validate(kit) if kit else None,
        items=[
            CartItemResponse(
                item_id=line.id,
                title=line.item.title,
                quantity=line.quantity,
                stock=line.item.stock,
                stock_limit_reached=engine.has_reached_stock_limit(line.id),
            )
            for line in engine.items()
        ],
        total_reserved=engine.total_reserved(),
        total_meals=kit.total_meals if kit else None,
        state=engine.state,
        is_complete=engine.is_complete(),
        checkout_enabled=engine.is_complete(),
        notifications=[
            LimitReachedNotification(
                kit_id=n.kit_id,
                total_meals=n.total_meals,
                total_reserved=n.total_reserved,
                trigger=n.trigger,
            )
            for n in session.take_notifications()
        ],
        created_at=session.created_at,
    )


def _action_response(session: CartSession, result: CartResult) -> CartActionResponse:
    return CartActionResponse(
        outcome=result.outcome,
        accepted=result.ok,
        message=OUTCOME_MESSAGES[result.outcome],
        item_id=result.item_id,
        quantity=result.quantity,
        cart=_cart_response(session),
    )


@router.post("", response_model=CartResponse, status_code=status.HTTP_201_CREATED)
def open_cart(
    payload: CartSessionCreate,
    db: Session = Depends(get_db),
    store: CartSessionStore = Depends(get_cart_store),
    catalog: CatalogStore = Depends(get_catalog_store),
):
    """Start a shopping session, optionally with a kit already selected"""
    session = CartService.open_session(db, store, catalog, payload.kit_id)
    return _cart_response(session)


@router.get("/{session_id}", response_model=CartResponse)
def get_cart(session_id: UUID, store: CartSessionStore = Depends(get_cart_store)):
    return _cart_response(CartService.get_session(store, session_id))


@router.put("/{session_id}/kit", response_model=CartResponse)
def select_kit(
    session_id: UUID,
    payload: SelectKitRequest,
    db: Session = Depends(get_db),
    store: CartSessionStore = Depends(get_cart_store),
    catalog: CatalogStore = Depends(get_catalog_store),
):
    """Choose (or change) the kit. The cart is always emptied."""
    session = CartService.select_kit(db, store, catalog, session_id, payload.kit_id)
    return _cart_response(session)


@router.post("/{session_id}/items", response_model=CartActionResponse)
def add_item(
    session_id: UUID,
    payload: AddItemRequest,
    store: CartSessionStore = Depends(get_cart_store),
    catalog: CatalogStore = Depends(get_catalog_store),
):
    """
    Add one unit of a menu item.

    Rejections (sold out, kit full, item stock exhausted) are returned with
    `accepted: false` and the unchanged cart; they are not HTTP errors.
    """
    result = CartService.add_item(store, catalog, session_id, payload.item_id)
    return _action_response(CartService.get_session(store, session_id), result)


@router.patch("/{session_id}/items/{item_id}", response_model=CartActionResponse)
def change_quantity(
    session_id: UUID,
    item_id: str,
    payload: ChangeQuantityRequest,
    store: CartSessionStore = Depends(get_cart_store),
):
    """Change an item's quantity by `delta`; reaching 0 removes the item"""
    result = CartService.change_quantity(store, session_id, item_id, payload.delta)
    return _action_response(CartService.get_session(store, session_id), result)


@router.delete("/{session_id}/items", response_model=CartResponse)
def clear_cart(session_id: UUID, store: CartSessionStore = Depends(get_cart_store)):
    return _cart_response(CartService.clear(store, session_id))


@router.delete("/{session_id}")
def close_cart(session_id: UUID, store: CartSessionStore = Depends(get_cart_store)):
    removed = CartService.close_session(store, session_id)
    return {"status": "ok", "closed": str(session_id), "existed": removed}


@router.post("/{session_id}/checkout", response_model=OrderResponse)
def checkout(
    session_id: UUID,
    payload: CheckoutRequest,
    db: Session = Depends(get_db),
    store: CartSessionStore = Depends(get_cart_store),
    catalog: CatalogStore = Depends(get_catalog_store),
):
    """
    Place the order for a complete cart.

    Returns 400 when the cart is incomplete or the form is invalid and 409
    when stock no longer covers the cart.
    """
    return CheckoutService.place_order(db, store, catalog, session_id, payload)
