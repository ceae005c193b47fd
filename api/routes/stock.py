"""Product stock routes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging
from typing import Dict

from api.dependencies import get_db, get_catalog_store, require_admin
from api.responses import APIResponse
from domain.catalog import CatalogStore
from domain.schemas.stock_schemas import (
    StockBulkUpdateRequest,
    StockSetRequest,
    StockDecrementRequest,
    ProductResponse,
)
from services.stock_service import StockService

router = APIRouter(prefix="/api/products", tags=["Stock"])
logger = logging.getLogger("pratofit.api.stock")


@router.get("", response_model=APIResponse[Dict[str, int]])
def get_stock(db: Session = Depends(get_db)):
    """Current stock for every stored product, keyed by product ID"""
    return APIResponse(success=True, data=StockService.get_stock_map(db))


@router.post(
    "/stock",
    response_model=APIResponse[Dict[str, int]],
    dependencies=[Depends(require_admin)],
)
def bulk_update_stock(
    payload: StockBulkUpdateRequest,
    db: Session = Depends(get_db),
    catalog: CatalogStore = Depends(get_catalog_store),
):
    """Set absolute stock for several products (admin panel save)"""
    stock_map = StockService.bulk_set(db, payload.items)
    catalog.apply_stock(stock_map)
    return APIResponse(success=True, message="Stock updated", data=stock_map)


@router.put(
    "/{product_id}/stock",
    response_model=APIResponse[ProductResponse],
    dependencies=[Depends(require_admin)],
)
def set_product_stock(
    product_id: str,
    payload: StockSetRequest,
    db: Session = Depends(get_db),
    catalog: CatalogStore = Depends(get_catalog_store),
):
    """Set absolute stock for one product"""
    product = StockService.set_stock(db, product_id, payload.stock, payload.title)
    catalog.apply_stock(StockService.get_stock_map(db))
    return APIResponse(success=True, data=ProductResponse.model_validate(product))


@router.post("/decrement", response_model=APIResponse[Dict[str, int]])
def decrement_stock(
    payload: StockDecrementRequest,
    db: Session = Depends(get_db),
    catalog: CatalogStore = Depends(get_catalog_store),
):
    """
    Take stock out for an order, all or nothing.

    Responds 409 with `{code: INSUFFICIENT_STOCK, details: {product_id,
    available, requested}}` when any line cannot be covered; no stock is
    changed in that case.
    """
    remaining = StockService.decrement(db, payload.items)
    catalog.apply_stock(StockService.get_stock_map(db))
    return APIResponse(success=True, message="Stock decremented", data=remaining)
