"""Catalog routes: menu with live stock, kits and delivery zones"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
import logging
from typing import List, Optional

from api.dependencies import get_db, get_catalog_store
from domain.catalog import CatalogStore
from domain.constants import DELIVERY_ZONES, PICKUP_INFO
from domain.schemas.catalog_schemas import (
    MenuItemResponse,
    MenuResponse,
    KitResponse,
    DeliveryZoneResponse,
)
from services.catalog_service import CatalogService

router = APIRouter(prefix="/catalog", tags=["Catalog"])
logger = logging.getLogger("pratofit.api.catalog")


@router.get("/menu", response_model=MenuResponse)
def get_menu(
    q: Optional[str] = Query(None, description="Search title or tags"),
    db: Session = Depends(get_db),
    catalog: CatalogStore = Depends(get_catalog_store),
):
    """Menu grouped by category, with stock refreshed from the database"""
    CatalogService.refresh(db, catalog)
    groups = catalog.by_category(q)
    return MenuResponse(
        categories={
            category: [MenuItemResponse.model_validate(i) for i in items]
            for category, items in groups.items()
        },
        total_items=sum(len(items) for items in groups.values()),
    )


@router.get("/kits", response_model=List[KitResponse])
def get_kits(catalog: CatalogStore = Depends(get_catalog_store)):
    return [KitResponse.model_validate(k) for k in catalog.kits()]


@router.get("/delivery-zones", response_model=List[DeliveryZoneResponse])
def get_delivery_zones():
    return [DeliveryZoneResponse.model_validate(z) for z in DELIVERY_ZONES]


@router.get("/pickup")
def get_pickup_info():
    return PICKUP_INFO
