import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from domain.catalog import CatalogStore
from services.stock_service import StockService

logger = logging.getLogger("pratofit.catalog")


class CatalogService:
    @staticmethod
    def refresh(db: Session, store: CatalogStore) -> CatalogStore:
        """
        Pull authoritative stock into the catalog store.

        If the stock table cannot be read the store keeps the stock it
        already has; checkout still re-validates through the decrement.
        """
        try:
            stock_map = StockService.get_stock_map(db)
        except SQLAlchemyError as exc:
            logger.warning(
                "Could not read stock; keeping current catalog stock: %s", exc
            )
            return store

        store.apply_stock(stock_map)
        logger.debug("Catalog refreshed with %d stock rows", len(stock_map))
        return store
