from typing import Dict, Iterable, List, Optional
from sqlalchemy.orm import Session
import logging

from domain.catalog import MenuItem
from domain.models import Product
from domain.schemas.stock_schemas import DecrementItem, StockItemSet
from repositories import ProductRepository
from app.exceptions import InsufficientStockError

logger = logging.getLogger("pratofit.stock")


class StockService:
    @staticmethod
    def get_stock_map(db: Session) -> Dict[str, int]:
        repo = ProductRepository(db)
        return repo.get_stock_map()

    @staticmethod
    def bulk_set(db: Session, items: List[StockItemSet]) -> Dict[str, int]:
        """
        Upsert absolute stock for several products in one transaction.

        Returns:
            The full stock map after the update
        """
        repo = ProductRepository(db)
        try:
            for it in items:
                repo.upsert(it.id, it.stock, title=it.title)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Error updating stock for %d products", len(items))
            raise

        logger.info("Stock updated for %d products", len(items))
        return repo.get_stock_map()

    @staticmethod
    def set_stock(
        db: Session, product_id: str, stock: int, title: Optional[str] = None
    ) -> Product:
        repo = ProductRepository(db)
        try:
            product = repo.upsert(product_id, stock, title=title)
            db.commit()
            db.refresh(product)
        except Exception:
            db.rollback()
            logger.exception("Error setting stock for product %s", product_id)
            raise

        logger.info("Stock for %s set to %d", product_id, stock)
        return product

    @staticmethod
    def decrement(db: Session, items: List[DecrementItem]) -> Dict[str, int]:
        """
        Take stock out for an order, all or nothing.

        Lines are applied in order inside one transaction. Each line is a
        compare-and-decrement, so a repeated id is checked against the stock
        already reduced by earlier lines. The first line that cannot be
        covered rolls back the whole batch.

        Args:
            db: Database session
            items: Ordered (id, quantity) lines, quantity > 0

        Returns:
            Dict[str, int]: remaining stock of every product in the batch

        Raises:
            InsufficientStockError: naming the product, its available stock
                and the requested quantity; nothing is persisted
        """
        repo = ProductRepository(db)
        try:
            for it in items:
                if not repo.decrement_if_available(it.id, it.quantity):
                    available = repo.current_stock(it.id)
                    raise InsufficientStockError(it.id, available, it.quantity)
            remaining = {it.id: repo.current_stock(it.id) for it in items}
            db.commit()
        except InsufficientStockError as exc:
            db.rollback()
            logger.warning("Stock decrement rejected: %s", exc)
            raise
        except Exception:
            db.rollback()
            logger.exception("Error decrementing stock")
            raise

        logger.info(
            "Decremented stock for %d lines, remaining=%s", len(items), remaining
        )
        return remaining

    @staticmethod
    def seed_defaults(db: Session, items: Iterable[MenuItem]) -> int:
        """
        Create stock rows for menu items that have none yet.

        Existing rows are left alone, so admin changes survive restarts. After
        seeding, every menu item has a row and the decrement sees the same
        stock the catalog shows.

        Returns:
            Number of rows created
        """
        repo = ProductRepository(db)
        try:
            existing = repo.get_stock_map()
            missing = [item for item in items if item.id not in existing]
            for item in missing:
                repo.upsert(item.id, item.stock, title=item.title)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Error seeding default stock")
            raise

        if missing:
            logger.info("Seeded default stock for %d products", len(missing))
        return len(missing)
