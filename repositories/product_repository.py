"""
Product Repository - Data access layer for product stock
"""

from datetime import datetime, timezone
from typing import Dict, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Product


class ProductRepository(BaseRepository[Product]):
    """Repository for product stock rows"""

    def __init__(self, db: Session):
        super().__init__(db, Product)

    def get_by_id(self, product_id: str, with_lock: bool = False) -> Optional[Product]:
        """Get product by ID, optionally locking the row for the transaction"""
        query = self.db.query(Product).filter(Product.product_id == product_id)
        if with_lock:
            # Ignored by backends without row locks (SQLite)
            query = query.with_for_update()
        return query.first()

    def get_stock_map(self) -> Dict[str, int]:
        """Map of product_id to current stock"""
        rows = self.db.execute(select(Product.product_id, Product.stock)).all()
        return {product_id: stock for product_id, stock in rows}

    def current_stock(self, product_id: str) -> int:
        """Stock as stored in the database, 0 for unknown products"""
        stock = self.db.execute(
            select(Product.stock).where(Product.product_id == product_id)
        ).scalar_one_or_none()
        return stock or 0

    def upsert(self, product_id: str, stock: int, title: Optional[str] = None) -> Product:
        """Set absolute stock, creating the row if needed (not committed)"""
        product = self.get_by_id(product_id, with_lock=True)
        now = datetime.now(timezone.utc)
        if product is None:
            product = Product(
                product_id=product_id, title=title, stock=stock, last_updated=now
            )
            self.add(product)
        else:
            product.stock = stock
            if title is not None:
                product.title = title
            product.last_updated = now
        return product

    def decrement_if_available(self, product_id: str, quantity: int) -> bool:
        """
        Compare-and-decrement one product (not committed).

        The stock check and the decrement are a single UPDATE, so two
        transactions cannot both take the last units. Returns False when the
        product is missing or holds fewer than ``quantity`` units.
        """
        result = self.db.execute(
            update(Product)
            .where(Product.product_id == product_id, Product.stock >= quantity)
            .values(
                stock=Product.stock - quantity,
                last_updated=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
