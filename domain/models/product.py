"""
Product stock model.
"""

from sqlalchemy import Column, Text, Integer, TIMESTAMP, CheckConstraint
from sqlalchemy.sql import func

from domain.models.database import Base


class Product(Base):
    """Authoritative sellable stock for one menu item"""

    __tablename__ = "product"

    product_id = Column(Text, primary_key=True)
    title = Column(Text)
    stock = Column(Integer, nullable=False, default=0)
    last_updated = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_product_stock_nonneg"),
    )

    def __repr__(self) -> str:
        return f"<Product {self.product_id} stock={self.stock}>"
