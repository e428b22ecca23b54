from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel
from sqlalchemy import Column, String, Integer, Numeric, DateTime, ForeignKey, func, CheckConstraint, Index
from sqlalchemy.orm import relationship

from models.base import Base, generate_uuid


class OrderItem(Base):
    __tablename__ = 'order_items'

    __table_args__ = (
        CheckConstraint('quantity > 0', name='ck_order_item_positive_quantity'),
        CheckConstraint('price_eur > 0', name='ck_order_item_positive_price'),
        Index('ix_order_items_order_id', 'order_id'),
        Index('ix_order_items_product_id', 'product_id'),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    order_id = Column(String(36), ForeignKey('orders.id', ondelete='CASCADE'), nullable=False)
    product_id = Column(String(36), ForeignKey('products.id'), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    # Unit price snapshot at checkout time
    price_eur = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)

    order = relationship("Order", back_populates="items")


class OrderItemDTO(BaseModel):
    id: str | None = None
    order_id: str | None = None
    product_id: str | None = None
    quantity: int | None = None
    price_eur: Decimal | None = None
    created_at: datetime | None = None
