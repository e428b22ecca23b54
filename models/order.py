from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey, func, CheckConstraint
from sqlalchemy.orm import relationship

from enums.order_status import OrderStatus
from models.base import Base, generate_uuid


class Order(Base):
    __tablename__ = 'orders'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey('profiles.user_id'), nullable=False)
    total_amount_eur = Column(Numeric(12, 2), nullable=False)
    status = Column(String, nullable=False, default=OrderStatus.PENDING.value)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    items = relationship('OrderItem', back_populates='order', cascade='all, delete-orphan')

    __table_args__ = (
        CheckConstraint('total_amount_eur > 0', name='check_order_total_positive'),
    )


class OrderDTO(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: str | None = None
    user_id: str | None = None
    total_amount_eur: Decimal | None = None
    status: OrderStatus | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def short_id(self) -> str:
        return self.id[:8]
