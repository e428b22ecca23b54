from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel
from sqlalchemy import Column, String, Numeric, Integer, Boolean, DateTime, ForeignKey, Text, func, CheckConstraint

from models.base import Base, generate_uuid


class Product(Base):
    __tablename__ = 'products'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(12, 2), nullable=False)
    # Category is stored by name, the seller picks it from the categories table
    category = Column(String, nullable=False, default="other")
    image_url = Column(String, nullable=True)
    stock = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    # Kept products of a deleted seller stay referenced by order history without an owner
    seller_id = Column(String(36), ForeignKey('profiles.user_id', ondelete='SET NULL'), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint('stock >= 0', name='check_product_stock_non_negative'),
        CheckConstraint('price > 0', name='check_product_price_positive'),
    )


class ProductDTO(BaseModel):
    id: str | None = None
    title: str | None = None
    description: str | None = None
    price: Decimal | None = None
    category: str | None = None
    image_url: str | None = None
    stock: int | None = None
    is_active: bool | None = None
    seller_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductFormDTO(BaseModel):
    """
    Raw values of the seller's add/edit product form.

    Price and stock arrive as entered, SellerService parses and validates them.
    """
    title: str | None = None
    description: str | None = None
    price: str | Decimal | None = None
    category: str | None = None
    image_url: str | None = None
    stock: str | int | None = None
