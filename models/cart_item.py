# cart items mirror the client-side cart: a snapshot of title, price, image and
# category is taken when the product is added. The snapshot is for display only,
# checkout always re-reads the current product price and stock.
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel
from sqlalchemy import Column, String, Numeric, Integer, DateTime, func, CheckConstraint, UniqueConstraint

from models.base import Base, generate_uuid
from models.wallet_balance import WalletBalanceDTO


class CartItem(Base):
    __tablename__ = "cart_items"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), nullable=False)
    product_id = Column(String(36), nullable=False)
    title = Column(String, nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    image_url = Column(String, nullable=True)
    category = Column(String, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint('quantity > 0', name='check_cart_quantity_positive'),
        UniqueConstraint('user_id', 'product_id', name='uq_cart_items_user_product'),
    )


class CartItemDTO(BaseModel):
    id: str | None = None
    user_id: str | None = None
    product_id: str | None = None
    title: str | None = None
    price: Decimal | None = None
    quantity: int | None = None
    image_url: str | None = None
    category: str | None = None

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class CartSummaryDTO(BaseModel):
    items: list[CartItemDTO] = []
    item_count: int = 0
    total_eur: Decimal = Decimal("0.00")
    total_btc: Decimal | None = None
    total_ltc: Decimal | None = None
    btc_price_eur: Decimal | None = None
    ltc_price_eur: Decimal | None = None
    wallet: WalletBalanceDTO | None = None
