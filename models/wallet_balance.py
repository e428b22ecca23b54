from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel
from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey, func, CheckConstraint

from models.base import Base, generate_uuid


class WalletBalance(Base):
    __tablename__ = 'wallet_balances'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey('profiles.user_id'), nullable=False, unique=True)
    balance_eur = Column(Numeric(12, 2), nullable=False, default=0)
    balance_btc = Column(Numeric(18, 8), nullable=False, default=0)
    balance_ltc = Column(Numeric(18, 8), nullable=False, default=0)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint('balance_eur >= 0', name='check_wallet_eur_non_negative'),
        CheckConstraint('balance_btc >= 0', name='check_wallet_btc_non_negative'),
        CheckConstraint('balance_ltc >= 0', name='check_wallet_ltc_non_negative'),
    )


class WalletBalanceDTO(BaseModel):
    balance_eur: Decimal = Decimal("0")
    balance_btc: Decimal = Decimal("0")
    balance_ltc: Decimal = Decimal("0")
    updated_at: datetime | None = None
