from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from sqlalchemy import Column, String, Numeric, Integer, DateTime, ForeignKey, Text, func

from enums.transaction_status import TransactionStatus
from enums.transaction_type import TransactionType
from models.base import Base, generate_uuid


class Transaction(Base):
    """Wallet ledger row. Purchases are recorded with a negative EUR amount."""
    __tablename__ = 'transactions'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey('profiles.user_id'), nullable=False)
    amount_eur = Column(Numeric(12, 2), nullable=False)
    amount_btc = Column(Numeric(18, 8), nullable=False, default=0)
    type = Column(String, nullable=False)
    status = Column(String, nullable=False, default=TransactionStatus.PENDING.value)
    description = Column(Text, nullable=True)
    btc_tx_hash = Column(String, nullable=True)
    btc_confirmations = Column(Integer, nullable=True)
    confirmed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)


class TransactionDTO(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: str | None = None
    user_id: str | None = None
    amount_eur: Decimal | None = None
    amount_btc: Decimal | None = None
    type: TransactionType | None = None
    status: TransactionStatus | None = None
    description: str | None = None
    btc_tx_hash: str | None = None
    btc_confirmations: int | None = None
    confirmed_at: datetime | None = None
    created_at: datetime | None = None
