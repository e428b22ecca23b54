from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Text, func

from models.base import Base, generate_uuid


class BitcoinAddress(Base):
    __tablename__ = 'bitcoin_addresses'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey('profiles.user_id'), nullable=False)
    address = Column(String, nullable=False)
    # base64(nonce + ciphertext + tag), AES-256-GCM keyed per user
    private_key_encrypted = Column(Text, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)


class BitcoinAddressDTO(BaseModel):
    id: str | None = None
    user_id: str | None = None
    address: str | None = None
    is_active: bool | None = None
    created_at: datetime | None = None
