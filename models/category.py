from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import Column, String, DateTime, func

from models.base import Base, generate_uuid


class Category(Base):
    __tablename__ = 'categories'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String, nullable=False, unique=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)


class CategoryDTO(BaseModel):
    id: str | None = None
    name: str | None = None
