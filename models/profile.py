from datetime import datetime

from pydantic import BaseModel, ConfigDict
from sqlalchemy import Column, String, DateTime, func

from enums.theme import Theme
from enums.user_role import UserRole
from models.base import Base, generate_uuid


class Profile(Base):
    __tablename__ = 'profiles'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    # Identity issued by the authentication provider
    user_id = Column(String(36), nullable=False, unique=True)
    username = Column(String, nullable=False)
    role = Column(String, nullable=False, default=UserRole.USER.value)
    theme_preference = Column(String, nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)


class ProfileDTO(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: str | None = None
    user_id: str | None = None
    username: str | None = None
    role: UserRole | None = None
    theme_preference: Theme | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
