from sqlalchemy import Column, String, DateTime, func

from models.base import Base


class ClientPreference(Base):
    """
    Key-value store for per-browser flags that are not tied to an account.

    Examples:
        - oracle-privacy-warning-seen: "true" once the disclaimer was accepted
    """
    __tablename__ = 'client_preferences'

    client_id = Column(String, primary_key=True)
    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
