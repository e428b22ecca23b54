from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_execute, session_flush
from models.client_preference import ClientPreference


class ClientPreferenceRepository:
    """
    Repository for per-browser preferences.

    Provides CRUD operations for the (client_id, key) -> value store.
    """

    @staticmethod
    async def get(client_id: str, key: str, session: AsyncSession) -> str | None:
        """
        Get a preference value.

        Returns:
            Value as string, or None if not set
        """
        stmt = select(ClientPreference).where(ClientPreference.client_id == client_id,
                                              ClientPreference.key == key)
        result = await session_execute(stmt, session)
        preference = result.scalar()
        return preference.value if preference else None

    @staticmethod
    async def set(client_id: str, key: str, value: str, session: AsyncSession) -> None:
        """Set a preference value (insert or update)."""
        existing = await ClientPreferenceRepository.get(client_id, key, session)

        if existing is not None:
            stmt = (update(ClientPreference)
                    .where(ClientPreference.client_id == client_id, ClientPreference.key == key)
                    .values(value=value))
            await session_execute(stmt, session)
        else:
            preference = ClientPreference(client_id=client_id, key=key, value=value)
            session.add(preference)
            await session_flush(session)

    @staticmethod
    async def delete(client_id: str, key: str, session: AsyncSession) -> None:
        stmt = delete(ClientPreference).where(ClientPreference.client_id == client_id,
                                              ClientPreference.key == key)
        await session_execute(stmt, session)
