from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_execute, session_flush
from models.profile import Profile, ProfileDTO


class ProfileRepository:
    @staticmethod
    async def get_by_user_id(user_id: str, session: AsyncSession) -> ProfileDTO | None:
        stmt = select(Profile).where(Profile.user_id == user_id)
        profile = await session_execute(stmt, session)
        profile = profile.scalar()
        if profile is not None:
            return ProfileDTO.model_validate(profile, from_attributes=True)
        else:
            return profile

    @staticmethod
    async def create(profile_dto: ProfileDTO, session: AsyncSession) -> str:
        values = profile_dto.model_dump(exclude_none=True)
        profile = Profile(**values)
        session.add(profile)
        await session_flush(session)
        return profile.id

    @staticmethod
    async def update(profile_dto: ProfileDTO, session: AsyncSession) -> None:
        values = profile_dto.model_dump(exclude_none=True, exclude={'id', 'user_id', 'created_at', 'updated_at'})
        stmt = update(Profile).where(Profile.user_id == profile_dto.user_id).values(**values)
        await session_execute(stmt, session)

    @staticmethod
    async def delete_by_user_id(user_id: str, session: AsyncSession) -> None:
        stmt = delete(Profile).where(Profile.user_id == user_id)
        await session_execute(stmt, session)
