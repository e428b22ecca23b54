import logging

from sqlalchemy.ext.asyncio import AsyncSession

from db import session_commit
from enums.user_role import UserRole
from exceptions.profile import ProfileNotFoundException
from models.profile import ProfileDTO
from repositories.profile import ProfileRepository
from repositories.wallet_balance import WalletBalanceRepository

logger = logging.getLogger(__name__)


class ProfileService:

    @staticmethod
    async def create_if_not_exist(user_id: str, username: str, session: AsyncSession) -> ProfileDTO:
        profile = await ProfileRepository.get_by_user_id(user_id, session)
        match profile:
            case None:
                await ProfileRepository.create(ProfileDTO(user_id=user_id, username=username), session)
                await WalletBalanceRepository.get_or_create(user_id, session)
                await session_commit(session)
                logger.info(f"Profile created for user {user_id}")
                return await ProfileRepository.get_by_user_id(user_id, session)
            case _:
                return profile

    @staticmethod
    async def get(user_id: str, session: AsyncSession) -> ProfileDTO:
        profile = await ProfileRepository.get_by_user_id(user_id, session)
        if profile is None:
            raise ProfileNotFoundException(user_id)
        return profile

    @staticmethod
    async def get_role(user_id: str, session: AsyncSession) -> UserRole:
        profile = await ProfileService.get(user_id, session)
        return UserRole(profile.role)

    @staticmethod
    async def set_role(user_id: str, role: UserRole, session: AsyncSession) -> None:
        await ProfileService.get(user_id, session)
        await ProfileRepository.update(ProfileDTO(user_id=user_id, role=role), session)
        await session_commit(session)
        logger.info(f"Role of user {user_id} set to {role.value}")
