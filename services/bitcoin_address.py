import logging

from sqlalchemy.ext.asyncio import AsyncSession

from db import session_commit
from exceptions.wallet import WalletAddressNotFoundException
from models.bitcoin_address import BitcoinAddressDTO
from repositories.bitcoin_address import BitcoinAddressRepository
from services.encryption import EncryptionService
from services.profile import ProfileService

logger = logging.getLogger(__name__)


class BitcoinAddressService:
    """
    Deposit addresses of a user. Private keys are stored AES-256-GCM encrypted
    with a key derived from WALLET_KEY_SECRET and the user id.
    """

    @staticmethod
    def _salt_component(user_id: str) -> str:
        return f"user_{user_id}"

    @staticmethod
    async def register(user_id: str, address: str, private_key: str, session: AsyncSession) -> BitcoinAddressDTO:
        await ProfileService.get(user_id, session)
        encrypted = EncryptionService.encrypt_to_text(private_key, BitcoinAddressService._salt_component(user_id))
        address_id = await BitcoinAddressRepository.create(user_id, address, encrypted, session)
        await session_commit(session)
        logger.info(f"Bitcoin address {address} registered for user {user_id}")
        return BitcoinAddressDTO(id=address_id, user_id=user_id, address=address, is_active=True)

    @staticmethod
    async def get_active(user_id: str, session: AsyncSession) -> list[BitcoinAddressDTO]:
        return await BitcoinAddressRepository.get_active_by_user_id(user_id, session)

    @staticmethod
    async def reveal_private_key(user_id: str, address_id: str, session: AsyncSession) -> str:
        encrypted = await BitcoinAddressRepository.get_encrypted_key(address_id, user_id, session)
        if encrypted is None:
            raise WalletAddressNotFoundException(address_id)
        return EncryptionService.decrypt_from_text(encrypted, BitcoinAddressService._salt_component(user_id))
